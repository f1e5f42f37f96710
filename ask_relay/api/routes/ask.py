import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ask_relay.api.schemas import AskRequest, AskResponse, ErrorResponse, HealthResponse
from ask_relay.core.errors import RelayError
from ask_relay.core.relay import RelayService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["qa"])


def get_relay_service(request: Request) -> RelayService:
    return request.app.state.relay_service


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def ask_question(
    payload: AskRequest, service: RelayService = Depends(get_relay_service)
) -> AskResponse:
    try:
        return service.handle_ask(payload.question)
    except RelayError as exc:
        if exc.status_code >= 500:
            logger.exception("Ask failed: %s", exc.detail)
        raise
    except Exception as exc:
        logger.exception("Ask failed with an unexpected error")
        raise HTTPException(
            status_code=500, detail=str(exc) or "Internal Server Error"
        ) from exc


@router.get("/healthz", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse()
