from __future__ import annotations

import logging
import time
import uuid
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ask_relay.api.routes import api_router
from ask_relay.core.errors import InvalidRequest, RelayError
from ask_relay.core.logging import configure_logging, reset_request_id, set_request_id
from ask_relay.core.relay import RelayService
from ask_relay.core.settings import Settings, SettingsError
from ask_relay.llm.gemini_client import GeminiClient

logger = logging.getLogger("ask_relay")

REQUEST_ID_HEADER = "X-Request-ID"


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected request body.", extra={"errors": exc.errors()})
    return await relay_error_handler(request, InvalidRequest())


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[GeminiClient] = None,
) -> FastAPI:
    """Build the relay app around one explicit ``Settings`` instance.

    With no ``settings`` the environment is read, so ``uvicorn --factory``
    fails at boot with a ``SettingsError`` when GEMINI_API_KEY is absent.
    """
    if settings is None:
        settings = Settings.from_env()
        configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Relays questions about a JSON knowledge file to Gemini",
        version=settings.VERSION,
    )
    app.state.settings = settings
    app.state.relay_service = RelayService(settings, client)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = set_request_id(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "Request handled.",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            reset_request_id(token)

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(api_router)
    return app


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    try:
        settings = Settings.from_env()
    except SettingsError as exc:
        raise SystemExit(f"Cannot start relay: {exc}") from exc

    configure_logging(settings.LOG_LEVEL)
    bind_host = host or settings.HOST
    bind_port = port or settings.PORT
    logger.info("Server running at http://%s:%s", bind_host, bind_port)
    uvicorn.run(create_app(settings), host=bind_host, port=bind_port, log_config=None)
