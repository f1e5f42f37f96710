from __future__ import annotations

from typing import Optional

INVALID_BODY_DETAIL = "Invalid body: { question: string } expected"
NO_KNOWLEDGE_DETAIL = "No knowledge loaded. Add JSON files in ./knowledge_json/ first."


class RelayError(Exception):
    """Base error carrying the HTTP status and detail returned to the caller."""

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidRequest(RelayError):
    status_code = 400

    def __init__(self, detail: str = INVALID_BODY_DETAIL) -> None:
        super().__init__(detail)


class KnowledgeUnavailable(RelayError):
    status_code = 400

    def __init__(self, detail: str = NO_KNOWLEDGE_DETAIL) -> None:
        super().__init__(detail)


class UpstreamError(RelayError):
    status_code = 500

    def __init__(
        self,
        detail: str,
        upstream_status: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(detail)
        self.upstream_status = upstream_status
        self.body = body
