from __future__ import annotations

import logging
from typing import Any, Optional

from ask_relay.api.schemas import AskResponse
from ask_relay.core.errors import InvalidRequest, KnowledgeUnavailable
from ask_relay.core.settings import Settings
from ask_relay.llm.gemini_client import GeminiClient
from ask_relay.retrieval.knowledge import build_context, load_knowledge

logger = logging.getLogger(__name__)


class RelayService:
    """Answers one question from the knowledge file through Gemini.

    Nothing is cached between calls: the knowledge file is re-read and the
    context rebuilt for every question.
    """

    def __init__(self, settings: Settings, client: Optional[GeminiClient] = None) -> None:
        self.settings = settings
        self.client = client or GeminiClient(settings)

    def handle_ask(self, question: Any) -> AskResponse:
        if not isinstance(question, str) or not question.strip():
            raise InvalidRequest()
        try:
            question.encode("utf-8")
        except UnicodeEncodeError as exc:
            # Lone surrogates parse from JSON escapes but cannot be echoed back.
            raise InvalidRequest() from exc

        docs = load_knowledge(self.settings.KNOWLEDGE_DIR)
        if not docs:
            raise KnowledgeUnavailable()

        context = build_context(docs, self.settings.MAX_CONTEXT_CHARS)
        answer = self.client.generate_answer(question, context)
        logger.info(
            "Answered question.",
            extra={
                "question_chars": len(question),
                "context_chars": len(context),
                "answer_chars": len(answer),
            },
        )
        return AskResponse(question=question, answer=answer)
