from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ask_relay.core.errors import UpstreamError
from ask_relay.core.settings import Settings
from ask_relay.llm.prompts import render_ask_prompt

logger = logging.getLogger(__name__)

GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.7,
    "maxOutputTokens": 512,
    "thinkingConfig": {"thinkingBudget": 0},
}

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_NONE"}
    for category in (
        "HARM_CATEGORY_DANGEROUS_CONTENT",
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    )
]


def build_request_body(prompt: str) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": GENERATION_CONFIG,
        "safetySettings": SAFETY_SETTINGS,
    }


def extract_answer_text(payload: Any) -> str:
    """Return the first candidate's first text part, or "" if it is absent."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    if text is None:
        return ""
    return str(text).strip()


class GeminiClient:
    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        base = self._settings.GEMINI_API_BASE.rstrip("/")
        return f"{base}/models/{self._settings.GEMINI_MODEL}:generateContent"

    def generate_answer(self, question: str, context: str) -> str:
        prompt = render_ask_prompt(question, context)
        try:
            resp = self._session.post(
                self.endpoint,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self._settings.GEMINI_API_KEY,
                },
                json=build_request_body(prompt),
                timeout=self._settings.GEMINI_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            raise UpstreamError(f"Gemini API request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            body = resp.text
            logger.warning(
                "Gemini API returned an error status.",
                extra={"upstream_status": resp.status_code},
            )
            raise UpstreamError(
                f"Gemini API error: {resp.status_code} {body}",
                upstream_status=resp.status_code,
                body=body,
            )

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("Gemini API returned a non-JSON body.")
            return ""
        return extract_answer_text(payload)
