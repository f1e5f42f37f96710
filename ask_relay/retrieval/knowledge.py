from __future__ import annotations

import json
import logging
from pathlib import Path

from ask_relay.api.schemas import KnowledgeDocument
from ask_relay.core.errors import KnowledgeUnavailable
from ask_relay.core.settings import DEFAULT_MAX_CONTEXT_CHARS

logger = logging.getLogger(__name__)

KNOWLEDGE_FILE_NAME = "data.json"


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def load_knowledge(knowledge_dir: Path | str) -> list[KnowledgeDocument]:
    """Load the knowledge file from ``knowledge_dir`` as a one-document list.

    The JSON is parsed and re-serialized compactly so the model sees the same
    text regardless of how the file on disk is formatted. A missing, unreadable
    or malformed file raises ``KnowledgeUnavailable``.
    """
    file_path = Path(knowledge_dir) / KNOWLEDGE_FILE_NAME
    try:
        raw = file_path.read_text(encoding="utf-8")
        data = json.loads(raw, parse_constant=_reject_constant)
        text = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    except OSError as exc:
        logger.warning(
            "Knowledge file could not be read.",
            extra={"path": str(file_path), "error": str(exc)},
        )
        raise KnowledgeUnavailable() from exc
    except (ValueError, RecursionError) as exc:
        logger.warning(
            "Knowledge file is not valid JSON.",
            extra={"path": str(file_path), "error": str(exc)},
        )
        raise KnowledgeUnavailable() from exc

    return [KnowledgeDocument(name=KNOWLEDGE_FILE_NAME, text=text)]


def build_context(
    docs: list[KnowledgeDocument], max_chars: int = DEFAULT_MAX_CONTEXT_CHARS
) -> str:
    all_text = "\n".join(doc.text for doc in docs)
    return all_text[: max(max_chars, 0)]
