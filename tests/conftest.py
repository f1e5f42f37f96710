import json
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ask_relay.core.settings import Settings
from ask_relay.llm.gemini_client import GeminiClient
from ask_relay.main import create_app
from fakes import FakeSession


@pytest.fixture
def knowledge_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "knowledge_json"
    directory.mkdir()
    (directory / "data.json").write_text(json.dumps({"a": 1}), encoding="utf-8")
    return directory


@pytest.fixture
def settings(knowledge_dir: Path) -> Settings:
    return Settings(GEMINI_API_KEY="test-key", KNOWLEDGE_DIR=knowledge_dir)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def gemini_client(settings: Settings, fake_session: FakeSession) -> GeminiClient:
    return GeminiClient(settings, session=fake_session)


@pytest_asyncio.fixture
async def client(settings, gemini_client):
    app = create_app(settings, gemini_client)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
