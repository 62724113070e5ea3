import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.vision.client import VisionProvider
from utils.settings import Settings


class StubVisionProvider(VisionProvider):
    """Returns a canned reply (or raises) and records every call."""

    name = "stub"

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls = []
        self.close_count = 0

    async def infer(self, image_bytes: bytes, mime_type: str, instruction: str) -> str:
        self.calls.append((image_bytes, mime_type, instruction))
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self) -> None:
        self.close_count += 1


VALID_REPLY = (
    'Here is the result:\n```json\n'
    '{"date":"2024-03-01","items":[{"name":"血圧","value":"120","unit":"mmHg"}]}'
    '\n```'
)


def make_settings(**overrides) -> Settings:
    values = dict(
        vision_provider="openai",
        openai_api_key="test-key",
        openai_model="gpt-5",
        gemini_api_key=None,
        gemini_model="gemini-2.5-flash",
        strict_item_validation=False,
        log_level="INFO",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def stub_provider():
    return StubVisionProvider(reply=VALID_REPLY)


@pytest.fixture
def make_client():
    clients = []

    def _make(provider: VisionProvider, settings: Settings | None = None) -> TestClient:
        client = TestClient(create_app(settings=settings, provider=provider))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)
