from __future__ import annotations

import json

import pytest

from kilocode.config import ClientConfig
from kilocode.llm import HttpResponse


class FakeTransport:
    """Records every POST and replies with a canned response."""

    def __init__(self, status_code: int = 200, body: bytes | str | dict = b"") -> None:
        if isinstance(body, dict):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.response = HttpResponse(status_code=status_code, body=body)
        self.calls: list[dict] = []

    def post(self, url, *, headers, body, timeout_s):
        self.calls.append({"url": url, "headers": headers, "body": json.loads(body), "timeout_s": timeout_s})
        return self.response


class RecordingClient:
    def __init__(self, answer: str = "ok") -> None:
        self.answer = answer
        self.calls: list[list] = []

    def complete(self, messages):
        self.calls.append(list(messages))
        return self.answer


def ok_body(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_key="sk-test", base_url="https://api.example.com/v1/", model="test-model")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "KILOCODE_API_KEY",
        "KILOCODE_API_URL",
        "KILOCODE_MODEL",
        "KILOCODE_PROVIDER",
        "KILOCODE_BACKEND",
        "KILOCODE_TIMEOUT",
        "KILOCODE_LOG_DIR",
    ):
        monkeypatch.delenv(key, raising=False)
    # keep a developer's local .env out of the tests
    monkeypatch.setattr("kilocode.config.load_dotenv", lambda **kwargs: False)


def read_events(path) -> list[dict]:
    if not path.exists():
        return []
    lines = path.read_text(encoding="utf-8").splitlines()
    return [json.loads(ln) for ln in lines if ln.strip()]
