from __future__ import annotations

from kilocode.config import ClientConfig, Settings, load_client_config

from .client import ChatClient
from .mock import EchoTransport
from .transport import HttpxTransport

MOCK_CONFIG = ClientConfig(api_key="mock", base_url="mock://kilocode", model="mock")


def build_client(settings: Settings, config: ClientConfig | None = None) -> ChatClient:
    backend = settings.backend
    if backend == "mock":
        return ChatClient(config or MOCK_CONFIG, EchoTransport(), timeout_s=settings.timeout_s)
    if backend == "http":
        return ChatClient(config or load_client_config(), HttpxTransport(), timeout_s=settings.timeout_s)
    raise ValueError(f"Unknown KILOCODE_BACKEND={backend!r}, choose: http|mock")
