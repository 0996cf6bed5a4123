from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(Protocol):
    def post(self, url: str, *, headers: dict[str, str], body: bytes, timeout_s: float) -> HttpResponse:
        """Send one POST and return status + raw body. Raise TransportError on network failure."""
        raise NotImplementedError


class AsyncTransport(Protocol):
    async def post(self, url: str, *, headers: dict[str, str], body: bytes, timeout_s: float) -> HttpResponse:
        raise NotImplementedError
