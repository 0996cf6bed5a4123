from __future__ import annotations

import json

from .base import HttpResponse


class EchoTransport:
    """Deterministic offline backend: answers every chat completion with an echo of the last user turn."""

    def post(self, url: str, *, headers: dict[str, str], body: bytes, timeout_s: float) -> HttpResponse:
        payload = json.loads(body)
        messages = payload.get("messages") or []
        last_user = next((m.get("content", "") for m in reversed(messages) if m.get("role") == "user"), "")
        reply = (
            "[MOCK] I received:\n"
            f"{last_user}\n\n"
            f"(model={payload.get('model')}, set KILOCODE_BACKEND=http to call the real API)"
        )
        data = {"choices": [{"message": {"role": "assistant", "content": reply}}]}
        return HttpResponse(status_code=200, body=json.dumps(data).encode("utf-8"))
