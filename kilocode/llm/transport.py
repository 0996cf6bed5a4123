from __future__ import annotations

import httpx

from kilocode.errors import TransportError

from .base import HttpResponse


class HttpxTransport:
    """Blocking transport: one short-lived httpx.Client per request."""

    def __init__(self, *, transport: httpx.BaseTransport | None = None) -> None:
        # `transport` lets tests plug in httpx.MockTransport.
        self._transport = transport

    def post(self, url: str, *, headers: dict[str, str], body: bytes, timeout_s: float) -> HttpResponse:
        try:
            with httpx.Client(timeout=timeout_s, transport=self._transport) as client:
                r = client.post(url, content=body, headers=headers)
                return HttpResponse(status_code=r.status_code, body=r.content)
        except httpx.TimeoutException as exc:
            raise TransportError(f"API request timed out after {timeout_s:g}s: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"API request failed: {exc}") from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # Malformed endpoint, or a header value (API key) that is not ASCII.
            raise TransportError(f"Cannot build API request: {type(exc).__name__}: {exc}") from exc


class AsyncHttpxTransport:
    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def post(self, url: str, *, headers: dict[str, str], body: bytes, timeout_s: float) -> HttpResponse:
        try:
            async with httpx.AsyncClient(timeout=timeout_s, transport=self._transport) as client:
                r = await client.post(url, content=body, headers=headers)
                return HttpResponse(status_code=r.status_code, body=r.content)
        except httpx.TimeoutException as exc:
            raise TransportError(f"API request timed out after {timeout_s:g}s: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"API request failed: {exc}") from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # Malformed endpoint, or a header value (API key) that is not ASCII.
            raise TransportError(f"Cannot build API request: {type(exc).__name__}: {exc}") from exc
