from __future__ import annotations

from pydantic import ValidationError

from kilocode import __version__
from kilocode.config import ClientConfig
from kilocode.errors import ApiError, EmptyResponse, ResponseParseError
from kilocode.schema import ChatRequest, ChatResponse, WireMessage

from .base import AsyncTransport, ChatMessage, HttpResponse, Transport
from .transport import AsyncHttpxTransport, HttpxTransport

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TIMEOUT_S = 60.0
NO_RESPONSE_TEXT = "No response from API"


def encode_request(config: ClientConfig, messages: list[ChatMessage]) -> tuple[str, dict[str, str], bytes]:
    """Return (url, headers, body) for one chat completion call."""
    request = ChatRequest(
        model=config.model,
        messages=[WireMessage(role=m.role, content=m.content) for m in messages],
        temperature=DEFAULT_TEMPERATURE,
        max_tokens=DEFAULT_MAX_TOKENS,
    )
    url = f"{config.base_url}/chat/completions"
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Content-Type": "application/json",
        "User-Agent": f"kilocode/{__version__}",
    }
    return url, headers, request.model_dump_json().encode("utf-8")


def decode_response(response: HttpResponse, *, lenient: bool = False) -> str:
    """
    Turn a raw HTTP response into the first completion's text.

    Some providers report failures as {"error": {...}} under a 200 status, so a
    populated error field fails the call whatever the status.
    """
    text = response.text()

    if not response.ok:
        message = text
        try:
            parsed_error = ChatResponse.model_validate_json(response.body).error
        except ValidationError:
            parsed_error = None
        if parsed_error is not None and parsed_error.message:
            message = parsed_error.message
        raise ApiError(message or "Unknown error", status=response.status_code, body=text)

    try:
        parsed = ChatResponse.model_validate_json(response.body)
    except ValidationError as exc:
        raise ResponseParseError(f"Failed to parse API response: {exc}") from exc

    if parsed.error is not None:
        raise ApiError(parsed.error.message or text, status=response.status_code, body=text)

    if not parsed.choices:
        if lenient:
            return NO_RESPONSE_TEXT
        raise EmptyResponse(NO_RESPONSE_TEXT)
    return parsed.choices[0].message.content


class ChatClient:
    """
    OpenAI-compatible ChatCompletions client.
    Works with OpenAI, Groq, Together, OpenRouter, KiloCode or any gateway speaking the same schema.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport | None = None,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        lenient: bool = False,
    ) -> None:
        self.config = config
        self.transport = transport or HttpxTransport()
        self.timeout_s = timeout_s
        self.lenient = lenient

    def complete(self, messages: list[ChatMessage]) -> str:
        url, headers, body = encode_request(self.config, messages)
        response = self.transport.post(url, headers=headers, body=body, timeout_s=self.timeout_s)
        return decode_response(response, lenient=self.lenient)


class AsyncChatClient:
    """Same request/response handling as ChatClient, for hosts running an event loop."""

    def __init__(
        self,
        config: ClientConfig,
        transport: AsyncTransport | None = None,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        lenient: bool = False,
    ) -> None:
        self.config = config
        self.transport = transport or AsyncHttpxTransport()
        self.timeout_s = timeout_s
        self.lenient = lenient

    async def complete(self, messages: list[ChatMessage]) -> str:
        url, headers, body = encode_request(self.config, messages)
        response = await self.transport.post(url, headers=headers, body=body, timeout_s=self.timeout_s)
        return decode_response(response, lenient=self.lenient)
