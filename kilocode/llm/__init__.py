from .base import AsyncTransport, ChatMessage, HttpResponse, Transport
from .client import AsyncChatClient, ChatClient, decode_response, encode_request
from .factory import build_client

__all__ = [
    "AsyncChatClient",
    "AsyncTransport",
    "ChatClient",
    "ChatMessage",
    "HttpResponse",
    "Transport",
    "build_client",
    "decode_response",
    "encode_request",
]
