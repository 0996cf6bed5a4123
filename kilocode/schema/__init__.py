from .chat import ApiErrorBody, ChatChoice, ChatRequest, ChatResponse, WireMessage

__all__ = ["ApiErrorBody", "ChatChoice", "ChatRequest", "ChatResponse", "WireMessage"]
