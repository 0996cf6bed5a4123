from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class WireMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        # Some providers send content: null (e.g. tool-call turns).
        return "" if v is None else v


class ChatRequest(BaseModel):
    """Body of POST {base_url}/chat/completions."""

    model: str
    messages: list[WireMessage]
    temperature: float | None = None
    max_tokens: int | None = None


class ChatChoice(BaseModel):
    message: WireMessage


class ApiErrorBody(BaseModel):
    message: str | None = None
    type: str | None = None
    code: str | int | None = None


class ChatResponse(BaseModel):
    choices: list[ChatChoice] = Field(default_factory=list)
    error: ApiErrorBody | None = None

    @field_validator("choices", mode="before")
    @classmethod
    def null_choices(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("error", mode="before")
    @classmethod
    def bare_string_error(cls, v: Any) -> Any:
        # Accept {"error": "..."} as well as {"error": {"message": "..."}}.
        if isinstance(v, str):
            return {"message": v}
        return v
