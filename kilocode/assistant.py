from __future__ import annotations

from collections.abc import Awaitable
from typing import Generic, Protocol, TypeVar

from kilocode.errors import HistoryNotSupported, InputTooLarge
from kilocode.llm import ChatMessage
from kilocode.prompts import PromptBuilder
from kilocode.utils.sanitize import sanitize

MAX_INPUT_CHARS = 100_000

R = TypeVar("R", str, Awaitable[str])


class CompletionClient(Protocol):
    def complete(self, messages: list[ChatMessage]) -> str:
        raise NotImplementedError


class AsyncCompletionClient(Protocol):
    async def complete(self, messages: list[ChatMessage]) -> str:
        raise NotImplementedError


def validate_input(text: str | None, *, limit: int = MAX_INPUT_CHARS) -> None:
    if text is not None and len(text) > limit:
        raise InputTooLarge(len(text), limit)


class _TaskOperations(Generic[R]):
    """
    Task-level operations: validate, build the prompt, call the model, sanitize the answer.

    Validation and prompt building run when the method is called, before any
    request exists, so oversized input never reaches the transport. Only
    ``_ask`` differs between the blocking and the asyncio flavour.
    """

    def __init__(self, builder: PromptBuilder | None = None, *, sanitize_output: bool = True) -> None:
        self.builder = builder or PromptBuilder()
        self.sanitize_output = sanitize_output

    def _ask(self, messages: list[ChatMessage]) -> R:
        raise NotImplementedError

    def _clean(self, out: str) -> str:
        return sanitize(out) if self.sanitize_output else out

    def chat(
        self,
        message: str,
        context: str | None = None,
        history: list[ChatMessage] | None = None,
    ) -> R:
        # Multi-turn threading is undecided; refuse rather than drop turns silently.
        if history:
            raise HistoryNotSupported(
                f"Conversation history is not supported yet ({len(history)} earlier messages given)"
            )
        validate_input(message)
        validate_input(context)
        return self._ask(self.builder.chat(message, context))

    def generate_code(self, prompt: str, context: str | None = None, language: str | None = None) -> R:
        validate_input(prompt)
        validate_input(context)
        return self._ask(self.builder.generate(prompt, context, language))

    def explain_code(self, code: str, language: str | None = None, prompt: str | None = None) -> R:
        validate_input(code)
        validate_input(prompt)
        return self._ask(self.builder.explain(code, language, prompt))

    def refactor_code(self, code: str, instructions: str | None = None, language: str | None = None) -> R:
        validate_input(code)
        validate_input(instructions)
        return self._ask(self.builder.refactor(code, instructions, language))

    def fix_code(self, code: str, error_message: str | None = None, language: str | None = None) -> R:
        validate_input(code)
        validate_input(error_message)
        return self._ask(self.builder.fix(code, error_message, language))

    def generate_docs(
        self,
        code: str,
        language: str | None = None,
        style: str | None = None,
        instructions: str | None = None,
    ) -> R:
        validate_input(code)
        validate_input(instructions)
        return self._ask(self.builder.docs(code, language, style, instructions))


class KiloCodeAssistant(_TaskOperations[str]):
    def __init__(
        self,
        client: CompletionClient,
        builder: PromptBuilder | None = None,
        *,
        sanitize_output: bool = True,
    ) -> None:
        super().__init__(builder, sanitize_output=sanitize_output)
        self.client = client

    def _ask(self, messages: list[ChatMessage]) -> str:
        return self._clean(self.client.complete(messages))


class AsyncKiloCodeAssistant(_TaskOperations[Awaitable[str]]):
    """Same operations for asyncio hosts; every method returns an awaitable."""

    def __init__(
        self,
        client: AsyncCompletionClient,
        builder: PromptBuilder | None = None,
        *,
        sanitize_output: bool = True,
    ) -> None:
        super().__init__(builder, sanitize_output=sanitize_output)
        self.client = client

    async def _ask(self, messages: list[ChatMessage]) -> str:
        return self._clean(await self.client.complete(messages))
