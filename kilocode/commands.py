from __future__ import annotations

from collections.abc import Callable

from kilocode.assistant import CompletionClient, KiloCodeAssistant, validate_input
from kilocode.context import HostContext, NullContext
from kilocode.errors import EmptyPrompt, UnknownCommand
from kilocode.prompts import (
    DEFAULT_DOCS_PROMPT,
    DEFAULT_EXPLAIN_PROMPT,
    DEFAULT_FIX_PROMPT,
    DEFAULT_REFACTOR_PROMPT,
    PromptBuilder,
    doc_style_for,
)

COMMAND_ALIASES: dict[str, str] = {
    "kc": "chat",
    "kc-explain": "explain",
    "kc-generate": "generate",
    "kc-refactor": "refactor",
    "kc-fix": "fix",
    "kc-docs": "docs",
}
COMMANDS = ("chat", "explain", "generate", "refactor", "fix", "docs")


def canonical_command(name: str) -> str:
    name = name.strip().lower()
    name = COMMAND_ALIASES.get(name, name)
    if name not in COMMANDS:
        raise UnknownCommand(name)
    return name


class CommandDispatcher:
    """
    Maps host command invocations onto assistant tasks.

    The client is created on first use, after input validation, so a missing
    credential is only reported for requests that would actually be sent.
    """

    def __init__(
        self,
        client_factory: Callable[[], CompletionClient],
        context: HostContext | None = None,
        *,
        builder: PromptBuilder | None = None,
    ) -> None:
        self.client_factory = client_factory
        self.context = context or NullContext()
        self.builder = builder
        self._assistant: KiloCodeAssistant | None = None

    def assistant(self) -> KiloCodeAssistant:
        if self._assistant is None:
            self._assistant = KiloCodeAssistant(self.client_factory(), self.builder)
        return self._assistant

    def run(self, command: str, args: list[str]) -> str:
        name = canonical_command(command)
        prompt = " ".join(args).strip()
        code = self.context.selected_code()
        language = self.context.detect_language()
        return getattr(self, f"_run_{name}")(prompt, code, language)

    def _run_chat(self, prompt: str, code: str | None, language: str | None) -> str:
        if not prompt:
            raise EmptyPrompt("Please provide a question or prompt for KiloCode.")
        validate_input(prompt)
        validate_input(code)
        return self.assistant().chat(prompt, code)

    def _run_generate(self, prompt: str, code: str | None, language: str | None) -> str:
        if not prompt:
            raise EmptyPrompt("Please provide a description of the code you want to generate.")
        validate_input(prompt)
        validate_input(code)
        return self.assistant().generate_code(prompt, code, language)

    def _run_explain(self, prompt: str, code: str | None, language: str | None) -> str:
        validate_input(prompt)
        if code is None:
            text = f"Explain this code: {prompt}" if prompt else DEFAULT_EXPLAIN_PROMPT
            return self.assistant().chat(text)
        validate_input(code)
        return self.assistant().explain_code(code, language, prompt or None)

    def _run_refactor(self, prompt: str, code: str | None, language: str | None) -> str:
        instructions = prompt or DEFAULT_REFACTOR_PROMPT
        validate_input(instructions)
        if code is None:
            return self.assistant().chat(instructions)
        validate_input(code)
        return self.assistant().refactor_code(code, instructions, language)

    def _run_fix(self, prompt: str, code: str | None, language: str | None) -> str:
        validate_input(prompt)
        if code is None:
            return self.assistant().chat(prompt or DEFAULT_FIX_PROMPT)
        validate_input(code)
        return self.assistant().fix_code(code, prompt or None, language)

    def _run_docs(self, prompt: str, code: str | None, language: str | None) -> str:
        validate_input(prompt)
        if code is None:
            text = f"Generate documentation for: {prompt}" if prompt else DEFAULT_DOCS_PROMPT
            return self.assistant().chat(text)
        validate_input(code)
        return self.assistant().generate_docs(code, language, doc_style_for(language), prompt or None)
