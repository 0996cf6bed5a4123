from __future__ import annotations

import re

from kilocode.llm import ChatMessage

_PERSONA = "You are KiloCode, an AI coding assistant."

CHAT_SYSTEM = (
    f"{_PERSONA} Help users with their coding questions, explain code, generate code, refactor, "
    "fix bugs, and generate documentation. Be concise and helpful."
)
EXPLAIN_SYSTEM = (
    f"{_PERSONA} Explain the provided code in detail, including its purpose, how it works, "
    "and any potential issues. Be clear and educational."
)
GENERATE_SYSTEM = (
    f"{_PERSONA} Generate code based on the user's description. Provide clean, well-commented, "
    "and efficient code. Include necessary imports and structure."
)
REFACTOR_SYSTEM = (
    f"{_PERSONA} Suggest refactoring improvements for the provided code to make it more readable, "
    "maintainable, and efficient. Explain your changes."
)
FIX_SYSTEM = (
    f"{_PERSONA} Analyze the provided code for bugs and issues, then provide fixes. "
    "Explain what was wrong and how your fix addresses it."
)
DOCS_SYSTEM = (
    f"{_PERSONA} Generate comprehensive documentation for the provided code, including function "
    "descriptions, parameter explanations, return values, and usage examples. "
    "Use standard documentation format."
)

SYSTEM_PROMPTS: dict[str, str] = {
    "chat": CHAT_SYSTEM,
    "explain": EXPLAIN_SYSTEM,
    "generate": GENERATE_SYSTEM,
    "refactor": REFACTOR_SYSTEM,
    "fix": FIX_SYSTEM,
    "docs": DOCS_SYSTEM,
}

TASK_KINDS = tuple(SYSTEM_PROMPTS)

# Prompts used when the caller gives no free text.
DEFAULT_EXPLAIN_PROMPT = "Explain this code in detail, including its purpose, how it works, and any potential issues."
DEFAULT_REFACTOR_PROMPT = (
    "Suggest refactoring improvements for this code to make it more readable, maintainable, and efficient."
)
DEFAULT_FIX_PROMPT = "Analyze this code for bugs and issues, then provide fixes."
DEFAULT_DOCS_PROMPT = (
    "Generate comprehensive documentation for this code, including function descriptions, "
    "parameter explanations, and usage examples."
)

DOC_STYLES: dict[str, str] = {
    "rust": "rustdoc",
    "python": "docstring",
    "javascript": "JSDoc",
    "typescript": "TSDoc",
    "java": "Javadoc",
    "kotlin": "KDoc",
    "go": "godoc",
    "c#": "XML doc comment",
    "csharp": "XML doc comment",
    "c": "Doxygen",
    "c++": "Doxygen",
    "cpp": "Doxygen",
    "php": "PHPDoc",
    "ruby": "YARD",
}


def system_prompt(task_kind: str) -> str:
    return SYSTEM_PROMPTS.get(task_kind, CHAT_SYSTEM)


def doc_style_for(language: str | None) -> str | None:
    if not language:
        return None
    return DOC_STYLES.get(language.strip().lower())


def fence_code(code: str) -> str:
    """Wrap code in a fence longer than any backtick run it contains."""
    longest = max((len(m) for m in re.findall(r"`+", code)), default=0)
    fence = "`" * max(3, longest + 1)
    return f"{fence}\n{code}\n{fence}"


def _this_code(language: str | None) -> str:
    return f"this {language} code" if language else "this code"


class PromptBuilder:
    """Turns a task kind plus caller text into the [system, user] message pair."""

    def build(self, task_kind: str, user_text: str, code_context: str | None = None) -> list[ChatMessage]:
        if code_context is not None:
            content = f"Here is the code context:\n{fence_code(code_context)}\n\n{user_text}"
        else:
            content = user_text
        return [
            ChatMessage("system", system_prompt(task_kind)),
            ChatMessage("user", content),
        ]

    def chat(self, message: str, context: str | None = None) -> list[ChatMessage]:
        return self.build("chat", message, context)

    def generate(self, prompt: str, context: str | None = None, language: str | None = None) -> list[ChatMessage]:
        if language:
            text = f"Generate {language} code for: {prompt}"
        else:
            text = f"Generate code for: {prompt}"
        return self.build("generate", text, context)

    def explain(self, code: str, language: str | None = None, prompt: str | None = None) -> list[ChatMessage]:
        if prompt and prompt.strip():
            text = f"Explain {_this_code(language)}: {prompt.strip()}"
        else:
            text = f"Explain {_this_code(language)} in detail."
        return self.build("explain", text, code)

    def refactor(self, code: str, instructions: str | None = None, language: str | None = None) -> list[ChatMessage]:
        instructions = (instructions or "").strip() or DEFAULT_REFACTOR_PROMPT
        text = f"Refactor {_this_code(language)}. {instructions}"
        return self.build("refactor", text, code)

    def fix(self, code: str, error_message: str | None = None, language: str | None = None) -> list[ChatMessage]:
        text = "Fix the bugs in this code."
        if error_message and error_message.strip():
            text = f"{text} Error: {error_message.strip()}"
        if language:
            text = f"{text} (Language: {language})"
        return self.build("fix", text, code)

    def docs(
        self,
        code: str,
        language: str | None = None,
        style: str | None = None,
        instructions: str | None = None,
    ) -> list[ChatMessage]:
        kind = f"{style} documentation" if style else "documentation"
        text = f"Generate {kind} for {_this_code(language)}."
        if instructions and instructions.strip():
            text = f"{text} {instructions.strip()}"
        return self.build("docs", text, code)
