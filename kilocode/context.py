from __future__ import annotations

from pathlib import Path
from typing import Protocol

from kilocode.errors import KiloCodeError


class CodeContextProvider(Protocol):
    def selected_code(self) -> str | None:
        """Return the code the user has selected in the host, if any."""
        raise NotImplementedError


class LanguageDetector(Protocol):
    def detect_language(self) -> str | None:
        """Return the language of the active buffer, if known."""
        raise NotImplementedError


class HostContext(CodeContextProvider, LanguageDetector, Protocol):
    pass


class NullContext:
    """Host without selection or language support. Every command must still work."""

    def selected_code(self) -> str | None:
        return None

    def detect_language(self) -> str | None:
        return None


LANGUAGES_BY_SUFFIX: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".rs": "rust",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".go": "go",
    ".java": "java",
    ".kt": "kotlin",
    ".c": "c",
    ".h": "c",
    ".cc": "c++",
    ".cpp": "c++",
    ".hpp": "c++",
    ".cs": "c#",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
    ".scala": "scala",
    ".lua": "lua",
    ".sql": "sql",
    ".html": "html",
    ".css": "css",
    ".sh": "shell",
    ".bash": "shell",
    ".ps1": "powershell",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".json": "json",
    ".md": "markdown",
}


def language_for_path(path: Path | str) -> str | None:
    return LANGUAGES_BY_SUFFIX.get(Path(path).suffix.lower())


def parse_line_range(text: str) -> tuple[int, int]:
    """Parse "A:B" (1-based, inclusive). "A" alone means the single line A."""
    start_s, _, end_s = text.partition(":")
    try:
        start = int(start_s)
        end = int(end_s) if end_s else start
    except ValueError as exc:
        raise KiloCodeError(f"Invalid line range {text!r}, expected A:B") from exc
    if start < 1 or end < start:
        raise KiloCodeError(f"Invalid line range {text!r}, expected 1 <= A <= B")
    return start, end


class FileContext:
    """Code context backed by a file on disk (optionally a line range of it)."""

    def __init__(self, path: Path, lines: tuple[int, int] | None = None) -> None:
        self.path = path
        self.lines = lines

    def selected_code(self) -> str | None:
        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise KiloCodeError(f"Cannot read {self.path}: {exc}") from exc
        if self.lines is not None:
            start, end = self.lines
            all_lines = text.splitlines()
            if start > len(all_lines):
                raise KiloCodeError(f"Line {start} is past the end of {self.path} ({len(all_lines)} lines)")
            text = "\n".join(all_lines[start - 1 : end])
        return text if text.strip() else None

    def detect_language(self) -> str | None:
        return language_for_path(self.path)
