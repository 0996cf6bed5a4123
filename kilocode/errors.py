from __future__ import annotations


class KiloCodeError(Exception):
    """Base class for every failure surfaced to the caller.

    ``str(err)`` is the human-readable message shown by the host.
    """


class ConfigError(KiloCodeError):
    pass


class MissingCredential(ConfigError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"API key not configured. Please set '{key}'.")


class InputTooLarge(KiloCodeError):
    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Input too large ({length:,} characters, max {limit:,})")


class EmptyPrompt(KiloCodeError):
    pass


class UnknownCommand(KiloCodeError):
    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unknown command: {command}")


class HistoryNotSupported(KiloCodeError):
    pass


class TransportError(KiloCodeError):
    pass


class ApiError(KiloCodeError):
    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        self.status = status
        self.body = body
        prefix = f"API error ({status})" if status is not None else "API error"
        super().__init__(f"{prefix}: {message}")


class ResponseParseError(KiloCodeError):
    pass


class EmptyResponse(KiloCodeError):
    pass
