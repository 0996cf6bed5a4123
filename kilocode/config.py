from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from kilocode.errors import ConfigError, MissingCredential


@dataclass(frozen=True)
class ClientConfig:
    api_key: str = field(repr=False)
    base_url: str
    model: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


@dataclass(frozen=True)
class Provider:
    base_url: str
    default_model: str


# OpenAI-compatible endpoints that only differ by base URL and model naming.
PROVIDERS: dict[str, Provider] = {
    "openai": Provider("https://api.openai.com/v1", "gpt-3.5-turbo"),
    "groq": Provider("https://api.groq.com/openai/v1", "llama3-70b-8192"),
    "together": Provider("https://api.together.xyz/v1", "meta-llama/Llama-3-70b-chat-hf"),
    "openrouter": Provider("https://openrouter.ai/api/v1", "openai/gpt-4o-mini"),
    "kilocode": Provider("https://api.kilocode.ai/v1", "gpt-4"),
}


@dataclass(frozen=True)
class ConfigKeys:
    """Lookup keys of one configuration source, with that deployment's defaults."""

    api_key: str
    base_url: str
    model: str
    provider: str
    default_base_url: str
    default_model: str


EDITOR_KEYS = ConfigKeys(
    api_key="kilocode.api_key",
    base_url="kilocode.api_endpoint",
    model="kilocode.model",
    provider="kilocode.provider",
    default_base_url="https://api.kilocode.ai/v1",
    default_model="gpt-4",
)

ENV_KEYS = ConfigKeys(
    api_key="KILOCODE_API_KEY",
    base_url="KILOCODE_API_URL",
    model="KILOCODE_MODEL",
    provider="KILOCODE_PROVIDER",
    default_base_url="https://api.openai.com/v1",
    default_model="gpt-3.5-turbo",
)


def _lookup(source: Mapping[str, str], key: str) -> str | None:
    v = source.get(key)
    if v is None or not str(v).strip():
        return None
    return str(v).strip()


def resolve(source: Mapping[str, str], keys: ConfigKeys = EDITOR_KEYS) -> ClientConfig:
    """
    Resolve a ClientConfig from a key-value source (editor settings, os.environ, ...).

    Explicit endpoint/model values win over a provider preset, which wins over
    the deployment defaults carried by ``keys``.
    """
    base_url = keys.default_base_url
    model = keys.default_model

    provider_name = _lookup(source, keys.provider)
    if provider_name is not None:
        preset = PROVIDERS.get(provider_name.lower())
        if preset is None:
            choices = "|".join(PROVIDERS)
            raise ConfigError(f"Unknown provider {provider_name!r} for '{keys.provider}', choose: {choices}")
        base_url = preset.base_url
        model = preset.default_model

    api_key = _lookup(source, keys.api_key)
    if api_key is None:
        raise MissingCredential(keys.api_key)

    return ClientConfig(
        api_key=api_key,
        base_url=_lookup(source, keys.base_url) or base_url,
        model=_lookup(source, keys.model) or model,
    )


def load_client_config() -> ClientConfig:
    # Allow users to keep secrets in a local `.env` (not committed).
    load_dotenv(override=False)
    return resolve(os.environ, ENV_KEYS)


@dataclass(frozen=True)
class Settings:
    backend: str
    timeout_s: float
    log_dir: Path


def load_settings() -> Settings:
    load_dotenv(override=False)

    def getenv(key: str, default: str | None = None) -> str | None:
        v = os.getenv(key)
        if v is None or v == "":
            return default
        return v

    backend = (getenv("KILOCODE_BACKEND", "http") or "http").strip().lower()
    if backend not in ("http", "mock"):
        raise ConfigError(f"Unknown KILOCODE_BACKEND={backend!r}, choose: http|mock")

    raw_timeout = getenv("KILOCODE_TIMEOUT", "60") or "60"
    try:
        timeout_s = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(f"KILOCODE_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from exc

    log_dir = Path(getenv("KILOCODE_LOG_DIR", ".kilocode/logs") or ".kilocode/logs").resolve()

    return Settings(backend=backend, timeout_s=timeout_s, log_dir=log_dir)
