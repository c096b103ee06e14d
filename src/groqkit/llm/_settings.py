"""Client settings and environment loading."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from groqkit.llm._constants import BASE_URL
from groqkit.llm._exceptions import ConfigurationError
from groqkit.llm._http import RetryConfig

API_KEY_ENV = "GROQ_API_KEY"
BASE_URL_ENV = "GROQ_BASE_URL"
MODEL_ENV = "GROQ_MODEL"
TIMEOUT_ENV = "GROQ_TIMEOUT"


def _resolve_key(api_key: str | None) -> str:
    key = api_key or os.environ.get(API_KEY_ENV, "")
    if not key:
        raise ConfigurationError(
            f"No API key provided. Pass api_key= or set the {API_KEY_ENV} environment variable."
        )
    return key


@dataclass(frozen=True, slots=True)
class GroqSettings:
    """Connection settings shared by every Groq client."""

    api_key: str
    base_url: str = BASE_URL
    model: str | None = None
    timeout: float = 100.0
    retry: RetryConfig = field(default_factory=RetryConfig)

    @classmethod
    def from_env(
        cls,
        *,
        api_key: str | None = None,
        model: str | None = None,
        retry: RetryConfig | None = None,
    ) -> GroqSettings:
        """Build settings from explicit arguments, falling back to ``GROQ_*`` variables."""
        raw_timeout = os.environ.get(TIMEOUT_ENV)
        try:
            timeout = float(raw_timeout) if raw_timeout else 100.0
        except ValueError as exc:
            raise ConfigurationError(
                f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}"
            ) from exc
        return cls(
            api_key=_resolve_key(api_key),
            base_url=os.environ.get(BASE_URL_ENV) or BASE_URL,
            model=model or os.environ.get(MODEL_ENV) or None,
            timeout=timeout,
            retry=retry or RetryConfig(),
        )

    def url(self, path: str) -> str:
        return self.base_url.rstrip("/") + path

    @property
    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    @property
    def headers(self) -> dict[str, str]:
        return {**self.auth_headers, "Content-Type": "application/json"}
