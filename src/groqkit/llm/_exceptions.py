"""Exceptions raised by groqkit."""

from __future__ import annotations

from typing import Any


class ConfigurationError(ValueError):
    """Raised when a request or client is configured with missing or malformed input."""


def _error_detail(body: dict[str, Any] | str) -> dict[str, Any]:
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"]
    return {}


class APIError(Exception):
    """Raised when the Groq API answers with a non-success HTTP status.

    Groq error bodies look like ``{"error": {"message", "type", "code"}}``;
    those parts are exposed as attributes when present.
    """

    def __init__(self, status_code: int, body: dict[str, Any] | str) -> None:
        self.status_code = status_code
        self.body = body
        detail = _error_detail(body)
        self.error_type: str | None = detail.get("type")
        self.error_code: str | None = detail.get("code")
        self.message: str = detail.get("message") or str(body)
        super().__init__(f"HTTP {status_code}: {self.message}")


class RateLimitError(APIError):
    """HTTP 429. ``retry_after`` holds the server's Retry-After hint in seconds."""

    def __init__(
        self,
        status_code: int,
        body: dict[str, Any] | str,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(status_code, body)
        self.retry_after = retry_after


class UnknownToolError(KeyError):
    """Raised in strict mode when the model calls a tool that was not provided."""

    def __init__(self, name: str, tool_call_id: str = "") -> None:
        self.name = name
        self.tool_call_id = tool_call_id
        super().__init__(f"Unknown tool: {name!r}")
