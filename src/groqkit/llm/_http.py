"""Blocking HTTP helpers around ``requests``."""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

import requests

from groqkit.llm._exceptions import APIError, RateLimitError

logger = logging.getLogger(__name__)

SSE_DONE = "[DONE]"


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """Retry policy for transient HTTP failures.

    Attempt ``n`` waits ``backoff_factor ** n`` seconds (or the server's
    ``Retry-After``), never more than ``max_delay``.
    """

    max_retries: int = 3
    backoff_factor: float = 2.0
    max_delay: float = 20.0
    retryable_codes: frozenset[int] = frozenset({429, 500, 502, 503, 504})


NO_RETRY = RetryConfig(max_retries=0)


def _should_retry(status_code: int, attempt: int, config: RetryConfig) -> bool:
    return attempt < config.max_retries and status_code in config.retryable_codes


def _wait_time(attempt: int, config: RetryConfig, retry_after: float | None = None) -> float:
    if retry_after is not None and retry_after > 0:
        return min(retry_after, config.max_delay)
    return min(config.backoff_factor**attempt, config.max_delay)


def _parse_retry_after(raw: str | None) -> float | None:
    if raw is None:
        return None
    with contextlib.suppress(ValueError, TypeError):
        return float(raw)
    return None


def _error_for(status_code: int, body: dict[str, Any] | str, retry_after: str | None) -> APIError:
    if status_code == 429:
        return RateLimitError(status_code, body, _parse_retry_after(retry_after))
    return APIError(status_code, body)


def _raise_for_status(r: requests.Response) -> None:
    if r.ok:
        return
    try:
        body: dict[str, Any] | str = r.json()
    except ValueError:
        body = r.text
    r.close()
    raise _error_for(r.status_code, body, r.headers.get("Retry-After"))


def sse_data(line: str) -> str | None:
    """Return the payload of an SSE ``data:`` line, or None for any other line."""
    if not line.startswith("data:"):
        return None
    return line[len("data:") :].removeprefix(" ")


def iter_sse_data(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        data = sse_data(line)
        if data is not None:
            yield data


def _with_retry(send: Callable[[], requests.Response], retry: RetryConfig | None) -> Any:
    config = retry or NO_RETRY
    last_exc: APIError | None = None
    for attempt in range(config.max_retries + 1):
        if attempt > 0 and last_exc is not None:
            delay = _wait_time(attempt, config, getattr(last_exc, "retry_after", None))
            logger.debug("Retrying after HTTP %s in %.1fs", last_exc.status_code, delay)
            time.sleep(delay)
        try:
            r = send()
            _raise_for_status(r)
            return r
        except APIError as exc:
            last_exc = exc
            if not _should_retry(exc.status_code, attempt, config):
                raise
    raise last_exc  # type: ignore[misc]


def post_json(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float = 60,
    retry: RetryConfig | None = None,
) -> dict[str, Any]:
    """POST JSON and return the parsed response, raising on HTTP errors."""
    r = _with_retry(
        lambda: requests.post(url, headers=headers, json=payload, timeout=timeout), retry
    )
    return r.json()


def get_json(
    url: str,
    headers: dict[str, str],
    timeout: float = 60,
    retry: RetryConfig | None = None,
) -> dict[str, Any]:
    """GET and return the parsed JSON response, raising on HTTP errors."""
    r = _with_retry(lambda: requests.get(url, headers=headers, timeout=timeout), retry)
    return r.json()


def stream_sse(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float = 120,
    retry: RetryConfig | None = None,
) -> Iterator[str]:
    """POST and yield SSE ``data:`` payloads (without the prefix).

    Only the connection is retried; once lines are flowing, errors propagate.
    """
    r = _with_retry(
        lambda: requests.post(url, headers=headers, json=payload, stream=True, timeout=timeout),
        retry,
    )
    with r:
        yield from iter_sse_data(r.iter_lines(decode_unicode=True))
