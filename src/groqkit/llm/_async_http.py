"""Async HTTP helpers using ``httpx``.

Each call opens its own ``httpx.AsyncClient``; nothing is pooled between calls.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, TypeAlias

import httpx

from groqkit.llm._exceptions import APIError
from groqkit.llm._http import (
    NO_RETRY,
    RetryConfig,
    _error_for,
    _should_retry,
    _wait_time,
    sse_data,
)

logger = logging.getLogger(__name__)

_Send: TypeAlias = Callable[[httpx.AsyncClient], Awaitable[httpx.Response]]


async def _raise_for_status_httpx(r: httpx.Response) -> None:
    if r.is_success:
        return
    await r.aread()
    try:
        body: dict[str, Any] | str = r.json()
    except ValueError:
        body = r.text
    raise _error_for(r.status_code, body, r.headers.get("Retry-After"))


async def _backoff(attempt: int, config: RetryConfig, last_exc: APIError) -> None:
    delay = _wait_time(attempt, config, getattr(last_exc, "retry_after", None))
    logger.debug("Retrying after HTTP %s in %.1fs", last_exc.status_code, delay)
    await asyncio.sleep(delay)


async def _with_retry(send: _Send, retry: RetryConfig | None) -> httpx.Response:
    config = retry or NO_RETRY
    last_exc: APIError | None = None
    for attempt in range(config.max_retries + 1):
        if attempt > 0 and last_exc is not None:
            await _backoff(attempt, config, last_exc)
        try:
            async with httpx.AsyncClient() as client:
                r = await send(client)
                await _raise_for_status_httpx(r)
                return r
        except APIError as exc:
            last_exc = exc
            if not _should_retry(exc.status_code, attempt, config):
                raise
    raise last_exc  # type: ignore[misc]


async def async_post_json(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float = 60,
    retry: RetryConfig | None = None,
) -> dict[str, Any]:
    """POST JSON asynchronously and return the parsed response."""
    r = await _with_retry(
        lambda client: client.post(url, headers=headers, json=payload, timeout=timeout), retry
    )
    return r.json()


async def async_get_json(
    url: str,
    headers: dict[str, str],
    timeout: float = 60,
    retry: RetryConfig | None = None,
) -> dict[str, Any]:
    """GET asynchronously and return the parsed JSON response."""
    r = await _with_retry(lambda client: client.get(url, headers=headers, timeout=timeout), retry)
    return r.json()


async def async_post_multipart(
    url: str,
    headers: dict[str, str],
    data: dict[str, str],
    files: dict[str, tuple[str, Any]],
    timeout: float = 120,
    retry: RetryConfig | None = None,
) -> dict[str, Any]:
    """POST a multipart form (file upload) and return the parsed JSON response."""
    r = await _with_retry(
        lambda client: client.post(url, headers=headers, data=data, files=files, timeout=timeout),
        retry,
    )
    return r.json()


async def async_post_bytes(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float = 120,
    retry: RetryConfig | None = None,
) -> bytes:
    """POST JSON and return the raw response body (e.g. generated audio)."""
    r = await _with_retry(
        lambda client: client.post(url, headers=headers, json=payload, timeout=timeout), retry
    )
    return r.content


async def async_stream_sse(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float = 120,
    retry: RetryConfig | None = None,
) -> AsyncIterator[str]:
    """POST and yield SSE ``data:`` payloads asynchronously.

    Only the connection is retried; once lines are flowing, errors propagate.
    """
    config = retry or NO_RETRY
    for attempt in range(config.max_retries + 1):
        async with (
            httpx.AsyncClient() as client,
            client.stream("POST", url, headers=headers, json=payload, timeout=timeout) as r,
        ):
            try:
                await _raise_for_status_httpx(r)
            except APIError as exc:
                if not _should_retry(exc.status_code, attempt, config):
                    raise
                failure = exc
            else:
                async for line in r.aiter_lines():
                    data = sse_data(line)
                    if data is not None:
                        yield data
                return
        # Back off only once the failed response is closed.
        await _backoff(attempt + 1, config, failure)
