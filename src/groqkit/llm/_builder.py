"""Fluent builder for chat completion request payloads.

The builder is an immutable record: every ``with_*`` call returns a new
builder, and :func:`build_payload` turns a builder into the wire payload.
Setters copy the dicts and lists they are given.
Optional fields left unset never appear in the payload, because the API
treats an absent field differently from one sent with its default value.

Usage::

    payload = (
        ChatCompletionRequestBuilder.create()
        .with_model("llama-3.3-70b-versatile")
        .with_system_prompt("Answer in one word.")
        .with_user_prompt("Capital of France?")
        .with_temperature(0.2)
        .build()
    )
"""

from __future__ import annotations

import copy
import json
import logging
import warnings
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any, Self

from groqkit.llm._constants import ASSISTANT_ROLE, SYSTEM_ROLE, USER_ROLE
from groqkit.llm._exceptions import ConfigurationError
from groqkit.llm._types import ConversationItem, Tool, message_to_wire

logger = logging.getLogger(__name__)

# Wire key order of the optional fields; deprecated keys come last.
OPTIONAL_FIELDS: tuple[str, ...] = (
    "response_format",
    "citation_options",
    "compound_custom",
    "disable_tool_validation",
    "documents",
    "frequency_penalty",
    "include_reasoning",
    "logit_bias",
    "logprobs",
    "max_completion_tokens",
    "metadata",
    "n",
    "parallel_tool_calls",
    "presence_penalty",
    "reasoning_effort",
    "reasoning_format",
    "search_settings",
    "seed",
    "service_tier",
    "stop",
    "store",
    "stream",
    "stream_options",
    "temperature",
    "tool_choice",
    "tools",
    "top_logprobs",
    "top_p",
    "user",
    "exclude_domains",
    "function_call",
    "functions",
    "include_domains",
    "max_tokens",
)

DEPRECATED_FIELDS: dict[str, str] = {
    "exclude_domains": "with_search_settings(exclude_domains=...)",
    "function_call": "with_tool_choice()",
    "functions": "with_tools()",
    "include_domains": "with_search_settings(include_domains=...)",
    "max_tokens": "with_max_completion_tokens()",
}


@dataclass(frozen=True, slots=True, kw_only=True)
class ChatCompletionRequestBuilder:
    """Immutable accumulator of chat completion request parameters."""

    # Required
    model: str | None = None
    messages: tuple[dict[str, Any], ...] | None = None

    # Convenience message inputs, ignored when ``messages`` is set
    system_prompt: str | None = None
    assistant_prompt: str | None = None
    user_prompt: str | None = None
    image_url: str | None = None

    # Optional wire fields, declared in OPTIONAL_FIELDS order
    response_format: dict[str, Any] | None = None
    citation_options: str | None = None
    compound_custom: dict[str, Any] | None = None
    disable_tool_validation: bool | None = None
    documents: tuple[dict[str, Any], ...] | None = None
    frequency_penalty: float | None = None
    include_reasoning: bool | None = None
    logit_bias: dict[str, float] | None = None
    logprobs: bool | None = None
    max_completion_tokens: int | None = None
    metadata: dict[str, Any] | None = None
    n: int | None = None
    parallel_tool_calls: bool | None = None
    presence_penalty: float | None = None
    reasoning_effort: str | None = None
    reasoning_format: str | None = None
    search_settings: dict[str, Any] | None = None
    seed: int | None = None
    service_tier: str | None = None
    stop: str | tuple[str, ...] | None = None
    store: bool | None = None
    stream: bool | None = None
    stream_options: dict[str, Any] | None = None
    temperature: float | None = None
    tool_choice: str | dict[str, Any] | None = None
    tools: tuple[dict[str, Any], ...] | None = None
    top_logprobs: int | None = None
    top_p: float | None = None
    user: str | None = None

    # Deprecated wire fields, still emitted when set
    exclude_domains: tuple[str, ...] | None = None
    function_call: str | dict[str, Any] | None = None
    functions: tuple[dict[str, Any], ...] | None = None
    include_domains: tuple[str, ...] | None = None
    max_tokens: int | None = None

    @classmethod
    def create(cls) -> Self:
        """Return an empty builder."""
        return cls()

    # --- Required / messages ---

    def with_model(self, model: str) -> Self:
        """Set the model id, e.g. ``"llama-3.3-70b-versatile"``."""
        return replace(self, model=model)

    def with_messages(self, messages: Sequence[ConversationItem | dict[str, Any]]) -> Self:
        """Set the full message list. Takes precedence over the convenience prompts."""
        messages_wire = tuple(copy.deepcopy(message_to_wire(m)) for m in messages)
        return replace(self, messages=messages_wire)

    def with_user_prompt(self, prompt: str) -> Self:
        """Set the user message. Blank prompts are rejected immediately."""
        if not prompt or not prompt.strip():
            raise ConfigurationError("User prompt must not be blank.")
        return replace(self, user_prompt=prompt)

    def with_system_prompt(self, prompt: str) -> Self:
        return replace(self, system_prompt=prompt)

    def with_assistant_prompt(self, prompt: str) -> Self:
        """Seed an assistant message placed between the system and user messages."""
        return replace(self, assistant_prompt=prompt)

    def with_image_url(self, url: str) -> Self:
        """Attach an image (URL or data URI) to the user message."""
        return replace(self, image_url=url)

    # --- Optional parameters ---

    def with_response_format(self, json_schema: str) -> Self:
        """Request structured output matching a JSON schema given as a JSON string.

        The string is parsed here, so malformed JSON fails before ``build()``.
        """
        try:
            schema = json.loads(json_schema)
        except (json.JSONDecodeError, TypeError) as exc:
            raise ConfigurationError(f"Response format is not valid JSON: {exc}") from exc
        return replace(self, response_format={"type": "json_schema", "json_schema": schema})

    def with_json_mode(self) -> Self:
        """Request a JSON object response without a schema."""
        return replace(self, response_format={"type": "json_object"})

    def with_citation_options(self, citation_options: str) -> Self:
        """``"enabled"`` or ``"disabled"``."""
        return replace(self, citation_options=citation_options)

    def with_compound_custom(self, compound_custom: dict[str, Any]) -> Self:
        return replace(self, compound_custom=copy.deepcopy(compound_custom))

    def with_disable_tool_validation(self, disable_tool_validation: bool) -> Self:
        return replace(self, disable_tool_validation=disable_tool_validation)

    def with_documents(self, documents: Sequence[dict[str, Any]]) -> Self:
        return replace(self, documents=copy.deepcopy(tuple(documents)))

    def with_frequency_penalty(self, frequency_penalty: float) -> Self:
        """Number between -2.0 and 2.0."""
        return replace(self, frequency_penalty=frequency_penalty)

    def with_include_reasoning(self, include_reasoning: bool) -> Self:
        return replace(self, include_reasoning=include_reasoning)

    def with_logit_bias(self, logit_bias: dict[str, float]) -> Self:
        return replace(self, logit_bias=copy.deepcopy(logit_bias))

    def with_logprobs(self, logprobs: bool) -> Self:
        return replace(self, logprobs=logprobs)

    def with_max_completion_tokens(self, max_completion_tokens: int) -> Self:
        return replace(self, max_completion_tokens=max_completion_tokens)

    def with_metadata(self, metadata: dict[str, Any]) -> Self:
        return replace(self, metadata=copy.deepcopy(metadata))

    def with_n(self, n: int) -> Self:
        """Number of choices to generate (the API currently only accepts 1)."""
        return replace(self, n=n)

    def with_parallel_tool_calls(self, parallel_tool_calls: bool) -> Self:
        return replace(self, parallel_tool_calls=parallel_tool_calls)

    def with_presence_penalty(self, presence_penalty: float) -> Self:
        """Number between -2.0 and 2.0."""
        return replace(self, presence_penalty=presence_penalty)

    def with_reasoning_effort(self, reasoning_effort: str) -> Self:
        """One of ``"none"``, ``"default"``, ``"low"``, ``"medium"``, ``"high"``."""
        return replace(self, reasoning_effort=reasoning_effort)

    def with_reasoning_format(self, reasoning_format: str) -> Self:
        """One of ``"hidden"``, ``"raw"``, ``"parsed"``."""
        return replace(self, reasoning_format=reasoning_format)

    def with_search_settings(self, search_settings: dict[str, Any]) -> Self:
        return replace(self, search_settings=copy.deepcopy(search_settings))

    def with_seed(self, seed: int) -> Self:
        return replace(self, seed=seed)

    def with_service_tier(self, service_tier: str) -> Self:
        return replace(self, service_tier=service_tier)

    def with_stop(self, stop: str | Sequence[str]) -> Self:
        """A stop string or up to four stop sequences."""
        return replace(self, stop=stop if isinstance(stop, str) else tuple(stop))

    def with_store(self, store: bool) -> Self:
        return replace(self, store=store)

    def with_stream(self, stream: bool) -> Self:
        return replace(self, stream=stream)

    def with_stream_options(self, stream_options: dict[str, Any]) -> Self:
        return replace(self, stream_options=copy.deepcopy(stream_options))

    def with_temperature(self, temperature: float) -> Self:
        """Number between 0 and 2."""
        return replace(self, temperature=temperature)

    def with_tool_choice(self, tool_choice: str | dict[str, Any]) -> Self:
        """``"none"``, ``"auto"``, ``"required"`` or a specific function selector."""
        return replace(self, tool_choice=copy.deepcopy(tool_choice))

    def with_tools(self, tools: Sequence[Tool | dict[str, Any]]) -> Self:
        wire = tuple(t.to_wire() if isinstance(t, Tool) else t for t in tools)
        return replace(self, tools=copy.deepcopy(wire))

    def with_top_logprobs(self, top_logprobs: int) -> Self:
        return replace(self, top_logprobs=top_logprobs)

    def with_top_p(self, top_p: float) -> Self:
        return replace(self, top_p=top_p)

    def with_user(self, user: str) -> Self:
        """End-user identifier (not the user prompt)."""
        return replace(self, user=user)

    # --- Deprecated parameters ---

    def with_exclude_domains(self, exclude_domains: Sequence[str]) -> Self:
        _warn_deprecated("exclude_domains")
        return replace(self, exclude_domains=tuple(exclude_domains))

    def with_function_call(self, function_call: str | dict[str, Any]) -> Self:
        _warn_deprecated("function_call")
        return replace(self, function_call=copy.deepcopy(function_call))

    def with_functions(self, functions: Sequence[dict[str, Any]]) -> Self:
        _warn_deprecated("functions")
        return replace(self, functions=copy.deepcopy(tuple(functions)))

    def with_include_domains(self, include_domains: Sequence[str]) -> Self:
        _warn_deprecated("include_domains")
        return replace(self, include_domains=tuple(include_domains))

    def with_max_tokens(self, max_tokens: int) -> Self:
        _warn_deprecated("max_tokens")
        return replace(self, max_tokens=max_tokens)

    def build(self) -> dict[str, Any]:
        """Return the request payload. See :func:`build_payload`."""
        return build_payload(self)


def _warn_deprecated(name: str) -> None:
    warnings.warn(
        f"{name!r} is deprecated; use {DEPRECATED_FIELDS[name]} instead.",
        DeprecationWarning,
        stacklevel=3,
    )


def _user_content(prompt: str, image_url: str | None) -> str | list[dict[str, Any]]:
    if image_url is None:
        return prompt
    return [
        {"type": "text", "text": prompt},
        {"type": "image_url", "image_url": {"url": image_url}},
    ]


def resolve_messages(config: ChatCompletionRequestBuilder) -> list[dict[str, Any]]:
    """Return the message list: the raw list if set, else one built from the prompts."""
    if config.messages is not None:
        if not config.messages:
            raise ConfigurationError("Messages are required; with_messages() got an empty list.")
        if any(
            v is not None
            for v in (
                config.system_prompt,
                config.assistant_prompt,
                config.user_prompt,
                config.image_url,
            )
        ):
            logger.debug("Explicit messages set; ignoring convenience prompt fields")
        return copy.deepcopy(list(config.messages))

    if config.user_prompt is None:
        raise ConfigurationError(
            "Messages are required. Use with_user_prompt() or with_messages() to set them."
        )

    messages: list[dict[str, Any]] = []
    if config.system_prompt is not None:
        messages.append({"role": SYSTEM_ROLE, "content": config.system_prompt})
    if config.assistant_prompt is not None:
        messages.append({"role": ASSISTANT_ROLE, "content": config.assistant_prompt})
    user_content = _user_content(config.user_prompt, config.image_url)
    messages.append({"role": USER_ROLE, "content": user_content})
    return messages


def _to_wire_value(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_to_wire_value(v) for v in value]
    return copy.deepcopy(value)


def build_payload(config: ChatCompletionRequestBuilder) -> dict[str, Any]:
    """Validate ``config`` and assemble the ordered wire payload.

    Raises ConfigurationError when the model is missing or empty, or when no
    message set can be resolved.
    """
    if not config.model:
        raise ConfigurationError("Model is required. Use with_model() to set it.")

    payload: dict[str, Any] = {"model": config.model, "messages": resolve_messages(config)}
    for name in OPTIONAL_FIELDS:
        value = getattr(config, name)
        if value is not None:
            payload[name] = _to_wire_value(value)
    return payload
