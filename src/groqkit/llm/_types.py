"""Typed views of the Groq chat completion wire format."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

# --- Multimodal content parts ---


@dataclass(frozen=True, slots=True)
class TextPart:
    """A plain text content part."""

    text: str


@dataclass(frozen=True, slots=True)
class ImagePart:
    """An image content part (URL, data URI, or raw base64)."""

    url: str = ""
    media_type: str = "image/jpeg"
    data: str = ""


ContentPart: TypeAlias = TextPart | ImagePart
Content: TypeAlias = str | tuple[ContentPart, ...]


# --- Tools ---

ToolExecutor: TypeAlias = Callable[[str], Awaitable[str] | str]
"""Caller-supplied tool body: receives the JSON arguments, returns a JSON result."""


@dataclass(frozen=True, slots=True)
class Tool:
    """A function the model may call, plus the local callable that runs it."""

    name: str
    description: str
    parameters: dict[str, Any]
    execute: ToolExecutor | None = field(default=None, compare=False, repr=False)
    type: str = "function"

    def to_wire(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(frozen=True, slots=True)
class ToolCall:
    """A tool call returned by the model. ``arguments`` is the raw JSON string."""

    id: str
    name: str
    arguments: str = "{}"

    def parsed_arguments(self) -> dict[str, Any]:
        return parse_tool_args(self.arguments)

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass(frozen=True, slots=True)
class ToolResult:
    """A tool result sent back to the model after executing a tool call."""

    tool_call_id: str
    name: str
    content: str


# --- Messages and responses ---


@dataclass(frozen=True, slots=True)
class Message:
    """A chat message."""

    role: str
    content: Content = ""
    tool_calls: tuple[ToolCall, ...] = ()


@dataclass(frozen=True, slots=True)
class Usage:
    """Token usage counts."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True, slots=True)
class Response:
    """The first choice of a chat completion, plus the raw body."""

    text: str = ""
    tool_calls: tuple[ToolCall, ...] = ()
    usage: Usage = field(default_factory=Usage)
    stop_reason: str = ""
    raw: dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> Message:
        """Convert this response to a Message suitable for multi-turn conversations."""
        return Message(role="assistant", content=self.text, tool_calls=self.tool_calls)


ConversationItem: TypeAlias = Message | ToolResult


# --- Wire conversion ---


def parse_tool_args(raw_args: str | dict[str, Any]) -> dict[str, Any]:
    if isinstance(raw_args, dict):
        return raw_args
    try:
        return json.loads(raw_args)
    except (json.JSONDecodeError, TypeError):
        return {"_raw": raw_args}


def content_to_wire(content: Content) -> str | list[dict[str, Any]]:
    """Convert Content to the chat completions wire format."""
    if isinstance(content, str):
        return content
    parts: list[dict[str, Any]] = []
    for part in content:
        if isinstance(part, TextPart):
            parts.append({"type": "text", "text": part.text})
        elif isinstance(part, ImagePart):
            url = f"data:{part.media_type};base64,{part.data}" if part.data else part.url
            parts.append({"type": "image_url", "image_url": {"url": url}})
    return parts


def message_to_wire(item: ConversationItem | dict[str, Any]) -> dict[str, Any]:
    """Convert a ConversationItem to its wire dict. Plain dicts pass through."""
    if isinstance(item, dict):
        return dict(item)
    if isinstance(item, ToolResult):
        return {
            "tool_call_id": item.tool_call_id,
            "role": "tool",
            "name": item.name,
            "content": item.content,
        }
    if item.tool_calls:
        return {
            "role": item.role,
            "content": content_to_wire(item.content) if item.content else None,
            "tool_calls": [tc.to_wire() for tc in item.tool_calls],
        }
    return {"role": item.role, "content": content_to_wire(item.content)}


def parse_response(raw: dict[str, Any] | None) -> Response:
    """Parse a chat completion body into a Response (first choice only)."""
    if not raw:
        return Response()
    choices = raw.get("choices") or []
    if not choices:
        return Response(raw=raw)

    choice = choices[0]
    message = choice.get("message") or {}

    tool_calls: list[ToolCall] = []
    for tc in message.get("tool_calls") or []:
        fn = tc.get("function") or {}
        arguments = fn.get("arguments", "")
        if isinstance(arguments, dict):
            arguments = json.dumps(arguments)
        tool_calls.append(
            ToolCall(id=tc.get("id") or "", name=fn.get("name") or "", arguments=arguments or "")
        )

    raw_usage = raw.get("usage") or {}
    usage = Usage(
        input_tokens=raw_usage.get("prompt_tokens", 0),
        output_tokens=raw_usage.get("completion_tokens", 0),
        total_tokens=raw_usage.get("total_tokens", 0),
    )

    return Response(
        text=message.get("content") or "",
        tool_calls=tuple(tool_calls),
        usage=usage,
        stop_reason=choice.get("finish_reason") or "",
        raw=raw,
    )
