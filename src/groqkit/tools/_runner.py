"""Two-round tool-calling conversation runner."""

from __future__ import annotations

import asyncio
import copy
import inspect
import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any, Literal, TypeAlias

from groqkit.llm._builder import ChatCompletionRequestBuilder
from groqkit.llm._chat import ChatTransport
from groqkit.llm._constants import ASSISTANT_ROLE, TOOL_ROLE
from groqkit.llm._exceptions import ConfigurationError, UnknownToolError
from groqkit.llm._types import Tool, ToolCall, parse_response

logger = logging.getLogger(__name__)

UnknownToolPolicy: TypeAlias = Literal["skip", "raise"]


@dataclass(frozen=True, slots=True)
class ToolEvent:
    """An observable event fired while a conversation runs."""

    type: str  # "request", "tool_call", "tool_result", "unknown_tool"
    round_trip: int = 0
    tool_name: str = ""
    tool_call_id: str = ""
    arguments: str = ""
    result: str = ""


@dataclass(frozen=True, slots=True)
class ToolConversationConfig:
    """Configuration for :class:`ToolConversationRunner`.

    ``unknown_tool`` decides what happens when the model calls a tool that was
    not provided: ``"skip"`` drops the call (logged at WARNING, no tool message
    is appended) and ``"raise"`` aborts with :class:`UnknownToolError`.
    """

    unknown_tool: UnknownToolPolicy = "skip"
    on_event: Callable[[ToolEvent], None] | None = None


def _fire_event(config: ToolConversationConfig, event_type: str, **kwargs: Any) -> None:
    if config.on_event is not None:
        config.on_event(ToolEvent(type=event_type, **kwargs))


def _index_tools(tools: Sequence[Tool]) -> dict[str, Tool]:
    by_name: dict[str, Tool] = {}
    for t in tools:
        if t.name in by_name:
            raise ConfigurationError(f"Duplicate tool name: {t.name!r}")
        if t.execute is None:
            raise ConfigurationError(f"Tool {t.name!r} has no execute callable")
        by_name[t.name] = t
    return by_name


def _first_message(raw: dict[str, Any] | None) -> dict[str, Any]:
    choices = (raw or {}).get("choices") or []
    if not choices:
        return {}
    return choices[0].get("message") or {}


async def execute_tool(tool: Tool, arguments: str) -> str:
    """Run ``tool`` with the JSON ``arguments``; coroutine functions are awaited directly."""
    fn = tool.execute
    if fn is None:
        raise ConfigurationError(f"Tool {tool.name!r} has no execute callable")
    if inspect.iscoroutinefunction(fn):
        result = await fn(arguments)
    else:
        result = await asyncio.to_thread(fn, arguments)
        if inspect.isawaitable(result):
            result = await result
    return result if isinstance(result, str) else json.dumps(result)


class ToolConversationRunner:
    """Resolve a prompt that may need local tools, in at most two round trips.

    1. Send system + user messages with every tool offered (``tool_choice="auto"``).
    2. If the reply has no tool calls, return its content.
    3. Otherwise run each requested tool in order, one at a time, append the
       assistant turn and the tool results, and send the conversation again.
    4. Return the second reply's content. Tool calls in it are not followed.

    Transport and tool errors propagate unchanged.
    """

    def __init__(
        self,
        transport: ChatTransport,
        *,
        config: ToolConversationConfig | None = None,
    ) -> None:
        self._transport = transport
        self.config = config or ToolConversationConfig()

    def _handle_unknown(self, call: ToolCall) -> None:
        if self.config.unknown_tool == "raise":
            raise UnknownToolError(call.name, call.id)
        logger.warning("Skipping call %s to unknown tool %r", call.id, call.name)
        _fire_event(
            self.config,
            "unknown_tool",
            round_trip=1,
            tool_name=call.name,
            tool_call_id=call.id,
            arguments=call.arguments,
        )

    async def _send(self, payload: dict[str, Any], round_trip: int) -> dict[str, Any]:
        logger.debug(
            "Tool conversation round trip %d (%d messages)", round_trip, len(payload["messages"])
        )
        _fire_event(self.config, "request", round_trip=round_trip)
        return await self._transport.send_chat_completion(payload)

    async def run(
        self,
        user_prompt: str,
        tools: Sequence[Tool],
        model: str,
        system_message: str | None = None,
        *,
        request: ChatCompletionRequestBuilder | None = None,
    ) -> str:
        """Run the conversation and return the model's final text (``""`` if none).

        ``request`` may carry extra options (temperature, seed, ...); its
        messages and prompts are replaced by this conversation's own.
        """
        by_name = _index_tools(tools)
        base = request or ChatCompletionRequestBuilder.create()
        options = (
            replace(
                base,
                messages=None,
                system_prompt=None,
                assistant_prompt=None,
                user_prompt=None,
                image_url=None,
            )
            .with_model(model)
            .with_tools(tools)
            .with_tool_choice("auto")
        )
        first = options.with_user_prompt(user_prompt)
        if system_message is not None:
            first = first.with_system_prompt(system_message)
        initial_payload = first.build()

        raw = await self._send(initial_payload, round_trip=1)
        message = _first_message(raw)
        calls = parse_response(raw).tool_calls
        if not calls:
            return message.get("content") or ""

        messages: list[dict[str, Any]] = copy.deepcopy(initial_payload["messages"])
        messages.append(
            {
                "role": ASSISTANT_ROLE,
                "content": message.get("content"),
                "tool_calls": copy.deepcopy(message["tool_calls"]),
            }
        )

        for call in calls:
            tool = by_name.get(call.name)
            if tool is None:
                self._handle_unknown(call)
                continue
            arguments = call.arguments or "{}"
            _fire_event(
                self.config,
                "tool_call",
                round_trip=1,
                tool_name=call.name,
                tool_call_id=call.id,
                arguments=arguments,
            )
            result = await execute_tool(tool, arguments)
            _fire_event(
                self.config,
                "tool_result",
                round_trip=1,
                tool_name=call.name,
                tool_call_id=call.id,
                result=result,
            )
            messages.append(
                {
                    "tool_call_id": call.id,
                    "role": TOOL_ROLE,
                    "name": call.name,
                    "content": result,
                }
            )

        raw = await self._send(options.with_messages(messages).build(), round_trip=2)
        return parse_response(raw).text
