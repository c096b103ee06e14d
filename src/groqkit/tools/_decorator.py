"""@tool decorator: turn a typed Python function into a runnable Tool."""

from __future__ import annotations

import asyncio
import enum
import inspect
import json
import logging
import types
import typing
from collections.abc import Callable
from typing import Any, get_type_hints, overload

from groqkit.llm._types import Tool

logger = logging.getLogger(__name__)

_PYTHON_TYPE_TO_JSON: dict[type, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
}

_SECTION_HEADERS = ("Returns:", "Raises:", "Yields:", "Examples:", "Notes:")


def _hint_to_json_schema(hint: Any) -> tuple[dict[str, Any], bool]:
    """Convert a Python type hint to a JSON Schema dict.

    Returns (schema_dict, is_optional).
    """
    origin = typing.get_origin(hint)

    if origin is types.UnionType or origin is typing.Union:
        non_none = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(non_none) == 1:
            schema, _ = _hint_to_json_schema(non_none[0])
            return schema, True
        return {"type": "string"}, True

    if origin is typing.Literal:
        args = typing.get_args(hint)
        if args and all(isinstance(a, int) for a in args):
            return {"type": "integer", "enum": list(args)}, False
        return {"type": "string", "enum": list(args)}, False

    if isinstance(hint, type) and issubclass(hint, enum.Enum):
        values = [m.value for m in hint]
        if values and all(isinstance(v, int) for v in values):
            return {"type": "integer", "enum": values}, False
        return {"type": "string", "enum": values}, False

    if origin in (list, tuple) or hint in (list, tuple):
        args = typing.get_args(hint)
        if args:
            inner, _ = _hint_to_json_schema(args[0])
            return {"type": "array", "items": inner}, False
        return {"type": "array"}, False

    if origin is dict or hint is dict:
        return {"type": "object"}, False

    json_type = _PYTHON_TYPE_TO_JSON.get(hint)
    if json_type is not None:
        return {"type": json_type}, False

    return {"type": "string"}, False


def _split_docstring(fn: Callable[..., Any]) -> tuple[str, dict[str, str]]:
    """Split a Google-style docstring into (summary, {param: description})."""
    doc = inspect.getdoc(fn) or ""
    summary: list[str] = []
    params: dict[str, str] = {}
    current: str | None = None
    section = "summary"
    for line in doc.splitlines():
        stripped = line.strip()
        if stripped in ("Args:", "Arguments:", "Parameters:"):
            section = "args"
            continue
        if stripped in _SECTION_HEADERS:
            section = "other"
            continue
        if section == "summary":
            summary.append(line)
        elif section == "args" and stripped:
            if not line.startswith((" ", "\t")) or ":" not in stripped:
                if current:
                    params[current] += " " + stripped
                continue
            head, _, desc = stripped.partition(":")
            name = head.split("(")[0].strip()
            if name.isidentifier():
                current = name
                params[current] = desc.strip()
            elif current:
                params[current] += " " + stripped
    return "\n".join(summary).strip(), params


def _build_parameters(fn: Callable[..., Any], descriptions: dict[str, str]) -> dict[str, Any]:
    try:
        hints = get_type_hints(fn)
    except Exception:
        hints = getattr(fn, "__annotations__", {})
    properties: dict[str, Any] = {}
    required: list[str] = []
    for param_name, param in inspect.signature(fn).parameters.items():
        hint = hints.get(param_name)
        schema, is_optional = _hint_to_json_schema(hint) if hint is not None else ({}, False)
        if not schema:
            schema = {"type": "string"}
        if desc := descriptions.get(param_name):
            schema = {**schema, "description": desc}
        properties[param_name] = schema
        if param.default is inspect.Parameter.empty and not is_optional:
            required.append(param_name)
    return {"type": "object", "properties": properties, "required": required}


def _make_executor(
    fn: Callable[..., Any], tool_name: str, catch_errors: bool
) -> Callable[[str], Any]:
    async def execute(arguments: str) -> str:
        try:
            kwargs = json.loads(arguments) if arguments else {}
            if inspect.iscoroutinefunction(fn):
                result = await fn(**kwargs)
            else:
                result = await asyncio.to_thread(fn, **kwargs)
        except Exception as exc:
            if not catch_errors:
                raise
            logger.warning("Tool %r failed: %s", tool_name, exc)
            return json.dumps({"error": str(exc)})
        return result if isinstance(result, str) else json.dumps(result)

    return execute


@overload
def tool(fn: Callable[..., Any], /) -> Tool: ...


@overload
def tool(
    *,
    name: str | None = None,
    description: str | None = None,
    catch_errors: bool = False,
) -> Callable[[Callable[..., Any]], Tool]: ...


def tool(
    fn: Callable[..., Any] | None = None,
    /,
    *,
    name: str | None = None,
    description: str | None = None,
    catch_errors: bool = False,
) -> Tool | Callable[[Callable[..., Any]], Tool]:
    """Build a :class:`Tool` from a function's signature and docstring.

    The resulting tool's ``execute`` decodes the model's JSON arguments, calls
    the function with them as keyword arguments, and JSON-encodes anything that
    is not already a string. With ``catch_errors=True`` an exception becomes
    ``{"error": "..."}`` so the conversation can continue; otherwise it
    propagates.

    Can be used bare (``@tool``) or with arguments (``@tool(name=...)``).
    """

    def _wrap(f: Callable[..., Any]) -> Tool:
        tool_name = name or f.__name__
        summary, descriptions = _split_docstring(f)
        return Tool(
            name=tool_name,
            description=description if description is not None else summary,
            parameters=_build_parameters(f, descriptions),
            execute=_make_executor(f, tool_name, catch_errors),
        )

    if fn is not None:
        return _wrap(fn)
    return _wrap
