"""Tool definitions and the tool-calling conversation runner."""

from groqkit.tools._decorator import tool
from groqkit.tools._runner import (
    ToolConversationConfig,
    ToolConversationRunner,
    ToolEvent,
    execute_tool,
)

__all__ = [
    "ToolConversationConfig",
    "ToolConversationRunner",
    "ToolEvent",
    "execute_tool",
    "tool",
]
