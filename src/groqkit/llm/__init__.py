"""Groq chat, audio and vision clients plus the request builder."""

from groqkit.llm._audio import AudioClient
from groqkit.llm._builder import ChatCompletionRequestBuilder, build_payload
from groqkit.llm._chat import AsyncChatCompletionClient, ChatCompletionClient, ChatTransport
from groqkit.llm._client import GroqClient
from groqkit.llm._constants import ReasoningFormat, ServiceTier
from groqkit.llm._exceptions import APIError, ConfigurationError, RateLimitError, UnknownToolError
from groqkit.llm._http import RetryConfig
from groqkit.llm._settings import GroqSettings
from groqkit.llm._text import LlmTextProvider
from groqkit.llm._types import (
    ImagePart,
    Message,
    Response,
    TextPart,
    Tool,
    ToolCall,
    ToolResult,
    Usage,
    parse_response,
)
from groqkit.llm._vision import VisionClient

__all__ = [
    "APIError",
    "AsyncChatCompletionClient",
    "AudioClient",
    "ChatCompletionClient",
    "ChatCompletionRequestBuilder",
    "ChatTransport",
    "ConfigurationError",
    "GroqClient",
    "GroqSettings",
    "ImagePart",
    "LlmTextProvider",
    "Message",
    "RateLimitError",
    "ReasoningFormat",
    "Response",
    "RetryConfig",
    "ServiceTier",
    "TextPart",
    "Tool",
    "ToolCall",
    "ToolResult",
    "UnknownToolError",
    "Usage",
    "VisionClient",
    "build_payload",
    "parse_response",
]
