"""Typed client for the Groq inference API."""

from groqkit.llm import (
    APIError,
    AsyncChatCompletionClient,
    AudioClient,
    ChatCompletionClient,
    ChatCompletionRequestBuilder,
    ChatTransport,
    ConfigurationError,
    GroqClient,
    GroqSettings,
    ImagePart,
    LlmTextProvider,
    Message,
    RateLimitError,
    ReasoningFormat,
    Response,
    RetryConfig,
    ServiceTier,
    TextPart,
    Tool,
    ToolCall,
    ToolResult,
    UnknownToolError,
    Usage,
    VisionClient,
    build_payload,
    parse_response,
)
from groqkit.tools import ToolConversationConfig, ToolConversationRunner, ToolEvent, tool

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
    "ToolConversationConfig",
    "ToolConversationRunner",
    "ToolEvent",
    "ToolResult",
    "UnknownToolError",
    "Usage",
    "VisionClient",
    "build_payload",
    "parse_response",
    "tool",
]
