"""The GroqClient facade, the main entry point."""

from __future__ import annotations

from groqkit.llm._audio import AudioClient
from groqkit.llm._chat import AsyncChatCompletionClient
from groqkit.llm._http import RetryConfig
from groqkit.llm._settings import GroqSettings
from groqkit.llm._text import LlmTextProvider
from groqkit.llm._vision import VisionClient
from groqkit.tools._runner import ToolConversationConfig, ToolConversationRunner


class GroqClient:
    """Bundle of the Groq clients sharing one set of settings.

    Usage::

        from groqkit import GroqClient

        client = GroqClient()  # reads GROQ_API_KEY
        print(await client.text.generate("Hello!"))
        answer = await client.tools.run("Weather in Paris?", [weather], model, "Be brief.")
    """

    def __init__(
        self,
        settings: GroqSettings | None = None,
        *,
        api_key: str | None = None,
        model: str | None = None,
        retry: RetryConfig | None = None,
        tool_config: ToolConversationConfig | None = None,
    ) -> None:
        self.settings = settings or GroqSettings.from_env(
            api_key=api_key, model=model, retry=retry
        )
        self.chat = AsyncChatCompletionClient(self.settings)
        self.audio = AudioClient(self.settings)
        self.vision = VisionClient(self.chat)
        self.tools = ToolConversationRunner(self.chat, config=tool_config)
        self.text = LlmTextProvider(self.chat, self.settings.model)
