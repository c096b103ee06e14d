"""02: Streaming.

Stream content deltas with the blocking client, then with the async text
provider.
"""

import asyncio

from groqkit import ChatCompletionClient, ChatCompletionRequestBuilder, GroqClient, GroqSettings

settings = GroqSettings.from_env()

# --- Blocking: raw chunks ---
print("=== stream_chat_completion() ===")
payload = (
    ChatCompletionRequestBuilder.create()
    .with_model("llama-3.1-8b-instant")
    .with_user_prompt("Explain photosynthesis in three sentences.")
    .build()
)
for chunk in ChatCompletionClient(settings).stream_chat_completion(payload):
    for choice in chunk.get("choices", []):
        print(choice.get("delta", {}).get("content") or "", end="", flush=True)
print("\n")


# --- Async: text deltas only ---
async def main() -> None:
    print("=== text.generate_stream() ===")
    client = GroqClient(settings)
    async for text in client.text.generate_stream("Why is the sky blue? One paragraph."):
        print(text, end="", flush=True)
    print()


asyncio.run(main())
