"""03: Tool conversation.

Offer a local function to the model. If the model calls it, the runner
executes it and sends the result back for a final answer (two round trips
at most).
"""

import asyncio

from groqkit import GroqClient, ToolConversationConfig, ToolEvent, tool

# Simulated weather data
WEATHER_DATA = {
    "london": "14°C, cloudy with light rain",
    "tokyo": "26°C, sunny and humid",
    "paris": "20°C, clear skies",
}


@tool
def get_weather(city: str) -> dict:
    """Get the current weather for a city.

    Args:
        city: City name, e.g. Tokyo.
    """
    return {"city": city, "weather": WEATHER_DATA.get(city.lower(), "unknown")}


def show(event: ToolEvent) -> None:
    if event.type == "tool_call":
        print(f"[Tool called: {event.tool_name}({event.arguments})]")
    elif event.type == "tool_result":
        print(f"[Tool result: {event.result}]")


async def main() -> None:
    client = GroqClient(tool_config=ToolConversationConfig(on_event=show))
    answer = await client.tools.run(
        "What's the weather in Tokyo?",
        [get_weather],
        "openai/gpt-oss-120b",
        "You are a concise weather assistant.",
    )
    print("\nAssistant:", answer)


asyncio.run(main())
