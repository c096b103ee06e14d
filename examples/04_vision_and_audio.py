"""04: Vision and audio.

Ask about an image by URL, transcribe a local audio file, and synthesize
speech to a WAV file.
"""

import asyncio
import sys
from pathlib import Path

from groqkit import GroqClient

IMAGE_URL = "https://upload.wikimedia.org/wikipedia/commons/3/3a/Cat03.jpg"


async def main(audio_path: Path | None) -> None:
    client = GroqClient()

    response = await client.vision.complete_with_image_url(IMAGE_URL, "What animal is this?")
    print("Vision:", response.text)

    if audio_path is not None:
        transcript = await client.audio.create_transcription(
            audio_path.read_bytes(), audio_path.name, "whisper-large-v3-turbo"
        )
        print("Transcript:", transcript.get("text"))

    audio = await client.audio.create_speech("Hello from Groq.", "Fritz-PlayAI")
    Path("hello.wav").write_bytes(audio)
    print(f"Wrote hello.wav ({len(audio)} bytes)")


asyncio.run(main(Path(sys.argv[1]) if len(sys.argv) > 1 else None))
