"""
Async example showing text-to-speech synthesis saved to a WAV file.
"""

import asyncio
import os
from pathlib import Path

from att.speech import AsyncClient


async def main() -> None:
    async with AsyncClient(os.getenv("ATT_API_KEY"), os.getenv("ATT_SECRET_KEY"), "TTS") as client:
        audio = await client.text_to_speech(
            "Welcome to the AT&T Speech API!",
            {"X-Arg": "VoiceName=crystal,Tempo=0"},
        )

    Path("output.wav").write_bytes(audio)
    print(f"Saved {len(audio)} bytes to output.wav")


if __name__ == "__main__":
    asyncio.run(main())
