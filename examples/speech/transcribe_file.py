"""
Example showing speech-to-text transcription of a local file.
"""

import os
from pathlib import Path

from att.speech import Client
from att.speech import SpeechContext
from att.speech import TransportError

audio_file = Path(os.getenv("AUDIO_FILE_PATH", "hello.wav"))


def print_result(result: dict) -> None:
    recognition = result.get("recognition", {})
    print(f"Status: {recognition.get('status')}")
    for hypothesis in recognition.get("n_best", [])[:1]:
        print(f"Transcript: {hypothesis.get('hypothesis')}")


def main() -> None:
    """Run transcription example."""

    with Client(os.getenv("ATT_API_KEY"), os.getenv("ATT_SECRET_KEY"), "SPEECH") as client:
        try:
            client.speech_to_text(audio_file, speech_context=SpeechContext.GENERIC, callback=print_result)
        except TransportError as e:
            print(f"Transcription failed: {e}")


if __name__ == "__main__":
    main()
