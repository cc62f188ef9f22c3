import asyncio
import socket
import ssl
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Optional

from aiohttp import web
from multidict import CIMultiDict

CERTS_DIR = Path(__file__).parent / "certs"

WAV_BYTES = b"RIFF\x24\x00\x00\x00WAVEfmt \x10\x00\x00\x00\x01\x00\x01\x00\x80\xff\x00\xfe"

TRANSCRIPTION = {
    "Recognition": {
        "ResponseId": "3125ba07b4ae7c0d8c1ecaafc4ea4a5b",
        "Status": "OK",
        "NBest": [
            {
                "Hypothesis": "hello world",
                "LanguageId": "en-US",
                "Confidence": 0.9,
                "WordScores": [0.92, 0.88],
            },
            {"Hypothesis": "yellow world", "LanguageId": "en-US"},
        ],
        "Info": {"actionType": "Generic", "metrics": {"audioBytes": 24, "audioTime": 0.5}},
    }
}


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: dict[str, str]
    headers: CIMultiDict
    body: bytes


class FakeSpeechService:
    """In-process stand-in for the AT&T Speech API.

    Runs an aiohttp application on its own thread and event loop so both the
    blocking and the async clients can talk to it. Every request is recorded.
    """

    def __init__(self, ssl_context: Optional[ssl.SSLContext] = None) -> None:
        self._ssl_context = ssl_context
        self.requests: list[RecordedRequest] = []
        self.token_status = 200
        self.token_response: Any = {"access_token": "A", "refresh_token": "B"}
        self.stt_status = 200
        self.stt_body: bytes = b""
        self.stt_response: Any = TRANSCRIPTION
        self.stt_delay = 0.0
        self.tts_status = 200
        self.tts_body = WAV_BYTES
        self.url = ""
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._runner: Optional[web.AppRunner] = None
        self._thread: Optional[threading.Thread] = None

    def requests_to(self, path: str) -> list[RecordedRequest]:
        return [request for request in self.requests if request.path == path]

    def start(self) -> None:
        self._loop = asyncio.new_event_loop()
        started = threading.Event()

        def run() -> None:
            assert self._loop is not None
            asyncio.set_event_loop(self._loop)
            self._runner = web.AppRunner(self._build_app())
            self._loop.run_until_complete(self._runner.setup())
            site = web.TCPSite(self._runner, "127.0.0.1", 0, ssl_context=self._ssl_context)
            self._loop.run_until_complete(site.start())
            host, port = self._runner.addresses[0][:2]
            scheme = "https" if self._ssl_context else "http"
            self.url = f"{scheme}://{host}:{port}"
            started.set()
            self._loop.run_forever()

        self._thread = threading.Thread(target=run, daemon=True)
        self._thread.start()
        if not started.wait(timeout=10):
            raise RuntimeError("Fake speech service did not start")

    def stop(self) -> None:
        if self._thread is None or self._loop is None or self._runner is None:
            return
        asyncio.run_coroutine_threadsafe(self._runner.cleanup(), self._loop).result(timeout=10)
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=10)
        self._loop.close()
        self._thread = None

    def _build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/oauth/access_token", self._token)
        app.router.add_post("/speech/v3/speechToText", self._speech_to_text)
        app.router.add_post("/speech/v3/textToSpeech", self._text_to_speech)
        return app

    async def _record(self, request: web.Request) -> None:
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.path,
                query=dict(request.query),
                headers=CIMultiDict(request.headers),
                body=await request.read(),
            )
        )

    async def _token(self, request: web.Request) -> web.Response:
        await self._record(request)
        return web.json_response(self.token_response, status=self.token_status)

    async def _speech_to_text(self, request: web.Request) -> web.Response:
        await self._record(request)
        if self.stt_delay:
            await asyncio.sleep(self.stt_delay)
        if self.stt_body:
            return web.Response(body=self.stt_body, status=self.stt_status, content_type="text/plain")
        return web.json_response(self.stt_response, status=self.stt_status)

    async def _text_to_speech(self, request: web.Request) -> web.Response:
        await self._record(request)
        return web.Response(body=self.tts_body, status=self.tts_status, content_type="audio/x-wav")


def unused_url() -> str:
    """URL of a local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


def self_signed_context() -> ssl.SSLContext:
    """Server TLS context using the self-signed certificate for 127.0.0.1."""
    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    context.load_cert_chain(CERTS_DIR / "localhost.crt", CERTS_DIR / "localhost.key")
    return context
