import pytest
from _utils import FakeSpeechService
from _utils import self_signed_context

from att.speech import Client


@pytest.fixture
def service():
    fake = FakeSpeechService()
    fake.start()
    yield fake
    fake.stop()


@pytest.fixture
def speech_client(service):
    client = Client("key", "secret", "SPEECH", service.url)
    yield client
    client.close()


@pytest.fixture
def tts_client(service):
    client = Client("key", "secret", "TTS", service.url)
    yield client
    client.close()


@pytest.fixture
def tls_service():
    fake = FakeSpeechService(ssl_context=self_signed_context())
    fake.start()
    yield fake
    fake.stop()
