import pytest
from _utils import WAV_BYTES
from _utils import unused_url

from att.speech import AsyncClient
from att.speech import AuthenticationError
from att.speech import ConfigurationError
from att.speech import ConnectionError


def test_async_client_requires_arguments():
    with pytest.raises(ConfigurationError):
        AsyncClient()


def test_async_client_rejects_invalid_scope():
    with pytest.raises(ConfigurationError):
        AsyncClient("key", "secret", "ASR")


@pytest.mark.asyncio
async def test_async_context_manager_authenticates(service):
    async with AsyncClient("key", "secret", "SPEECH", service.url) as client:
        assert client.access_token == "A"
        assert client.refresh_token == "B"


@pytest.mark.asyncio
async def test_async_client_without_context_manager(service):
    client = AsyncClient("key", "secret", "TTS", service.url)
    try:
        assert client.access_token == ""
        await client.authenticate()
        assert client.access_token == "A"
        assert await client.text_to_speech("Hello") == WAV_BYTES
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_async_authentication_failure(service):
    service.token_response = {"error": "invalid_client"}

    with pytest.raises(AuthenticationError, match="invalid_client"):
        async with AsyncClient("bad", "creds", "SPEECH", service.url):
            pass


@pytest.mark.asyncio
async def test_async_speech_to_text(service):
    async with AsyncClient("key", "secret", "SPEECH", service.url) as client:
        result = await client.speech_to_text(WAV_BYTES, "application/octet-stream", "SMS")

    assert result["recognition"]["status"] == "OK"
    (request,) = service.requests_to("/speech/v3/speechToText")
    assert request.headers["Content-Type"] == "audio/amr"
    assert request.headers["X-SpeechContext"] == "SMS"


@pytest.mark.asyncio
async def test_async_speech_to_text_awaits_coroutine_callback(service):
    received = []

    async def on_result(result):
        received.append(result)

    async with AsyncClient("key", "secret", "SPEECH", service.url) as client:
        result = await client.speech_to_text(WAV_BYTES, callback=on_result)

    assert received == [result]


@pytest.mark.asyncio
async def test_async_speech_to_text_sync_callback(service):
    received = []

    async with AsyncClient("key", "secret", "SPEECH", service.url) as client:
        result = await client.speech_to_text(WAV_BYTES, callback=received.append)

    assert received == [result]


@pytest.mark.asyncio
async def test_async_connection_failure():
    with pytest.raises(ConnectionError) as exc_info:
        async with AsyncClient("key", "secret", "TTS", unused_url()):
            pass

    assert isinstance(exc_info.value, RuntimeError)
    assert str(exc_info.value.__cause__) in str(exc_info.value)


@pytest.mark.asyncio
async def test_async_client_requires_authentication_before_requests(service):
    client = AsyncClient("key", "secret", "SPEECH", service.url)
    try:
        with pytest.raises(AuthenticationError, match="Client is not authenticated"):
            await client.speech_to_text(WAV_BYTES)
        with pytest.raises(AuthenticationError, match="Client is not authenticated"):
            await client.text_to_speech("Hello")
    finally:
        await client.close()

    assert service.requests == []


@pytest.mark.asyncio
async def test_async_client_failed_authentication_stays_unusable(service):
    service.token_response = {"error": "invalid_client"}
    client = AsyncClient("key", "secret", "TTS", service.url)
    try:
        with pytest.raises(AuthenticationError, match="invalid_client"):
            await client.authenticate()
        with pytest.raises(AuthenticationError, match="Client is not authenticated"):
            await client.text_to_speech("Hello")
    finally:
        await client.close()

    assert len(service.requests_to("/speech/v3/textToSpeech")) == 0


@pytest.mark.asyncio
async def test_async_client_from_positional_mapping(service):
    settings = {"api_key": "key", "secret_key": "secret", "scope": "TTS", "base_url": service.url}

    async with AsyncClient(settings) as client:
        assert client.scope == "TTS"
        assert await client.text_to_speech("Hello") == WAV_BYTES
