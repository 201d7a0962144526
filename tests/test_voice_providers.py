"""
Tests for the speech providers.
"""

import base64
import json
from unittest.mock import patch

import httpx
import pytest

from contentforge.errors import ConfigurationError, ProviderError
from contentforge.services.providers import elevenlabs, fish_audio, google_tts, minimax, openai_tts, voicemaker


@pytest.mark.parametrize("voice,expected", [
    ("en-US-Wavenet-D", "en-US"),
    ("cmn-CN-Chirp3-HD-Achird", "cmn-CN"),
    ("fil-PH-Standard-A", "fil-PH"),
    ("xx-yy-Custom", "xx-yy"),
])
def test_language_code_from_voice(voice, expected):
    assert google_tts.language_code_from_voice(voice) == expected


def test_language_code_from_voice_invalid():
    with pytest.raises(ValueError, match="Cannot extract language code"):
        google_tts.language_code_from_voice("Narrator")


@pytest.mark.asyncio
async def test_google_tts_synthesize_decodes_audio():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"audioContent": base64.b64encode(b"mp3-data").decode()})

    with patch.object(google_tts.settings, "GOOGLE_TTS_API_KEY", "tts-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            audio = await google_tts.synthesize("Hello there", "en-GB-Neural2-A", http_client=client)

    assert audio == b"mp3-data"
    assert seen[0].url.params["key"] == "tts-key"
    body = json.loads(seen[0].content)
    assert body["voice"] == {"languageCode": "en-GB", "name": "en-GB-Neural2-A"}
    assert body["audioConfig"] == {"audioEncoding": "MP3"}


@pytest.mark.asyncio
async def test_google_tts_list_voices_sorted_and_labelled():
    def handler(request):
        return httpx.Response(200, json={"voices": [
            {"name": "fr-FR-Standard-A", "languageCodes": ["fr-FR"], "ssmlGender": "FEMALE"},
            {"name": "en-US-Wavenet-D", "languageCodes": ["en-US"], "ssmlGender": "MALE"},
            {"name": "en-US-Standard-B", "languageCodes": ["en-US"], "ssmlGender": "MALE"},
        ]})

    with patch.object(google_tts.settings, "GOOGLE_TTS_API_KEY", "tts-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            voices = await google_tts.list_voices(http_client=client)

    assert [v["id"] for v in voices] == ["en-US-Standard-B", "en-US-Wavenet-D", "fr-FR-Standard-A"]
    assert voices[0]["name"] == "en-US-Standard-B (en-US) - MALE"


@pytest.mark.asyncio
async def test_google_tts_requires_api_key():
    with pytest.raises(ConfigurationError, match="Google TTS API key not configured"):
        await google_tts.synthesize("Hello", "en-US-Wavenet-D")


@pytest.mark.asyncio
async def test_voicemaker_synthesize():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={
            "success": True,
            "path": "https://vm.test/audio.mp3",
            "usedChars": 11,
            "remainChars": 989,
        })

    with patch.object(voicemaker.settings, "VOICEMAKER_API_KEY", "vm-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await voicemaker.synthesize(text="Hello world", voice_id="ai3-Jony", http_client=client)

    assert result["path"] == "https://vm.test/audio.mp3"
    assert seen[0].url.path.endswith("/api")
    assert seen[0].headers["Authorization"] == "Bearer vm-key"
    body = json.loads(seen[0].content)
    assert body["VoiceId"] == "ai3-Jony"
    assert body["Engine"] == "neural"
    assert body["SampleRate"] == "48000"


@pytest.mark.asyncio
async def test_voicemaker_rejects_response_without_path():
    def handler(request):
        return httpx.Response(200, json={"success": False, "message": "quota"})

    with patch.object(voicemaker.settings, "VOICEMAKER_API_KEY", "vm-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ProviderError, match="Invalid response format"):
                await voicemaker.synthesize(text="Hello", voice_id="ai3-Jony", http_client=client)


@pytest.mark.asyncio
async def test_voicemaker_list_voices():
    def handler(request):
        assert json.loads(request.content) == {"language": "de-DE"}
        return httpx.Response(200, json={"success": True, "data": {"voices_list": [{"VoiceId": "ai1-Hans"}]}})

    with patch.object(voicemaker.settings, "VOICEMAKER_API_KEY", "vm-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            voices = await voicemaker.list_voices("de-DE", http_client=client)

    assert voices == [{"VoiceId": "ai1-Hans"}]


@pytest.mark.asyncio
async def test_openai_tts_synthesize():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"openai-mp3")

    with patch.object(openai_tts.settings, "OPENAI_API_KEY", "sk-test"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            audio = await openai_tts.synthesize("Hello", "nova", http_client=client)

    assert audio == b"openai-mp3"
    assert seen[0].url.path.endswith("/audio/speech")
    assert seen[0].headers["Authorization"] == "Bearer sk-test"
    assert json.loads(seen[0].content) == {
        "model": "tts-1", "voice": "nova", "input": "Hello", "response_format": "mp3",
    }


@pytest.mark.asyncio
async def test_openai_tts_error_status():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "bad voice"}})

    with patch.object(openai_tts.settings, "OPENAI_API_KEY", "sk-test"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ProviderError, match="OpenAI TTS API error: 400"):
                await openai_tts.synthesize("Hello", "robot", http_client=client)


@pytest.mark.asyncio
async def test_minimax_decodes_hex_audio():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"data": {"audio": b"mp3!".hex()}, "base_resp": {"status_code": 0}})

    with patch.object(minimax.settings, "MINIMAX_API_KEY", "mm-key"), \
            patch.object(minimax.settings, "MINIMAX_GROUP_ID", "group-1"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            audio = await minimax.synthesize("Hello", "Wise_Woman", http_client=client)

    assert audio == b"mp3!"
    assert seen[0].url.params["GroupId"] == "group-1"
    body = json.loads(seen[0].content)
    assert body["model"] == "speech-02-hd"
    assert body["voice_setting"]["voice_id"] == "Wise_Woman"
    assert body["audio_setting"]["format"] == "mp3"


@pytest.mark.asyncio
async def test_minimax_without_audio_is_provider_error():
    def handler(request):
        return httpx.Response(200, json={"base_resp": {"status_code": 1004, "status_msg": "auth failed"}})

    with patch.object(minimax.settings, "MINIMAX_API_KEY", "mm-key"), \
            patch.object(minimax.settings, "MINIMAX_GROUP_ID", "group-1"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ProviderError) as exc_info:
                await minimax.synthesize("Hello", "Wise_Woman", http_client=client)

    assert exc_info.value.details == {"status_code": 1004, "status_msg": "auth failed"}


@pytest.mark.asyncio
async def test_fish_audio_synthesize():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"fish-mp3")

    with patch.object(fish_audio.settings, "FISH_AUDIO_API_KEY", "fish-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            audio = await fish_audio.synthesize("Hello", "ref-42", http_client=client)

    assert audio == b"fish-mp3"
    assert seen[0].headers["model"] == "speech-1.6"
    body = json.loads(seen[0].content)
    assert body["reference_id"] == "ref-42"
    assert body["format"] == "mp3"


def test_elevenlabs_language_code_only_for_flash_model():
    assert elevenlabs.build_request("Hola", "eleven_flash_v2_5", "es") == {
        "text": "Hola", "model_id": "eleven_flash_v2_5", "language_code": "es",
    }
    assert elevenlabs.build_request("Hola", None, "es") == {
        "text": "Hola", "model_id": "eleven_multilingual_v2",
    }


@pytest.mark.asyncio
async def test_elevenlabs_synthesize():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"el-mp3")

    with patch.object(elevenlabs.settings, "ELEVENLABS_API_KEY", "el-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            audio = await elevenlabs.synthesize("Hello", "voice-1", http_client=client)

    assert audio == b"el-mp3"
    assert seen[0].url.path.endswith("/text-to-speech/voice-1")
    assert seen[0].url.params["output_format"] == "mp3_44100_128"
    assert seen[0].headers["xi-api-key"] == "el-key"


@pytest.mark.asyncio
async def test_elevenlabs_requires_api_key():
    with pytest.raises(ConfigurationError, match="ElevenLabs API key not configured"):
        await elevenlabs.synthesize("Hello", "voice-1")
