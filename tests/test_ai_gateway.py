"""
Tests for GeminiGateway with a mocked SDK client.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from noteai.common.common_message import CommonMessage
from noteai.common.constants import AIConfig, AIOperation, DevFallback
from noteai.services.ai_gateway import GeminiGateway, has_gemini_api_key


def _mock_client(text=None, side_effect=None):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=text),
        side_effect=side_effect,
    )
    return client


@pytest.fixture
def gemini_client():
    return _mock_client(text="Point one\nPoint two\nPoint three")


@pytest.fixture
def gateway(gemini_client):
    return GeminiGateway(api_key="test-key", model_name="gemini-test", client=gemini_client)


@pytest.mark.unit
class TestApiKeyDetection:

    @pytest.mark.parametrize("api_key", [None, "", AIConfig.PLACEHOLDER_API_KEY])
    def test_missing_or_placeholder_key(self, api_key):
        assert not has_gemini_api_key(api_key)

    def test_real_key(self):
        assert has_gemini_api_key("AIza-something")


@pytest.mark.unit
@pytest.mark.asyncio
class TestGeminiGateway:

    async def test_fallback_summary_without_key(self):
        gateway = GeminiGateway(api_key=None)

        result = await gateway.generate_summary("anything")

        assert result.success
        assert result.model == AIConfig.FALLBACK_MODEL
        assert result.text == DevFallback.SUMMARY

    async def test_fallback_tags_with_placeholder_key(self):
        gateway = GeminiGateway(api_key=AIConfig.PLACEHOLDER_API_KEY)

        result = await gateway.generate_tags("")

        assert result.success
        assert result.text == "ai-required, api-key-missing"

    async def test_summary_call_parameters(self, gateway, gemini_client):
        result = await gateway.generate_summary("Meeting notes about the launch")

        assert result.success
        assert result.operation == AIOperation.SUMMARIZE
        assert result.text == "Point one\nPoint two\nPoint three"
        assert result.input_tokens > 0

        kwargs = gemini_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert "Meeting notes about the launch" in kwargs["contents"]
        assert kwargs["config"].temperature == AIConfig.SUMMARY_TEMPERATURE
        assert kwargs["config"].max_output_tokens == AIConfig.SUMMARY_MAX_OUTPUT_TOKENS

    async def test_tag_call_parameters(self, gateway, gemini_client):
        await gateway.generate_tags("Meeting notes")

        kwargs = gemini_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["config"].temperature == AIConfig.TAG_TEMPERATURE
        assert kwargs["config"].max_output_tokens == AIConfig.TAG_MAX_OUTPUT_TOKENS
        assert "tags" in kwargs["contents"]

    async def test_long_content_is_truncated(self, gateway, gemini_client):
        content = " ".join(f"word{i}" for i in range(10000))

        await gateway.generate_summary(content)

        prompt = gemini_client.aio.models.generate_content.call_args.kwargs["contents"]
        assert "word0 " in prompt
        assert "word9999" not in prompt
        assert "..." in prompt

    async def test_empty_content_skips_provider(self, gateway, gemini_client):
        result = await gateway.generate_summary("   ")

        assert not result.success
        assert result.error == CommonMessage.AI_NOTHING_TO_SUMMARIZE
        gemini_client.aio.models.generate_content.assert_not_called()

    async def test_provider_exception_becomes_failure(self):
        gateway = GeminiGateway(api_key="test-key", client=_mock_client(side_effect=RuntimeError("quota exceeded")))

        result = await gateway.generate_tags("Some note")

        assert not result.success
        assert result.operation == AIOperation.TAG
        assert result.error == "quota exceeded"

    @pytest.mark.parametrize("text", [None, "", "  \n "])
    async def test_blank_response_text(self, text):
        gateway = GeminiGateway(api_key="test-key", client=_mock_client(text=text))

        result = await gateway.generate_summary("Some note")

        assert not result.success
        assert result.error == CommonMessage.AI_EMPTY_RESPONSE

    async def test_client_init_failure(self):
        gateway = GeminiGateway(api_key="test-key")

        with patch("noteai.services.ai_gateway.genai.Client", side_effect=ValueError("bad key")):
            result = await gateway.generate_summary("Some note")

        assert not result.success
        assert result.operation == AIOperation.CLIENT_INIT
        assert result.error == CommonMessage.AI_CLIENT_INIT_FAILED

    async def test_client_created_once(self):
        client = _mock_client(text="tags, here")
        gateway = GeminiGateway(api_key="test-key")

        with patch("noteai.services.ai_gateway.genai.Client", return_value=client) as client_cls:
            await gateway.generate_tags("first")
            await gateway.generate_tags("second")

        client_cls.assert_called_once_with(api_key="test-key")
        assert client.aio.models.generate_content.await_count == 2
