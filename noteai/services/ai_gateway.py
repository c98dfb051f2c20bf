"""
Gemini access for note summaries and tags.

Every call returns a ``GatewayResult``; the SDK response object never leaves
this module. Without a configured API key a fixed placeholder result is
returned so the rest of the app keeps working.
"""
import logging
from typing import Optional

from google import genai
from google.genai import types

from noteai.common.common_message import CommonMessage
from noteai.common.constants import AIConfig, AIOperation, DevFallback
from noteai.common.exceptions import AIProviderFailure
from noteai.common.utils import build_summary_prompt, build_tag_prompt
from noteai.config import settings
from noteai.schemas.ai import GatewayResult
from noteai.services.token_service import estimate_token_count, truncate_to_token_limit

logger = logging.getLogger(__name__)


def has_gemini_api_key(api_key: Optional[str]) -> bool:
    return bool(api_key) and api_key != AIConfig.PLACEHOLDER_API_KEY


class GeminiGateway:

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = AIConfig.DEFAULT_MODEL,
        max_input_tokens: int = AIConfig.MAX_INPUT_TOKENS,
        client: Optional[genai.Client] = None,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.max_input_tokens = max_input_tokens
        self._client = client

    @classmethod
    def from_settings(cls) -> "GeminiGateway":
        return cls(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL,
            max_input_tokens=settings.AI_MAX_INPUT_TOKENS,
        )

    def has_api_key(self) -> bool:
        return has_gemini_api_key(self.api_key)

    def _get_client(self) -> genai.Client:
        if self._client is None:
            try:
                self._client = genai.Client(api_key=self.api_key)
                logger.info("Gemini API client initialized")
            except Exception as e:
                logger.error("Gemini API client initialization failed: %s", e, exc_info=True)
                raise AIProviderFailure(CommonMessage.AI_CLIENT_INIT_FAILED) from e
        return self._client

    def _fallback(self, operation: str) -> GatewayResult:
        logger.warning("Gemini API key is not configured; returning placeholder %s result", operation)
        text = DevFallback.SUMMARY if operation == AIOperation.SUMMARIZE else ", ".join(DevFallback.TAGS)
        return GatewayResult(success=True, operation=operation, model=AIConfig.FALLBACK_MODEL, text=text)

    async def generate_summary(self, content: str) -> GatewayResult:
        return await self.generate(AIOperation.SUMMARIZE, content)

    async def generate_tags(self, content: str) -> GatewayResult:
        return await self.generate(AIOperation.TAG, content)

    async def generate(self, operation: str, content: str) -> GatewayResult:
        """
        Ask the model for a summary (``summarize``) or tags (``tag``) of ``content``.

        Args:
            operation: summarize or tag
            content: note text; truncated to the input token budget

        Returns:
            GatewayResult with the raw model text on success, or the error
            message on failure
        """
        if not self.has_api_key():
            return self._fallback(operation)

        if not content or not content.strip():
            empty_message = (
                CommonMessage.AI_NOTHING_TO_SUMMARIZE
                if operation == AIOperation.SUMMARIZE
                else CommonMessage.AI_NOTHING_TO_TAG
            )
            return GatewayResult(success=False, operation=operation, model=self.model_name, error=empty_message)

        truncated = truncate_to_token_limit(content, self.max_input_tokens)
        input_tokens = estimate_token_count(truncated)

        if operation == AIOperation.SUMMARIZE:
            prompt = build_summary_prompt(truncated)
            config = types.GenerateContentConfig(
                temperature=AIConfig.SUMMARY_TEMPERATURE,
                max_output_tokens=AIConfig.SUMMARY_MAX_OUTPUT_TOKENS,
            )
        else:
            prompt = build_tag_prompt(truncated)
            config = types.GenerateContentConfig(
                temperature=AIConfig.TAG_TEMPERATURE,
                max_output_tokens=AIConfig.TAG_MAX_OUTPUT_TOKENS,
            )

        try:
            client = self._get_client()
        except AIProviderFailure as e:
            return GatewayResult(
                success=False, operation=AIOperation.CLIENT_INIT, model=self.model_name, error=e.message
            )

        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=config,
            )
            text = response.text
        except Exception as e:
            logger.error("Gemini %s call failed: %s", operation, e, exc_info=True)
            return GatewayResult(
                success=False,
                operation=operation,
                model=self.model_name,
                error=str(e),
                input_tokens=input_tokens,
            )

        if not text or not text.strip():
            return GatewayResult(
                success=False,
                operation=operation,
                model=self.model_name,
                error=CommonMessage.AI_EMPTY_RESPONSE,
                input_tokens=input_tokens,
            )

        logger.info("🚀 ~ GeminiGateway ~ generate ~ %s produced %d chars", operation, len(text))
        return GatewayResult(
            success=True,
            operation=operation,
            model=self.model_name,
            text=text,
            input_tokens=input_tokens,
        )
