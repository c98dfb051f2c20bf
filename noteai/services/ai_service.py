import asyncio
import logging
import time

from noteai.common.common_message import CommonMessage
from noteai.common.constants import AIConfig, DevFallback
from noteai.common.exceptions import AIEmptyResponse
from noteai.schemas.ai import (
    AIOperationResult,
    GatewayResult,
    SummaryAndTags,
    SummaryResponse,
    TagResponse,
)
from noteai.services.ai_gateway import GeminiGateway
from noteai.services.ai_parsers import normalize_tags, parse_summary_response, parse_tag_response
from noteai.services.api_call_logger import ApiCallLogger
from noteai.services.token_service import estimate_token_count

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class AIService:
    """Summary and tag generation: gateway call, parsing, and call logging."""

    def __init__(self, gateway: GeminiGateway, api_logger: ApiCallLogger):
        self.gateway = gateway
        self.api_logger = api_logger

    def _log_failure(self, result: GatewayResult, duration: float, error: str) -> None:
        self.api_logger.record(
            operation=result.operation,
            success=False,
            duration=duration,
            token_count=result.input_tokens or None,
            error=error,
            model=result.model,
        )

    def _log_success(self, result: GatewayResult, duration: float) -> None:
        token_count = result.input_tokens + estimate_token_count(result.text or "")
        if result.model == AIConfig.FALLBACK_MODEL:
            token_count = 0
        self.api_logger.log_success(
            operation=result.operation,
            duration=duration,
            token_count=token_count or None,
            model=result.model,
        )

    async def summarize(self, content: str) -> AIOperationResult[SummaryResponse]:
        start = time.perf_counter()
        result = await self.gateway.generate_summary(content)
        duration = _elapsed_ms(start)

        if not result.success:
            self._log_failure(result, duration, result.error)
            return AIOperationResult[SummaryResponse](success=False, error=result.error)

        try:
            summary = parse_summary_response(result.text, result.model)
        except AIEmptyResponse as e:
            self._log_failure(result, duration, e.message)
            return AIOperationResult[SummaryResponse](success=False, error=e.message)

        self._log_success(result, duration)
        return AIOperationResult[SummaryResponse](success=True, data=summary)

    async def tag(self, content: str) -> AIOperationResult[TagResponse]:
        start = time.perf_counter()
        result = await self.gateway.generate_tags(content)
        duration = _elapsed_ms(start)

        if not result.success:
            self._log_failure(result, duration, result.error)
            return AIOperationResult[TagResponse](success=False, error=result.error)

        if result.model == AIConfig.FALLBACK_MODEL:
            tags = TagResponse(tags=normalize_tags(DevFallback.TAGS), model=result.model)
            self._log_success(result, duration)
            return AIOperationResult[TagResponse](success=True, data=tags)

        try:
            tags = parse_tag_response(result.text, result.model)
        except AIEmptyResponse as e:
            self._log_failure(result, duration, e.message)
            return AIOperationResult[TagResponse](success=False, error=e.message)

        self._log_success(result, duration)
        return AIOperationResult[TagResponse](success=True, data=tags)

    async def summarize_and_tag(self, content: str) -> AIOperationResult[SummaryAndTags]:
        """
        Run summary and tag generation concurrently.

        Fails if either half fails, naming the failed half; the other half's
        result is discarded.
        """
        summary_result, tag_result = await asyncio.gather(
            self.summarize(content),
            self.tag(content),
        )

        if not summary_result.success:
            return AIOperationResult[SummaryAndTags](
                success=False,
                error=CommonMessage.SUMMARY_GENERATION_FAILED.format(error=summary_result.error),
            )
        if not tag_result.success:
            return AIOperationResult[SummaryAndTags](
                success=False,
                error=CommonMessage.TAG_GENERATION_FAILED.format(error=tag_result.error),
            )

        return AIOperationResult[SummaryAndTags](
            success=True,
            data=SummaryAndTags(summary=summary_result.data, tags=tag_result.data),
        )
