import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from noteai.api.deps import get_ai_service, get_api_logger, get_current_user
from noteai.common.common_message import CommonMessage
from noteai.common.response_common import ResponseCommon
from noteai.schemas.ai import AIGenerateRequest
from noteai.schemas.auth import CurrentUser
from noteai.services.ai_service import AIService
from noteai.services.api_call_logger import ApiCallLogger

logger = logging.getLogger(__name__)

router = APIRouter()


def _login_required():
    return ResponseCommon.error_response(
        message=CommonMessage.LOGIN_REQUIRED,
        code=status.HTTP_401_UNAUTHORIZED,
    ).to_response()


def _ai_failure(error: str):
    return ResponseCommon.error_response(message=error, code=status.HTTP_502_BAD_GATEWAY).to_response()


@router.post("/generate")
async def generate(
    request: AIGenerateRequest,
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    ai_service: AIService = Depends(get_ai_service),
):
    """
    Run summary and/or tag generation on arbitrary text.

    - **action**: summarize, tags or both
    - **content**: text to process
    """
    if current_user is None:
        return _login_required()

    if not request.content or not request.content.strip():
        return ResponseCommon.error_response(message=CommonMessage.AI_CONTENT_REQUIRED).to_response()

    logger.info("AI generate request: action=%s length=%d", request.action, len(request.content))

    if request.action == "summarize":
        result = await ai_service.summarize(request.content)
        if not result.success:
            return _ai_failure(result.error)
        return ResponseCommon.success_response(data={"summary": result.data.content}).to_json()

    if request.action == "tags":
        result = await ai_service.tag(request.content)
        if not result.success:
            return _ai_failure(result.error)
        return ResponseCommon.success_response(data={"tags": result.data.tags}).to_json()

    if request.action == "both":
        result = await ai_service.summarize_and_tag(request.content)
        if not result.success:
            return _ai_failure(result.error)
        return ResponseCommon.success_response(
            data={"summary": result.data.summary.content, "tags": result.data.tags.tags}
        ).to_json()

    return ResponseCommon.error_response(message=CommonMessage.AI_UNSUPPORTED_ACTION).to_response()


@router.get("/logs")
async def recent_logs(
    limit: int = Query(50, ge=1, le=500, description="Maximum number of entries, newest first"),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    api_logger: ApiCallLogger = Depends(get_api_logger),
):
    if current_user is None:
        return _login_required()
    return ResponseCommon.success_response(
        data=api_logger.recent_logs(limit),
        message=CommonMessage.API_LOGS_RETRIEVED_SUCCESS,
    ).to_json()


@router.get("/stats")
async def api_stats(
    days: int = Query(7, ge=1, description="Trailing window in days"),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    api_logger: ApiCallLogger = Depends(get_api_logger),
):
    if current_user is None:
        return _login_required()
    return ResponseCommon.success_response(
        data=api_logger.stats(days),
        message=CommonMessage.API_STATS_RETRIEVED_SUCCESS,
    ).to_json()


@router.get("/usage/today")
async def today_usage(
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    api_logger: ApiCallLogger = Depends(get_api_logger),
):
    if current_user is None:
        return _login_required()
    return ResponseCommon.success_response(
        data=api_logger.today_token_usage(),
        message=CommonMessage.TOKEN_USAGE_RETRIEVED_SUCCESS,
    ).to_json()


@router.delete("/logs")
async def cleanup_logs(
    days_to_keep: int = Query(30, ge=0, description="Entries older than this are dropped; 0 clears everything"),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    api_logger: ApiCallLogger = Depends(get_api_logger),
):
    if current_user is None:
        return _login_required()
    kept = api_logger.cleanup(days_to_keep)
    return ResponseCommon.success_response(
        data={"kept": kept},
        message=CommonMessage.API_LOGS_CLEANED_SUCCESS,
    ).to_json()
