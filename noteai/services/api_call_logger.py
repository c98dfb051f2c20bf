"""
In-memory record of Gemini API calls and per-day token usage.

One ``ApiCallLogger`` lives on ``app.state`` for the lifetime of the process;
nothing is persisted. Mutations take a lock because requests may be served
from a thread pool.
"""
import logging
from datetime import datetime, timedelta
from threading import Lock
from typing import Callable, Dict, List, Optional, Union

from noteai.common.constants import AIOperation
from noteai.schemas.ai import ApiCallLog, ApiStats, TokenUsage

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ApiCallLogger:

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or _local_now
        self._lock = Lock()
        self._logs: List[ApiCallLog] = []
        self._token_usage: Dict[str, TokenUsage] = {}

    def _today(self) -> str:
        return self._clock().date().isoformat()

    def record(
        self,
        operation: str,
        success: bool,
        duration: float,
        token_count: Optional[int] = None,
        error: Optional[str] = None,
        model: Optional[str] = None,
    ) -> ApiCallLog:
        """
        Append a call to the log and add its tokens to today's usage.

        Args:
            operation: summarize, tag, client_init or another operation name
            success: whether the call produced a usable result
            duration: wall time in milliseconds
            token_count: estimated tokens spent, if known
            error: failure message
            model: model identifier that served the call

        Returns:
            The stored log entry
        """
        entry = ApiCallLog(
            timestamp=self._clock(),
            operation=operation,
            success=success,
            duration=duration,
            token_count=token_count,
            error=error,
            model=model,
        )

        with self._lock:
            self._logs.append(entry)
            if token_count and token_count > 0:
                self._add_token_usage(operation, token_count)

        logger.info(
            "[AI API] %s: %s (%.0fms) tokens=%s model=%s error=%s",
            operation,
            "SUCCESS" if success else "FAILED",
            duration,
            token_count,
            model,
            error,
        )
        return entry

    def _add_token_usage(self, operation: str, token_count: int) -> None:
        today = self._today()
        usage = self._token_usage.get(today) or TokenUsage(date=today)

        usage.total_tokens += token_count
        usage.api_calls += 1
        if operation == AIOperation.SUMMARIZE:
            usage.summarize_tokens += token_count
        elif operation == AIOperation.TAG:
            usage.tag_tokens += token_count

        self._token_usage[today] = usage

    def log_error(
        self,
        operation: str,
        error: Union[Exception, str],
        context: Optional[dict] = None,
    ) -> ApiCallLog:
        message = str(error) if isinstance(error, Exception) else error
        logger.error(
            "[AI ERROR] %s: %s context=%s",
            operation,
            message,
            context,
            exc_info=error if isinstance(error, Exception) else None,
        )
        return self.record(operation=operation, success=False, duration=0, error=message)

    def log_success(
        self,
        operation: str,
        duration: float,
        token_count: Optional[int] = None,
        model: Optional[str] = None,
    ) -> ApiCallLog:
        return self.record(
            operation=operation,
            success=True,
            duration=duration,
            token_count=token_count,
            model=model,
        )

    def today_token_usage(self) -> Optional[TokenUsage]:
        with self._lock:
            usage = self._token_usage.get(self._today())
            return usage.model_copy() if usage else None

    def recent_logs(self, limit: int = 50) -> List[ApiCallLog]:
        """Newest first, at most ``limit`` entries."""
        with self._lock:
            ordered = sorted(self._logs, key=lambda log: log.timestamp, reverse=True)
        return ordered[: max(limit, 0)]

    def stats(self, days: int = 7) -> ApiStats:
        cutoff = self._clock() - timedelta(days=days)
        with self._lock:
            window = [log for log in self._logs if log.timestamp >= cutoff]

        total_calls = len(window)
        if total_calls == 0:
            return ApiStats()

        success_calls = sum(1 for log in window if log.success)
        return ApiStats(
            total_calls=total_calls,
            success_rate=success_calls / total_calls * 100,
            average_duration=sum(log.duration for log in window) / total_calls,
            total_tokens=sum(log.token_count or 0 for log in window),
            error_count=total_calls - success_calls,
        )

    def cleanup(self, days_to_keep: int = 30) -> int:
        """
        Drop log entries and daily usage older than ``days_to_keep`` days.

        ``days_to_keep=0`` empties both stores. Returns the number of log
        entries kept.
        """
        with self._lock:
            if days_to_keep <= 0:
                self._logs.clear()
                self._token_usage.clear()
            else:
                cutoff = self._clock() - timedelta(days=days_to_keep)
                cutoff_day = cutoff.date().isoformat()
                self._logs = [log for log in self._logs if log.timestamp >= cutoff]
                self._token_usage = {
                    day: usage for day, usage in self._token_usage.items() if day >= cutoff_day
                }
            kept = len(self._logs)

        logger.info("[AI Logger] Cleanup finished. %d log entries kept.", kept)
        return kept
