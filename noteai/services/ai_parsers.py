"""
Turn free-text model output into summaries and tag lists, and check the
quality of already produced results.
"""
import re
from typing import Iterable, List, Optional

from noteai.common.common_message import CommonMessage
from noteai.common.constants import AIConfig
from noteai.common.exceptions import AIEmptyResponse
from noteai.schemas.ai import QualityReport, SummaryResponse, TagResponse

_TAG_SEPARATORS = re.compile(r"[,;\n]")
# \w is Unicode aware, so letters of any script survive.
_TAG_DISALLOWED_CHARS = re.compile(r"[^\w\s]")


def _within_tag_bounds(tag: str) -> bool:
    return AIConfig.MIN_TAG_LENGTH <= len(tag) <= AIConfig.MAX_TAG_LENGTH


def _dedupe(tags: Iterable[str]) -> List[str]:
    seen = set()
    unique = []
    for tag in tags:
        if tag not in seen:
            seen.add(tag)
            unique.append(tag)
    return unique


def parse_summary_response(text: Optional[str], model: str) -> SummaryResponse:
    """Return the model's summary verbatim (trimmed)."""
    summary_text = (text or "").strip()
    if not summary_text:
        raise AIEmptyResponse(CommonMessage.AI_EMPTY_SUMMARY)
    return SummaryResponse(content=summary_text, model=model)


def parse_tags(raw_tags: str) -> List[str]:
    """
    Split a comma/semicolon/newline separated answer into clean tags.

    Each candidate is trimmed, stripped of punctuation and lowercased; only
    tags of 2-20 characters are kept, duplicates are dropped in first-seen
    order, and at most six are returned.
    """
    cleaned = []
    for candidate in _TAG_SEPARATORS.split(raw_tags or ""):
        tag = _TAG_DISALLOWED_CHARS.sub("", candidate.strip()).strip().lower()
        if _within_tag_bounds(tag):
            cleaned.append(tag)
    return _dedupe(cleaned)[: AIConfig.MAX_TAGS]


def parse_tag_response(text: Optional[str], model: str) -> TagResponse:
    tags = parse_tags((text or "").strip())
    if not tags:
        raise AIEmptyResponse(CommonMessage.AI_NO_TAGS)
    return TagResponse(tags=tags, model=model)


def normalize_tags(tags: List[str]) -> List[str]:
    """Lowercase/trim an existing tag list and apply the length and count limits."""
    normalized = [tag.strip().lower() for tag in tags]
    return [tag for tag in normalized if _within_tag_bounds(tag)][: AIConfig.MAX_TAGS]


def count_summary_points(summary: str) -> int:
    return len([line for line in (summary or "").split("\n") if line.strip()])


def validate_tag_quality(tags: Optional[List[str]]) -> QualityReport:
    issues: List[str] = []

    if not tags:
        issues.append("No tags.")
        return QualityReport(is_valid=False, issues=issues)

    if len(tags) > AIConfig.MAX_TAGS:
        issues.append(f"More than {AIConfig.MAX_TAGS} tags.")

    for position, tag in enumerate(tags, start=1):
        if not tag or not tag.strip():
            issues.append(f"Tag {position} is empty.")
        elif len(tag) < AIConfig.MIN_TAG_LENGTH:
            issues.append(f'Tag {position} is too short: "{tag}"')
        elif len(tag) > AIConfig.MAX_TAG_LENGTH:
            issues.append(f'Tag {position} is too long: "{tag}"')

    if len(set(tags)) != len(tags):
        issues.append("Duplicate tags found.")

    return QualityReport(is_valid=not issues, issues=issues)


def validate_summary_quality(summary: Optional[str]) -> QualityReport:
    issues: List[str] = []
    summary = summary or ""

    if not summary.strip():
        issues.append("Summary is empty.")
    if len(summary) < AIConfig.MIN_SUMMARY_LENGTH:
        issues.append("Summary is too short.")
    if len(summary) > AIConfig.MAX_SUMMARY_LENGTH:
        issues.append("Summary is too long.")

    points = count_summary_points(summary)
    if points < AIConfig.MIN_SUMMARY_POINTS:
        issues.append(f"Summary has fewer than {AIConfig.MIN_SUMMARY_POINTS} key points.")
    if points > AIConfig.MAX_SUMMARY_POINTS:
        issues.append(f"Summary has more than {AIConfig.MAX_SUMMARY_POINTS} key points.")

    return QualityReport(is_valid=not issues, issues=issues)
