"""
Rough token accounting used to keep prompts under the model's input budget.

The estimate is word based (words x 1.3), not the provider's tokenizer.
"""
import math
from typing import List

from noteai.common.constants import AIConfig


def _words(text: str) -> List[str]:
    return text.split()


def estimate_token_count(text: str) -> int:
    if not text or not text.strip():
        return 0
    return math.ceil(len(_words(text)) * AIConfig.TOKENS_PER_WORD)


def is_token_limit_exceeded(text: str, max_tokens: int = AIConfig.MAX_INPUT_TOKENS) -> bool:
    return estimate_token_count(text) > max_tokens


def truncate_to_token_limit(text: str, max_tokens: int = AIConfig.MAX_INPUT_TOKENS) -> str:
    """
    Cut ``text`` down to ``max_tokens`` whole words.

    Text within the budget is returned unchanged. Otherwise words are taken
    greedily while the running estimate stays within the budget and the
    truncation marker is appended when anything was dropped.

    The result is always shorter than ``text``. When even the marker alone
    would not be (inputs of three characters or fewer), the marker is left
    off and the result can be empty: ``truncate_to_token_limit("a b", 2)``
    returns ``""``.
    """
    if not is_token_limit_exceeded(text, max_tokens):
        return text

    kept: List[str] = []
    current_tokens = 0
    for word in _words(text):
        word_tokens = estimate_token_count(word)
        if current_tokens + word_tokens > max_tokens:
            break
        kept.append(word)
        current_tokens += word_tokens

    # The marker must not make the result longer than the input.
    marker = AIConfig.TRUNCATION_MARKER
    while kept and len(" ".join(kept)) + len(marker) >= len(text):
        kept.pop()

    truncated = " ".join(kept)
    if len(truncated) + len(marker) < len(text):
        truncated += marker
    return truncated
