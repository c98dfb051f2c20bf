from noteai.common.constants import AIPrompts


def build_summary_prompt(content: str) -> str:
    return AIPrompts.SUMMARY_PROMPT.format(content=content)


def build_tag_prompt(content: str) -> str:
    return AIPrompts.TAG_PROMPT.format(content=content)
