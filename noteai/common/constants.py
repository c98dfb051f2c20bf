class NoteLimits:
    """Input limits for note title and content."""

    CREATE_TITLE_MAX_LENGTH = 200
    UPDATE_TITLE_MAX_LENGTH = 100
    CONTENT_MAX_LENGTH = 10000


class Pagination:
    NOTES_PAGE_SIZE = 20


class NoteSort:
    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"
    UPDATED = "updated"
    DEFAULT = NEWEST


class AIOperation:
    SUMMARIZE = "summarize"
    TAG = "tag"
    CLIENT_INIT = "client_init"


class AIConfig:
    """Generation parameters and limits for the Gemini calls."""

    DEFAULT_MODEL = "gemini-2.0-flash-001"
    FALLBACK_MODEL = "dev-fallback"
    PLACEHOLDER_API_KEY = "your_gemini_api_key_here"
    MAX_INPUT_TOKENS = 8000
    TOKENS_PER_WORD = 1.3
    TRUNCATION_MARKER = "..."

    SUMMARY_TEMPERATURE = 0.3
    SUMMARY_MAX_OUTPUT_TOKENS = 500
    TAG_TEMPERATURE = 0.2
    TAG_MAX_OUTPUT_TOKENS = 200

    MAX_TAGS = 6
    MIN_TAG_LENGTH = 2
    MAX_TAG_LENGTH = 20

    MIN_SUMMARY_LENGTH = 10
    MAX_SUMMARY_LENGTH = 2000
    MIN_SUMMARY_POINTS = 3
    MAX_SUMMARY_POINTS = 6


class DevFallback:
    """Placeholder results returned when no Gemini API key is configured."""

    SUMMARY = (
        "Set a Gemini API key to enable AI summaries.\n\n"
        "This message is shown in development when no API key is configured.\n\n"
        "In production a real AI summary is generated."
    )
    TAGS = ["ai-required", "api-key-missing"]


class AIPrompts:
    """AI-related prompts for various operations."""

    SUMMARY_PROMPT = """Summarize the following note in 3-6 concise key points. Each point should capture one core idea and be written as plain text. Do not use markdown or special symbols.

Note content:
{content}

Summary:"""

    TAG_PROMPT = """Analyze the following note and generate up to 6 of the most relevant tags. List the tags separated by commas.

Note content:
{content}

Tags:"""
