class CommonMessage:
    """User-facing response messages."""

    # Auth
    LOGIN_REQUIRED = "Login required."

    # Validation
    TITLE_REQUIRED = "Please enter a title."
    TITLE_TOO_LONG = "Title must be {max_length} characters or fewer."
    CONTENT_REQUIRED = "Please enter content."
    CONTENT_TOO_LONG = "Content must be 10,000 characters or fewer."

    # Notes
    NOTE_NOT_FOUND = "Note not found."
    NOTE_CREATED_SUCCESS = "Note created successfully"
    NOTE_CREATE_FAILED = "Failed to save the note. Please try again later."
    NOTE_RETRIEVED_SUCCESS = "Note retrieved successfully"
    NOTE_RETRIEVE_FAILED = "Failed to load the note."
    NOTES_LIST_RETRIEVED_SUCCESS = "Notes retrieved successfully"
    NOTES_LIST_FAILED = "Failed to load notes."
    NOTE_UPDATED_SUCCESS = "Note updated successfully"
    NOTE_UPDATE_FAILED = "Failed to update the note. Please try again later."
    NOTE_DELETED_SUCCESS = "Note deleted successfully"
    NOTE_DELETE_FAILED = "Failed to delete the note. Please try again later."
    NOTE_CONTENT_EMPTY = "The note has no content to process."

    # Onboarding
    ONBOARDING_COMPLETED_SUCCESS = "Onboarding completed"
    ONBOARDING_SKIPPED_SUCCESS = "Onboarding skipped"
    ONBOARDING_STATUS_RETRIEVED_SUCCESS = "Onboarding status retrieved successfully"
    ONBOARDING_UPDATE_FAILED = "Failed to update onboarding status."
    ONBOARDING_STATUS_FAILED = "Failed to load onboarding status."

    # AI
    SUMMARY_CREATED_SUCCESS = "Summary generated successfully"
    SUMMARY_GENERATION_FAILED = "Summary generation failed: {error}"
    SUMMARY_SAVE_FAILED = "Failed to save the summary."
    TAGS_CREATED_SUCCESS = "Tags generated successfully"
    TAG_GENERATION_FAILED = "Tag generation failed: {error}"
    TAGS_SAVE_FAILED = "Failed to save the tags."
    AI_REGENERATED_SUCCESS = "Summary and tags generated successfully"
    AI_NOTHING_TO_SUMMARIZE = "There is no content to summarize."
    AI_NOTHING_TO_TAG = "There is no content to generate tags from."
    AI_EMPTY_RESPONSE = "The AI response contained no usable text."
    AI_EMPTY_SUMMARY = "The generated summary is empty."
    AI_NO_TAGS = "No tags were generated."
    AI_CLIENT_INIT_FAILED = "Could not initialize the Gemini API client."
    AI_UNSUPPORTED_ACTION = "Unsupported action. (summarize, tags, both)"
    AI_CONTENT_REQUIRED = "Text content is required."

    # Call log
    API_LOGS_RETRIEVED_SUCCESS = "API call logs retrieved successfully"
    API_STATS_RETRIEVED_SUCCESS = "API call statistics retrieved successfully"
    API_LOGS_CLEANED_SUCCESS = "API call logs cleaned up"
    TOKEN_USAGE_RETRIEVED_SUCCESS = "Token usage retrieved successfully"
