from .user_profile_model import UserProfile
from .note_model import Note
from .note_tag_model import NoteTag
from .summary_model import Summary

__all__ = [
    "UserProfile",
    "Note",
    "NoteTag",
    "Summary",
]
