# Import all the models, so that Base has them before being
# imported by Alembic
from noteai.models.base_import import Base  # noqa
from noteai.models.user_profile_model import UserProfile  # noqa
from noteai.models.note_model import Note  # noqa
from noteai.models.note_tag_model import NoteTag  # noqa
from noteai.models.summary_model import Summary  # noqa
