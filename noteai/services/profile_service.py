"""
User profile rows and the onboarding flag.

A profile row is created on the first write that needs it (a note or an
onboarding action). Reading the onboarding status never creates one.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from noteai.common.common_message import CommonMessage
from noteai.common.exceptions import NoteAIError, PersistenceFailure
from noteai.common.response_common import ResponseCommon
from noteai.models import UserProfile
from noteai.schemas.auth import CurrentUser
from noteai.schemas.profile import OnboardingStatus
from noteai.services.auth_service import require_user

logger = logging.getLogger(__name__)


def ensure_profile(db: Session, user_id: str) -> UserProfile:
    """Return the user's profile row, inserting it first if it does not exist."""
    profile = db.get(UserProfile, user_id)
    if profile is not None:
        return profile

    db.add(UserProfile(id=user_id))
    try:
        db.commit()
    except IntegrityError:
        # created concurrently
        db.rollback()
    return db.get(UserProfile, user_id)


class ProfileService:

    def _set_onboarding(self, db: Session, current_user: Optional[CurrentUser], message: str) -> ResponseCommon:
        try:
            user = require_user(current_user)
            profile = ensure_profile(db, user.id)
            profile.onboarding_completed = True
            db.commit()
        except NoteAIError as e:
            return ResponseCommon.from_error(e)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to update onboarding for %s: %s", current_user.id, e, exc_info=True)
            return ResponseCommon.from_error(PersistenceFailure(CommonMessage.ONBOARDING_UPDATE_FAILED))

        logger.info("Onboarding marked complete for user %s", user.id)
        return ResponseCommon.success_response(data=OnboardingStatus(completed=True), message=message)

    def complete_onboarding(self, db: Session, current_user: Optional[CurrentUser]) -> ResponseCommon:
        return self._set_onboarding(db, current_user, CommonMessage.ONBOARDING_COMPLETED_SUCCESS)

    def skip_onboarding(self, db: Session, current_user: Optional[CurrentUser]) -> ResponseCommon:
        """Skipping finishes onboarding the same way completing it does."""
        return self._set_onboarding(db, current_user, CommonMessage.ONBOARDING_SKIPPED_SUCCESS)

    def get_onboarding_status(self, db: Session, current_user: Optional[CurrentUser]) -> ResponseCommon:
        """
        Whether the caller has finished onboarding.

        Anonymous callers get a 401 with ``completed`` false. A user without
        a profile row has not completed it.
        """
        try:
            user = require_user(current_user)
            profile = db.get(UserProfile, user.id)
        except NoteAIError as e:
            return ResponseCommon.from_error(e, data=OnboardingStatus(completed=False))
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to load onboarding status for %s: %s", current_user.id, e, exc_info=True)
            return ResponseCommon.from_error(
                PersistenceFailure(CommonMessage.ONBOARDING_STATUS_FAILED),
                data=OnboardingStatus(completed=False),
            )

        completed = bool(profile and profile.onboarding_completed)
        return ResponseCommon.success_response(
            data=OnboardingStatus(completed=completed),
            message=CommonMessage.ONBOARDING_STATUS_RETRIEVED_SUCCESS,
        )
