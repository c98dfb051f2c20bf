from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from noteai.api.deps import get_db, get_current_user, get_profile_service
from noteai.schemas.auth import CurrentUser
from noteai.services.profile_service import ProfileService

router = APIRouter()


@router.post("/onboarding/complete")
async def complete_onboarding(
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """
    Mark onboarding as completed for the current user.
    """
    return profile_service.complete_onboarding(db=db, current_user=current_user).to_response()


@router.post("/onboarding/skip")
async def skip_onboarding(
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
):
    return profile_service.skip_onboarding(db=db, current_user=current_user).to_response()


@router.get("/onboarding")
async def get_onboarding_status(
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """
    Get whether the current user has completed onboarding.
    """
    return profile_service.get_onboarding_status(db=db, current_user=current_user).to_response()
