"""
User profile endpoints - profile with usage stats, profile and password updates
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from resumeai.app.core.dependencies import get_current_user, get_db
from resumeai.app.core.errors import ValidationError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.core.responses import envelope
from resumeai.app.models.user import User
from resumeai.app.schemas.user import PasswordChange, ProfileUpdate, user_to_out
from resumeai.app.services.auth_service import AuthService
from resumeai.app.services.user_service import UserService

logger = get_logger("api.user.profile")
router = APIRouter()


@router.get("/profile")
def get_profile(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Current user's profile with resume counts and API usage."""
    profile = UserService.get_profile(db, current_user)
    return envelope(request, "Profile retrieved successfully", {"user": profile})


@router.put("/profile")
def update_profile(
    payload: ProfileUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update name and/or preferences (theme, language, notifications)."""
    user = UserService.update_profile(db, current_user, payload)
    logger.info("Profile updated user_id=%s", user.id)
    return envelope(request, "Profile updated successfully", {"user": user_to_out(user)})


@router.put("/password")
def change_password(
    payload: PasswordChange,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = AuthService.change_password(db, current_user, payload.currentPassword, payload.newPassword)
    if not result["success"]:
        raise ValidationError(result["message"])
    return envelope(request, result["message"])
