"""
User profile service - profile view with stats, profile updates
"""
from sqlalchemy.orm import Session

from resumeai.app.models.resume import Resume, ResumeStatus
from resumeai.app.models.user import DEFAULT_PREFERENCES, User
from resumeai.app.schemas.user import ApiUsage, ProfileUpdate, UserProfileOut, UserStats, user_to_out
from resumeai.app.services.usage_service import UsageService, limit_for_tier

VALID_THEMES = ("light", "dark")


class UserService:
    @staticmethod
    def get_profile(db: Session, user: User) -> UserProfileOut:
        """User view plus resume counts and usage ledger"""
        base = db.query(Resume).filter(Resume.user_id == user.id)
        total = base.count()
        analyzed = base.filter(
            Resume.status.in_([ResumeStatus.ANALYZED.value, ResumeStatus.ENHANCED.value])
        ).count()
        out = user_to_out(user)
        return UserProfileOut(
            **out.model_dump(),
            stats=UserStats(
                totalResumes=total,
                analyzedResumes=analyzed,
                apiUsage=ApiUsage(**user.api_usage),
                monthlyLimit=limit_for_tier(user.subscription_type),
                remainingThisMonth=UsageService.remaining(user),
            ),
        )

    @staticmethod
    def update_profile(db: Session, user: User, payload: ProfileUpdate) -> User:
        """Apply name/preferences. Invalid theme or non-boolean notifications are ignored."""
        name = (payload.name or "").strip()
        if name:
            user.name = name[:50]

        if payload.preferences is not None:
            prefs = {**DEFAULT_PREFERENCES, **(user.preferences or {})}
            p = payload.preferences
            if p.theme in VALID_THEMES:
                prefs["theme"] = p.theme
            if p.language:
                prefs["language"] = p.language
            if isinstance(p.notifications, bool):
                prefs["notifications"] = p.notifications
            user.preferences = prefs

        db.commit()
        db.refresh(user)
        return user
