"""
Usage ledger - monthly generation quota per subscription tier.

The monthly counter resets lazily: whenever a check runs in a calendar month
other than the one recorded in last_reset. consume() is a plain
read-modify-write, so concurrent requests from the same user may both be
admitted.
"""
from datetime import datetime

from sqlalchemy.orm import Session

from resumeai.app.core.config import DEFAULT_TIER, TIER_LIMITS
from resumeai.app.core.errors import NotFoundError, QuotaExceededError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.models.user import User

logger = get_logger("services.usage")


def limit_for_tier(tier: str | None) -> int:
    """Monthly limit for a tier; unknown or missing tiers get the free limit."""
    return TIER_LIMITS.get(tier or "", TIER_LIMITS[DEFAULT_TIER])


def needs_reset(last_reset: datetime | None, now: datetime) -> bool:
    if last_reset is None:
        return True
    return (last_reset.year, last_reset.month) != (now.year, now.month)


class UsageService:
    """Service for quota checks"""

    @staticmethod
    def consume(db: Session, user_id: int, now: datetime | None = None) -> User:
        """
        Charge one unit of the user's monthly quota.

        Resets the counter first if the month rolled over, then rejects with
        QuotaExceededError when the counter is at the limit. Every admitted call
        costs one unit whether or not the guarded operation later succeeds.
        """
        now = now or datetime.utcnow()
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        if needs_reset(user.api_usage_last_reset, now):
            logger.info(
                "Monthly usage reset user_id=%s previous=%s",
                user.id,
                user.api_usage_monthly,
            )
            user.api_usage_monthly = 0
            user.api_usage_last_reset = now

        limit = limit_for_tier(user.subscription_type)
        if (user.api_usage_monthly or 0) >= limit:
            db.commit()
            logger.warning(
                "Monthly API limit exceeded user_id=%s tier=%s used=%s limit=%s",
                user.id,
                user.subscription_type,
                user.api_usage_monthly,
                limit,
            )
            raise QuotaExceededError("Monthly API limit exceeded")

        user.api_usage_monthly = (user.api_usage_monthly or 0) + 1
        user.api_usage_total = (user.api_usage_total or 0) + 1
        db.commit()
        db.refresh(user)
        logger.debug("Quota consumed user_id=%s used=%s limit=%s", user.id, user.api_usage_monthly, limit)
        return user

    @staticmethod
    def remaining(user: User, now: datetime | None = None) -> int:
        """Units left this month, without consuming or persisting anything."""
        now = now or datetime.utcnow()
        used = 0 if needs_reset(user.api_usage_last_reset, now) else (user.api_usage_monthly or 0)
        return max(limit_for_tier(user.subscription_type) - used, 0)
