"""
User database model - identity, credentials, subscription tier, usage ledger
"""
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from resumeai.app.db.base import Base

DEFAULT_PREFERENCES = {"theme": "light", "language": "en", "notifications": True}


def _default_preferences() -> dict:
    return dict(DEFAULT_PREFERENCES)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)

    subscription_type = Column(String(20), nullable=False, default="free")  # free | premium | enterprise

    # Usage ledger
    api_usage_monthly = Column(Integer, nullable=False, default=0)
    api_usage_total = Column(Integer, nullable=False, default=0)
    api_usage_last_reset = Column(DateTime, nullable=False, default=datetime.utcnow)

    preferences = Column(JSON, default=_default_preferences)  # {theme, language, notifications}
    is_active = Column(Integer, default=1)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    resumes = relationship("Resume", back_populates="user")

    @property
    def api_usage(self) -> dict:
        return {
            "monthly": self.api_usage_monthly or 0,
            "total": self.api_usage_total or 0,
            "lastReset": self.api_usage_last_reset,
        }
