"""
User Pydantic schemas for request/response validation
"""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, EmailStr, Field


class UserRegister(BaseModel):
    """Schema for user registration"""
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)

    model_config = {"str_strip_whitespace": True}


class UserLogin(BaseModel):
    """Schema for user login"""
    email: EmailStr
    password: str = Field(min_length=1)


class Preferences(BaseModel):
    theme: Literal["light", "dark"] = "light"
    language: str = "en"
    notifications: bool = True


class PreferencesUpdate(BaseModel):
    """Invalid values are ignored by UserService.update_profile, not rejected."""
    theme: Optional[str] = None
    language: Optional[str] = None
    notifications: Optional[Any] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    preferences: Optional[PreferencesUpdate] = None


class PasswordChange(BaseModel):
    currentPassword: str = Field(min_length=1)
    newPassword: str = Field(min_length=6)


class ApiUsage(BaseModel):
    monthly: int = 0
    total: int = 0
    lastReset: Optional[datetime] = None


class UserSummary(BaseModel):
    """Compact user shape returned with a token"""
    id: int
    name: str
    email: str
    subscriptionType: str


class UserOut(BaseModel):
    """Outward user view. The password hash is never part of it."""
    id: int
    name: str
    email: str
    subscriptionType: str
    apiUsage: ApiUsage
    preferences: Preferences
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class UserStats(BaseModel):
    totalResumes: int
    analyzedResumes: int
    apiUsage: ApiUsage
    monthlyLimit: int
    remainingThisMonth: int


class UserProfileOut(UserOut):
    stats: UserStats


class TokenData(BaseModel):
    token: str
    user: UserSummary


def user_to_summary(user) -> UserSummary:
    return UserSummary(
        id=user.id,
        name=user.name,
        email=user.email,
        subscriptionType=user.subscription_type or "free",
    )


def user_to_out(user) -> UserOut:
    """Convert User DB model to outward schema"""
    prefs = user.preferences if isinstance(user.preferences, dict) else {}
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        subscriptionType=user.subscription_type or "free",
        apiUsage=ApiUsage(**user.api_usage),
        preferences=Preferences(**{**Preferences().model_dump(), **prefs}),
        createdAt=user.created_at,
        updatedAt=user.updated_at,
    )
