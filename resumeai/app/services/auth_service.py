"""
Authentication service business logic
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resumeai.app.core.logging_config import get_logger
from resumeai.app.core.security import create_access_token, get_password_hash, verify_password
from resumeai.app.models.user import User
from resumeai.app.schemas.user import UserLogin, UserRegister

logger = get_logger("services.auth")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def issue_token(user: User) -> str:
    return create_access_token(data={"sub": str(user.id), "email": user.email})


class AuthService:
    """Service for authentication operations"""

    @staticmethod
    def register_user(db: Session, user_data: UserRegister):
        """Register a new user"""
        email = normalize_email(user_data.email)
        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            return {"success": False, "message": "Email already exists"}

        new_user = User(
            name=user_data.name,
            email=email,
            hashed_password=get_password_hash(user_data.password),
        )
        db.add(new_user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return {"success": False, "message": "Email already exists"}
        db.refresh(new_user)

        return {
            "success": True,
            "user": new_user,
            "message": "User registered successfully",
            "token": issue_token(new_user),
        }

    @staticmethod
    def login_user(db: Session, login_data: UserLogin):
        """Authenticate user and return access token"""
        user = db.query(User).filter(User.email == normalize_email(login_data.email)).first()

        # Same message for unknown email and wrong password
        if not user or not verify_password(login_data.password, user.hashed_password):
            return {"success": False, "message": "Invalid credentials"}

        if not user.is_active:
            return {"success": False, "message": "User account is inactive"}

        return {
            "success": True,
            "token": issue_token(user),
            "user": user,
            "message": "Login successful",
        }

    @staticmethod
    def change_password(db: Session, user: User, current_password: str, new_password: str):
        """Replace the stored hash after verifying the current password"""
        if not verify_password(current_password, user.hashed_password):
            return {"success": False, "message": "Current password is incorrect"}
        user.hashed_password = get_password_hash(new_password)
        db.commit()
        logger.info("Password changed user_id=%s", user.id)
        return {"success": True, "message": "Password updated successfully"}
