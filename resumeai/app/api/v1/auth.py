"""
Authentication endpoints - Register, Login, Get Current User
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from resumeai.app.core.dependencies import get_current_user, get_db
from resumeai.app.core.errors import AuthError, ValidationError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.core.responses import envelope
from resumeai.app.models.user import User
from resumeai.app.schemas.user import TokenData, UserLogin, UserRegister, user_to_out, user_to_summary
from resumeai.app.services.auth_service import AuthService

logger = get_logger("api.auth")
router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, request: Request, db: Session = Depends(get_db)):
    """
    Register a new user account. Returns a token (user is logged in after register).

    - **name**: Display name (2-50 characters)
    - **email**: Email address (unique, case-insensitive)
    - **password**: Password (at least 6 characters)
    """
    logger.info("Registration attempt for email=%s", user_data.email)
    result = AuthService.register_user(db, user_data)

    if not result["success"]:
        logger.warning(
            "Registration failed email=%s reason=%s",
            user_data.email,
            result["message"],
        )
        raise ValidationError(result["message"])

    user = result["user"]
    logger.info(
        "User registered successfully user_id=%s email=%s",
        user.id,
        user.email,
    )
    return envelope(
        request,
        result["message"],
        TokenData(token=result["token"], user=user_to_summary(user)),
    )


@router.post("/login")
def login(login_data: UserLogin, request: Request, db: Session = Depends(get_db)):
    """
    Login user and get access token

    - **email**: User's email address
    - **password**: User's password
    """
    logger.info("Login attempt for email=%s", login_data.email)
    result = AuthService.login_user(db, login_data)

    if not result["success"]:
        logger.warning(
            "Login failed email=%s reason=%s",
            login_data.email,
            result["message"],
        )
        raise AuthError(result["message"])

    user = result["user"]
    logger.info(
        "User logged in successfully user_id=%s email=%s",
        user.id,
        user.email,
    )
    return envelope(
        request,
        result["message"],
        TokenData(token=result["token"], user=user_to_summary(user)),
    )


@router.get("/me")
def get_me(request: Request, current_user: User = Depends(get_current_user)):
    """Current authenticated user. Used to refresh auth state on app load."""
    return envelope(request, "User retrieved successfully", {"user": user_to_out(current_user)})
