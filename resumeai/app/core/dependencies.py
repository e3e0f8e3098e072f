"""
Dependency injection utilities
"""
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from resumeai.app.core.errors import AuthError, ForbiddenError, NotFoundError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.core.security import decode_access_token
from resumeai.app.db.session import SessionLocal
from resumeai.app.models.user import User
from resumeai.app.services.generation_orchestrator import GenerationOrchestrator
from resumeai.app.services.generation_provider import GenerationProvider

logger = get_logger("core.dependencies")
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenIdentity:
    """Decoded identity claim attached to an authenticated request"""
    user_id: int
    email: str


def get_db() -> Session:
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _token_from_header(request: Request) -> str:
    parts = request.headers.get("Authorization", "").split()
    return parts[1] if len(parts) > 1 else ""


def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenIdentity:
    """
    Verify the bearer token and resolve the identity claim.
    Stateless: no database lookup. Missing token -> 401, anything unverifiable -> 403.
    The token is the second word of the Authorization header whatever the scheme.
    """
    token = credentials.credentials if credentials else _token_from_header(request)
    if not token:
        raise AuthError("Token required")
    try:
        payload = decode_access_token(token)
        identity = TokenIdentity(user_id=int(payload["sub"]), email=payload.get("email", ""))
    except (JWTError, KeyError, TypeError, ValueError):
        logger.info("Rejected bearer token path=%s", request.url.path)
        raise ForbiddenError("Invalid or expired token")
    request.state.identity = identity
    return identity


def get_current_user(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    """Load the live User record for the authenticated identity"""
    user = db.query(User).filter(User.id == identity.user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def get_generation_provider(request: Request) -> GenerationProvider:
    """Provider selected once at import (see main.app.state)"""
    return request.app.state.generation_provider


def get_orchestrator(
    provider: GenerationProvider = Depends(get_generation_provider),
) -> GenerationOrchestrator:
    return GenerationOrchestrator(provider)
