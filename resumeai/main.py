"""
FastAPI application entry point
"""
import time
import uuid
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from resumeai.app.api.v1 import ai, auth, resume
from resumeai.app.api.v1.user import profile_router
from resumeai.app.core.config import settings
from resumeai.app.core.errors import AppError, AuthError
from resumeai.app.core.logging_config import get_logger, setup_logging
from resumeai.app.core.responses import envelope, error_response, get_request_id
from resumeai.app.db.base import Base
from resumeai.app.db.session import engine
from resumeai.app.services.generation_provider import build_generation_provider

# Import models so they register with Base.metadata
import resumeai.app.models  # noqa: F401

setup_logging()
logger = get_logger("main")
_STARTED_AT = time.monotonic()

# Create database tables
try:
    Base.metadata.create_all(bind=engine)
except Exception as e:
    logger.error("Database error: %s", e)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="AI-assisted resume analysis, enhancement and job matching API",
    version=settings.app_version,
)

# Selected once per process; routes get it through dependencies.get_generation_provider
app.state.generation_provider = build_generation_provider(settings)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Correlation id for every request, echoed in X-Request-ID and the envelope."""
    request.state.request_id = str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


# --- Error handling: every failure is rendered as the envelope ---

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    level = logger.error if exc.status_code >= 500 else logger.info
    level(
        "[%s] %s %s -> %s %s",
        get_request_id(request),
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return error_response(
        request,
        exc.status_code,
        exc.message,
        error=exc.detail if settings.debug else None,
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "path", "query", "header")]
        message = f"{'.'.join(loc)}: {first.get('msg')}" if loc else str(first.get("msg"))
    return error_response(request, 400, message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = str(exc.detail)
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = f"Route not found: {request.method} {request.url.path}"
    return error_response(request, exc.status_code, message, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("[%s] Unhandled error %s %s", get_request_id(request), request.method, request.url.path)
    return error_response(
        request,
        500,
        "Internal server error",
        error=str(exc) if settings.debug else None,
    )


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(profile_router, prefix="/api/user", tags=["user"])
app.include_router(resume.router, prefix="/api/resume", tags=["resume"])
app.include_router(ai.router, prefix="/api/ai", tags=["ai"])


@app.get("/")
def read_root(request: Request):
    """Root endpoint"""
    return envelope(
        request,
        "AI Resume Backend is running!",
        {
            "version": settings.app_version,
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "auth": "/api/auth",
                "resume": "/api/resume",
                "ai": "/api/ai",
                "user": "/api/user",
            },
        },
    )


@app.get("/health")
def health_check(request: Request):
    """Health check endpoint"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "connected"
    except Exception as e:
        logger.warning("Health check database error: %s", e)
        database = "disconnected"
    return envelope(
        request,
        "healthy",
        {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - _STARTED_AT),
            "database": database,
            "generationProvider": request.app.state.generation_provider.name,
        },
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
