"""
Pytest fixtures for ResumeAI API tests.
Uses in-memory SQLite, a stub generation provider, test users and auth tokens.
"""
import os
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Use in-memory SQLite for tests - set before config/session load
# Must override any .env DATABASE_URL / OPENAI_API_KEY
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["OPENAI_API_KEY"] = ""

from resumeai.app.db.base import Base
from resumeai.main import app
from resumeai.app.core.dependencies import get_db, get_generation_provider
from resumeai.app.core.errors import ProviderError
from resumeai.app.core.security import create_access_token, get_password_hash
from resumeai.app.models.resume import Resume, ResumeStatus
from resumeai.app.models.user import User
from resumeai.app.schemas.resume import AnalysisResult, JobMatchResult
from resumeai.app.services.generation_provider import GenerationProvider

# In-memory SQLite for tests - StaticPool ensures all sessions share same DB
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Patch the session module so app uses our test engine
import resumeai.app.db.session as session_module
session_module.engine = engine
session_module.SessionLocal = TestingSessionLocal
# main.py imports engine directly; patch so /health uses our engine
import resumeai.main as main_module
main_module.engine = engine


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


class StubProvider(GenerationProvider):
    """Deterministic provider. on_call(op) runs before each result is returned."""

    name = "stub"

    def __init__(self, score=81, ats=77, match_score=70, on_call=None):
        self.score = score
        self.ats = ats
        self.match_score = match_score
        self.on_call = on_call
        self.calls = []

    def _record(self, op, *args):
        self.calls.append((op, args))
        if self.on_call:
            self.on_call(op)

    def analyze(self, resume_text):
        self._record("analyze", resume_text)
        return AnalysisResult(
            score=self.score,
            strengths=["Clear structure"],
            weaknesses=["Few metrics"],
            keywords=["Python", "FastAPI"],
            suggestions=["Quantify impact"],
            atsCompatibility=self.ats,
        )

    def enhance(self, resume_text, target_role, target_industry):
        self._record("enhance", resume_text, target_role, target_industry)
        return f"Enhanced for {target_role} / {target_industry}: {resume_text}"

    def match(self, resume_text, job_title, job_description, company_name=""):
        self._record("match", resume_text, job_title, job_description, company_name)
        return JobMatchResult(
            matchScore=self.match_score,
            matchedKeywords=["Python"],
            missingKeywords=["Kubernetes"],
            suggestions=["Mention cloud work"],
            strengthAreas=["Backend"],
            improvementAreas=["Ops"],
            salaryNegotiationPoints=["API design"],
        )


class FailingProvider(GenerationProvider):
    """Every call fails the way an unreachable or misbehaving LLM would."""

    name = "failing"

    def analyze(self, resume_text):
        raise ProviderError("connection refused")

    def enhance(self, resume_text, target_role, target_industry):
        raise ProviderError("connection refused")

    def match(self, resume_text, job_title, job_description, company_name=""):
        raise ProviderError("malformed JSON")


@pytest.fixture(scope="function")
def db_session():
    """Create tables and a fresh DB session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def _make_user(db_session, user_id, email, tier="free"):
    user = User(
        id=user_id,
        name="Test User",
        email=email,
        hashed_password=get_password_hash("testpass123"),
        subscription_type=tier,
        is_active=1,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session):
    """Free-tier test user in the DB."""
    return _make_user(db_session, 1, "alice@example.com")


@pytest.fixture
def other_user(db_session):
    return _make_user(db_session, 2, "bob@example.com")


def headers_for(user):
    token = create_access_token(data={"sub": str(user.id), "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user):
    """Bearer token for test user."""
    return headers_for(test_user)


@pytest.fixture
def other_headers(other_user):
    return headers_for(other_user)


@pytest.fixture
def stub_provider():
    return StubProvider()


@pytest.fixture
def use_provider():
    """Install a provider for the app: use_provider(FailingProvider())."""
    def _install(provider):
        app.dependency_overrides[get_generation_provider] = lambda: provider
        return provider
    yield _install
    app.dependency_overrides.pop(get_generation_provider, None)


@pytest.fixture
def client(db_session, test_user, use_provider, stub_provider):
    """TestClient with DB, test user and stub provider pre-seeded."""
    use_provider(stub_provider)
    return TestClient(app)


@pytest.fixture
def make_resume(db_session):
    """Insert a resume row directly: make_resume(user, status=..., text=...)."""
    counter = {"n": 0}

    def _make(user, status=ResumeStatus.UPLOADED, text="Jane Doe\nPython developer, 5 years.", file_name=None):
        counter["n"] += 1
        resume = Resume(
            user_id=user.id,
            title=f"Resume {counter['n']}",
            original_text=text,
            file_name=file_name or f"resume_{counter['n']}.txt",
            file_type="txt",
            status=ResumeStatus(status).value,
            job_matching=[],
            versions=[],
        )
        db_session.add(resume)
        db_session.commit()
        db_session.refresh(resume)
        return resume

    return _make
