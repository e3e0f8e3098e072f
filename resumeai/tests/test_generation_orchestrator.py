"""Tests for GenerationOrchestrator fallback and rollback behaviour"""
import random

import pytest

from resumeai.app.core.errors import InternalError, ValidationError
from resumeai.app.models.resume import Resume, ResumeStatus
from resumeai.app.services.generation_orchestrator import GenerationOrchestrator
from resumeai.app.services.generation_provider import FallbackGenerationProvider
from conftest import FailingProvider, StubProvider


class _ExplodingProvider(StubProvider):
    def analyze(self, resume_text):
        raise KeyError("score")


def test_analyze_with_stub(db_session, test_user, make_resume):
    resume = make_resume(test_user)
    result = GenerationOrchestrator(StubProvider(score=64)).analyze(db_session, resume)
    assert result.score == 64
    assert resume.status == ResumeStatus.ANALYZED.value
    assert resume.analysis_results["score"] == 64


def test_analyze_falls_back_on_provider_error(db_session, test_user, make_resume):
    resume = make_resume(test_user)
    orchestrator = GenerationOrchestrator(FailingProvider(), fallback=FallbackGenerationProvider(random.Random(7)))
    result = orchestrator.analyze(db_session, resume)
    assert 75 <= result.score <= 94
    assert 80 <= result.atsCompatibility <= 94
    assert resume.status == ResumeStatus.ANALYZED.value


def test_analyze_falls_back_on_unexpected_provider_bug(db_session, test_user, make_resume):
    resume = make_resume(test_user)
    result = GenerationOrchestrator(_ExplodingProvider()).analyze(db_session, resume)
    assert result.strengths
    assert resume.status == ResumeStatus.ANALYZED.value


def test_failed_save_rolls_status_back_to_uploaded(db_session, test_user, make_resume, monkeypatch):
    resume = make_resume(test_user, status=ResumeStatus.ANALYZED)
    resume_id = resume.id
    real_commit = db_session.commit
    commits = {"n": 0}

    def flaky_commit():
        commits["n"] += 1
        if commits["n"] == 2:
            raise RuntimeError("disk I/O error")
        real_commit()

    monkeypatch.setattr(db_session, "commit", flaky_commit)

    with pytest.raises(InternalError):
        GenerationOrchestrator(StubProvider()).analyze(db_session, resume)

    monkeypatch.undo()
    db_session.expire_all()
    stored = db_session.get(Resume, resume_id)
    assert stored.status == ResumeStatus.UPLOADED.value
    assert stored.analysis_results is None


def test_blank_text_is_rejected_before_status_change(db_session, test_user, make_resume):
    resume = make_resume(test_user, text="   ")
    provider = StubProvider()
    with pytest.raises(ValidationError):
        GenerationOrchestrator(provider).analyze(db_session, resume)
    assert resume.status == ResumeStatus.UPLOADED.value
    assert provider.calls == []


def test_enhance_falls_back_and_sets_enhanced(db_session, test_user, make_resume):
    resume = make_resume(test_user, text="Body")
    text = GenerationOrchestrator(FailingProvider()).enhance(db_session, resume, "PM", "Retail")
    assert text.startswith("[ENHANCED FOR PM IN Retail]")
    assert "Body" in text
    assert resume.status == ResumeStatus.ENHANCED.value
    assert resume.target_role == "PM"


def test_match_passes_company_and_keeps_status(db_session, test_user, make_resume):
    resume = make_resume(test_user, status=ResumeStatus.ENHANCED)
    provider = StubProvider()
    GenerationOrchestrator(provider).match(db_session, resume, "Dev", "Python", "Acme")
    assert provider.calls[0][1][-1] == "Acme"
    assert resume.status == ResumeStatus.ENHANCED.value
    assert len(resume.job_matching) == 1
    assert resume.job_matching[0]["missingKeywords"] == ["Kubernetes"]
    assert resume.job_matching[0]["createdAt"]
