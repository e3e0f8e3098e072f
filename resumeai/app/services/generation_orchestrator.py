"""
Generation orchestrator - fetch record, call provider, persist result, advance status.

Provider failures never reach the caller: each operation falls back to
FallbackGenerationProvider exactly once (no retries).
"""
from datetime import datetime
from typing import Callable, TypeVar

from sqlalchemy.orm import Session

from resumeai.app.core.errors import InternalError, InvalidTransitionError, ProviderError, ValidationError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.models.resume import Resume, ResumeStatus
from resumeai.app.schemas.resume import AnalysisResult, JobMatchResult
from resumeai.app.services.generation_provider import FallbackGenerationProvider, GenerationProvider
from resumeai.app.services.resume_lifecycle import transition

logger = get_logger("services.generation_orchestrator")

T = TypeVar("T")


def _require_text(resume: Resume, action: str) -> None:
    if not (resume.original_text or "").strip():
        raise ValidationError(f"Resume has no content to {action}")


class GenerationOrchestrator:
    """Runs analyze / enhance / match against a provider with fallback-on-failure."""

    def __init__(self, provider: GenerationProvider, fallback: GenerationProvider | None = None):
        self.provider = provider
        self.fallback = fallback or FallbackGenerationProvider()

    def _generate(self, operation: str, resume_id: int, call: Callable[[GenerationProvider], T]) -> T:
        try:
            return call(self.provider)
        except ProviderError as e:
            logger.warning(
                "Provider failed op=%s provider=%s resume_id=%s error=%s; using fallback",
                operation,
                self.provider.name,
                resume_id,
                e,
            )
        except Exception:
            logger.exception(
                "Unexpected provider error op=%s provider=%s resume_id=%s; using fallback",
                operation,
                self.provider.name,
                resume_id,
            )
        return call(self.fallback)

    def analyze(self, db: Session, resume: Resume) -> AnalysisResult:
        """
        uploaded/analyzed/enhanced -> analyzing (committed) -> analyzed.
        If saving the result fails, status is rolled back to uploaded and
        InternalError is raised.
        """
        _require_text(resume, "analyze")
        resume_id = resume.id
        transition(resume, ResumeStatus.ANALYZING)
        db.commit()

        result = self._generate("analyze", resume_id, lambda p: p.analyze(resume.original_text))

        try:
            resume.analysis_results = result.model_dump()
            transition(resume, ResumeStatus.ANALYZED)
            db.commit()
        except Exception as e:
            logger.exception("Saving analysis failed resume_id=%s", resume_id)
            db.rollback()
            self._rollback_analysis(db, resume_id)
            raise InternalError("Error analyzing resume", detail=str(e)) from e

        db.refresh(resume)
        logger.info("Resume analyzed resume_id=%s score=%s", resume_id, result.score)
        return result

    @staticmethod
    def _rollback_analysis(db: Session, resume_id: int) -> None:
        try:
            resume = db.query(Resume).filter(Resume.id == resume_id).first()
            if resume is None:
                return
            transition(resume, ResumeStatus.UPLOADED)
            db.commit()
        except InvalidTransitionError:
            db.rollback()
        except Exception:
            logger.exception("Error updating resume status resume_id=%s", resume_id)
            db.rollback()

    def enhance(self, db: Session, resume: Resume, target_role: str, target_industry: str) -> str:
        """Any status -> enhanced. Stores enhanced text and the target role/industry."""
        _require_text(resume, "enhance")
        enhanced_text = self._generate(
            "enhance",
            resume.id,
            lambda p: p.enhance(resume.original_text, target_role, target_industry),
        )
        resume.enhanced_text = enhanced_text
        resume.target_role = target_role
        resume.target_industry = target_industry
        transition(resume, ResumeStatus.ENHANCED)
        db.commit()
        db.refresh(resume)
        logger.info("Resume enhanced resume_id=%s role=%s", resume.id, target_role)
        return enhanced_text

    def match(
        self,
        db: Session,
        resume: Resume,
        job_title: str,
        job_description: str,
        company_name: str | None = None,
    ) -> JobMatchResult:
        """Appends one job-match entry. Status is left untouched."""
        _require_text(resume, "match")
        result = self._generate(
            "match",
            resume.id,
            lambda p: p.match(resume.original_text, job_title, job_description, company_name or ""),
        )
        entry = {
            "jobTitle": job_title,
            "companyName": company_name or "Not specified",
            **result.model_dump(),
            "createdAt": datetime.utcnow().isoformat(),
        }
        resume.job_matching = [*(resume.job_matching or []), entry]
        db.commit()
        db.refresh(resume)
        logger.info(
            "Job match stored resume_id=%s job_title=%s score=%s total_matches=%d",
            resume.id,
            job_title,
            result.matchScore,
            len(resume.job_matching),
        )
        return result
