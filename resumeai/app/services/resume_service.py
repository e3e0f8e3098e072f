"""
Resume service - owner-scoped create/list/get/update/delete of resume records.
Every lookup filters on user_id, so another user's record reads as not found.
"""
import math
from datetime import datetime
from pathlib import PurePath

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resumeai.app.core.config import DEFAULT_PAGE_SIZE, RESUME_TITLE_MAX_CHARS
from resumeai.app.core.errors import ConflictError, NotFoundError, ValidationError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.models.resume import Resume, ResumeStatus
from resumeai.app.schemas.resume import Pagination

logger = get_logger("services.resume")


def default_title(file_name: str) -> str:
    """File name up to the first dot ("jane.doe.pdf" -> "jane")."""
    name = PurePath(file_name or "").name
    return (name.split(".")[0] or name or "Resume")[:RESUME_TITLE_MAX_CHARS]


class ResumeService:
    @staticmethod
    def get_owned(db: Session, user_id: int, resume_id: int) -> Resume:
        resume = (
            db.query(Resume)
            .filter(Resume.id == resume_id, Resume.user_id == user_id)
            .first()
        )
        if not resume:
            raise NotFoundError("Resume not found")
        return resume

    @staticmethod
    def create(
        db: Session,
        user_id: int,
        file_name: str,
        file_type: str,
        extracted_text: str,
        title: str | None = None,
    ) -> Resume:
        """Create a record in 'uploaded'. Rejects blank text and duplicate file names per owner."""
        text = (extracted_text or "").strip()
        if not text:
            raise ValidationError("No text content found in the uploaded file")

        existing = (
            db.query(Resume.id)
            .filter(Resume.user_id == user_id, Resume.file_name == file_name)
            .first()
        )
        if existing:
            raise ConflictError("A resume with this filename already exists")

        resume = Resume(
            user_id=user_id,
            title=((title or "").strip() or default_title(file_name))[:RESUME_TITLE_MAX_CHARS],
            original_text=text,
            file_name=file_name,
            file_type=file_type,
            status=ResumeStatus.UPLOADED.value,
            job_matching=[],
            versions=[],
        )
        db.add(resume)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent upload of the same file name
            db.rollback()
            raise ConflictError("A resume with this filename already exists")
        db.refresh(resume)
        logger.info(
            "Resume uploaded user_id=%s resume_id=%s file_type=%s chars=%d",
            user_id,
            resume.id,
            file_type,
            len(text),
        )
        return resume

    @staticmethod
    def list_page(
        db: Session,
        user_id: int,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[Resume], Pagination]:
        """Newest first. Non-positive page/limit fall back to defaults."""
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
        skip = (page - 1) * limit

        query = db.query(Resume).filter(Resume.user_id == user_id)
        total = query.count()
        resumes = (
            query.order_by(Resume.created_at.desc(), Resume.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        pagination = Pagination(
            currentPage=page,
            totalPages=math.ceil(total / limit),
            totalResumes=total,
            hasNext=skip + len(resumes) < total,
            hasPrev=page > 1,
        )
        return resumes, pagination

    @staticmethod
    def update_title(db: Session, user_id: int, resume_id: int, title: str) -> Resume:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        resume = ResumeService.get_owned(db, user_id, resume_id)
        resume.title = title[:RESUME_TITLE_MAX_CHARS]
        db.commit()
        db.refresh(resume)
        return resume

    @staticmethod
    def delete(db: Session, user_id: int, resume_id: int) -> dict:
        resume = ResumeService.get_owned(db, user_id, resume_id)
        deleted = {"resumeId": resume.id, "title": resume.title}
        db.delete(resume)
        db.commit()
        logger.info("Resume deleted user_id=%s resume_id=%s", user_id, resume_id)
        return deleted

    @staticmethod
    def add_version(
        db: Session,
        user_id: int,
        resume_id: int,
        version_name: str,
        content: str | None = None,
    ) -> Resume:
        """Append a named snapshot. Content defaults to enhanced text, then original text."""
        resume = ResumeService.get_owned(db, user_id, resume_id)
        body = content if (content or "").strip() else (resume.enhanced_text or resume.original_text)
        version = {
            "versionName": version_name.strip(),
            "content": body,
            "createdAt": datetime.utcnow().isoformat(),
        }
        resume.versions = [*(resume.versions or []), version]
        db.commit()
        db.refresh(resume)
        logger.info(
            "Resume version saved user_id=%s resume_id=%s versions=%d",
            user_id,
            resume_id,
            len(resume.versions),
        )
        return resume
