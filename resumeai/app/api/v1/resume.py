"""
Resume endpoints - upload (text extraction), list, get, rename, delete, versions
"""
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session

from resumeai.app.core.config import DEFAULT_PAGE_SIZE, UPLOAD_PREVIEW_CHARS, settings
from resumeai.app.core.dependencies import TokenIdentity, get_current_identity, get_db
from resumeai.app.core.errors import ValidationError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.core.responses import envelope
from resumeai.app.schemas.resume import TitleUpdateIn, VersionIn, resume_to_list_item, resume_to_out
from resumeai.app.services.resume_service import ResumeService
from resumeai.app.services.text_extractor import extract_text, file_type_for

logger = get_logger("api.resume")
router = APIRouter()


def _preview(text: str) -> str:
    if len(text) > UPLOAD_PREVIEW_CHARS:
        return text[:UPLOAD_PREVIEW_CHARS] + "..."
    return text


def _reject_too_large():
    max_mb = settings.max_upload_bytes // (1024 * 1024)
    raise ValidationError(f"File size too large. Maximum size is {max_mb}MB.")


@router.post("/upload")
async def upload_resume(
    request: Request,
    resume: UploadFile | None = File(None),
    title: str | None = Form(None),
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """
    Upload a resume file (PDF, DOCX, TXT) as multipart field **resume**.

    Extracts plain text and creates the record in status `uploaded`.
    Optional form field **title** (defaults to the file name without extension).
    """
    if resume is None or not resume.filename:
        raise ValidationError("No file uploaded")

    file_type = file_type_for(resume.content_type)
    if resume.size is not None and resume.size > settings.max_upload_bytes:
        _reject_too_large()
    contents = await resume.read()
    if len(contents) > settings.max_upload_bytes:
        _reject_too_large()

    text = extract_text(contents, file_type)
    record = ResumeService.create(
        db,
        user_id=identity.user_id,
        file_name=resume.filename,
        file_type=file_type,
        extracted_text=text,
        title=title,
    )
    return envelope(
        request,
        "Resume uploaded successfully",
        {
            "resumeId": record.id,
            "title": record.title,
            "extractedText": _preview(record.original_text),
            "fileName": record.file_name,
            "fileType": record.file_type,
            "status": record.status,
            "createdAt": record.created_at,
        },
    )


@router.get("/list")
def list_resumes(
    request: Request,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """Paginated list of the caller's resumes, newest first."""
    resumes, pagination = ResumeService.list_page(db, identity.user_id, page=page, limit=limit)
    return envelope(
        request,
        "Resumes retrieved successfully",
        {"resumes": [resume_to_list_item(r) for r in resumes], "pagination": pagination},
    )


@router.get("/{resume_id}")
def get_resume(
    resume_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    resume = ResumeService.get_owned(db, identity.user_id, resume_id)
    return envelope(request, "Resume retrieved successfully", {"resume": resume_to_out(resume)})


@router.put("/{resume_id}/title")
def update_title(
    resume_id: int,
    payload: TitleUpdateIn,
    request: Request,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    resume = ResumeService.update_title(db, identity.user_id, resume_id, payload.title)
    return envelope(
        request,
        "Resume title updated successfully",
        {"resumeId": resume.id, "title": resume.title},
    )


@router.delete("/{resume_id}")
def delete_resume(
    resume_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    deleted = ResumeService.delete(db, identity.user_id, resume_id)
    return envelope(request, "Resume deleted successfully", deleted)


@router.post("/{resume_id}/versions")
def save_version(
    resume_id: int,
    payload: VersionIn,
    request: Request,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """Append a named content snapshot (defaults to enhanced text, else original)."""
    resume = ResumeService.add_version(
        db, identity.user_id, resume_id, payload.versionName, payload.content
    )
    return envelope(
        request,
        "Resume version saved successfully",
        {"resumeId": resume.id, "versions": resume_to_out(resume).versions},
    )
