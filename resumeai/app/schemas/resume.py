"""
Resume Pydantic schemas - request bodies, generation results, outward views
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# --- Generation results (provider output contract) ---
class AnalysisResult(BaseModel):
    score: int = Field(ge=0, le=100)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    atsCompatibility: int = Field(ge=0, le=100)

    model_config = {"extra": "ignore"}


class JobMatchResult(BaseModel):
    matchScore: int = Field(ge=0, le=100)
    matchedKeywords: List[str] = Field(default_factory=list)
    missingKeywords: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    strengthAreas: List[str] = Field(default_factory=list)
    improvementAreas: List[str] = Field(default_factory=list)
    salaryNegotiationPoints: List[str] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class JobMatchEntry(JobMatchResult):
    """Stored job-match entry"""
    jobTitle: str
    companyName: str
    createdAt: datetime


class ResumeVersion(BaseModel):
    versionName: str
    content: str
    createdAt: datetime


# --- Request bodies ---
class TitleUpdateIn(BaseModel):
    title: str = Field(min_length=1)

    model_config = {"str_strip_whitespace": True}


class EnhanceIn(BaseModel):
    targetRole: str = Field(min_length=1, max_length=200)
    targetIndustry: str = Field(min_length=1, max_length=200)

    model_config = {"str_strip_whitespace": True}


class MatchIn(BaseModel):
    jobTitle: str = Field(min_length=1)
    jobDescription: str = Field(min_length=1)
    companyName: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class VersionIn(BaseModel):
    versionName: str = Field(min_length=1, max_length=100)
    content: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


# --- Outward views ---
class ResumeListItem(BaseModel):
    id: int
    title: str
    fileName: str
    fileType: str
    status: str
    analysisResults: Optional[AnalysisResult] = None
    targetRole: Optional[str] = None
    targetIndustry: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class ResumeOut(ResumeListItem):
    userId: int
    originalText: str
    enhancedText: Optional[str] = None
    jobMatching: List[JobMatchEntry] = Field(default_factory=list)
    versions: List[ResumeVersion] = Field(default_factory=list)


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalResumes: int
    hasNext: bool
    hasPrev: bool


class ResumeHistory(BaseModel):
    resumeId: int
    status: str
    targetRole: Optional[str] = None
    targetIndustry: Optional[str] = None
    analysisResults: Optional[AnalysisResult] = None
    jobMatching: List[JobMatchEntry] = Field(default_factory=list)
    updatedAt: Optional[datetime] = None


def resume_to_list_item(resume) -> ResumeListItem:
    return ResumeListItem(
        id=resume.id,
        title=resume.title,
        fileName=resume.file_name,
        fileType=resume.file_type,
        status=resume.status,
        analysisResults=resume.analysis_results or None,
        targetRole=resume.target_role,
        targetIndustry=resume.target_industry,
        createdAt=resume.created_at,
        updatedAt=resume.updated_at,
    )


def resume_to_out(resume) -> ResumeOut:
    """Convert Resume DB model to full outward schema"""
    return ResumeOut(
        **resume_to_list_item(resume).model_dump(),
        userId=resume.user_id,
        originalText=resume.original_text,
        enhancedText=resume.enhanced_text,
        jobMatching=[JobMatchEntry.model_validate(m) for m in (resume.job_matching or [])],
        versions=[ResumeVersion.model_validate(v) for v in (resume.versions or [])],
    )


def resume_to_history(resume) -> ResumeHistory:
    return ResumeHistory(
        resumeId=resume.id,
        status=resume.status,
        targetRole=resume.target_role,
        targetIndustry=resume.target_industry,
        analysisResults=resume.analysis_results or None,
        jobMatching=[JobMatchEntry.model_validate(m) for m in (resume.job_matching or [])],
        updatedAt=resume.updated_at,
    )
