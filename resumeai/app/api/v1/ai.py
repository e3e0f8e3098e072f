"""
AI endpoints - analyze, enhance, match (quota-gated) and analysis history
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from resumeai.app.core.dependencies import TokenIdentity, get_current_identity, get_db, get_orchestrator
from resumeai.app.core.logging_config import get_logger
from resumeai.app.core.responses import envelope
from resumeai.app.schemas.resume import EnhanceIn, MatchIn, resume_to_history
from resumeai.app.services.generation_orchestrator import GenerationOrchestrator
from resumeai.app.services.resume_service import ResumeService
from resumeai.app.services.usage_service import UsageService

logger = get_logger("api.ai")
router = APIRouter()


@router.post("/analyze/{resume_id}")
def analyze_resume(
    resume_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    """Score the resume, list strengths/weaknesses/keywords. Costs one quota unit."""
    UsageService.consume(db, identity.user_id)
    resume = ResumeService.get_owned(db, identity.user_id, resume_id)
    analysis = orchestrator.analyze(db, resume)
    return envelope(
        request,
        "Resume analyzed successfully",
        {"resumeId": resume.id, "analysisResults": analysis},
    )


@router.post("/enhance/{resume_id}")
def enhance_resume(
    resume_id: int,
    payload: EnhanceIn,
    request: Request,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    """Rewrite the resume for a target role and industry. Costs one quota unit."""
    UsageService.consume(db, identity.user_id)
    resume = ResumeService.get_owned(db, identity.user_id, resume_id)
    enhanced_text = orchestrator.enhance(db, resume, payload.targetRole, payload.targetIndustry)
    return envelope(
        request,
        "Resume enhanced successfully",
        {
            "resumeId": resume.id,
            "enhancedText": enhanced_text,
            "targetRole": payload.targetRole,
            "targetIndustry": payload.targetIndustry,
        },
    )


@router.post("/match/{resume_id}")
def match_resume(
    resume_id: int,
    payload: MatchIn,
    request: Request,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    """Compare the resume with a job description. Costs one quota unit."""
    UsageService.consume(db, identity.user_id)
    resume = ResumeService.get_owned(db, identity.user_id, resume_id)
    result = orchestrator.match(
        db,
        resume,
        payload.jobTitle,
        payload.jobDescription,
        payload.companyName or None,
    )
    return envelope(
        request,
        "Job matching completed",
        {"resumeId": resume.id, **result.model_dump()},
    )


@router.get("/history/{resume_id}")
def get_history(
    resume_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """Latest analysis, job-match list and status. Free of charge."""
    resume = ResumeService.get_owned(db, identity.user_id, resume_id)
    return envelope(request, "Resume history retrieved successfully", resume_to_history(resume))
