"""
Resume lifecycle state machine.

uploaded -> analyzing -> analyzed, with enhanced reachable from any state and
analyzing re-enterable from any state (re-analysis). analyzing -> uploaded is
the rollback taken when persisting an analysis fails.
"""
from resumeai.app.core.errors import InvalidTransitionError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.models.resume import Resume, ResumeStatus

logger = get_logger("services.resume_lifecycle")

ALLOWED_TRANSITIONS: dict[ResumeStatus, frozenset[ResumeStatus]] = {
    ResumeStatus.UPLOADED: frozenset({ResumeStatus.ANALYZING, ResumeStatus.ENHANCED}),
    ResumeStatus.ANALYZING: frozenset({
        ResumeStatus.UPLOADED,
        ResumeStatus.ANALYZING,
        ResumeStatus.ANALYZED,
        ResumeStatus.ENHANCED,
    }),
    ResumeStatus.ANALYZED: frozenset({ResumeStatus.ANALYZING, ResumeStatus.ENHANCED}),
    ResumeStatus.ENHANCED: frozenset({ResumeStatus.ANALYZING, ResumeStatus.ENHANCED}),
}


def can_transition(current: ResumeStatus | str, target: ResumeStatus | str) -> bool:
    try:
        current, target = ResumeStatus(current), ResumeStatus(target)
    except ValueError:
        return False
    return target in ALLOWED_TRANSITIONS[current]


def transition(resume: Resume, target: ResumeStatus) -> Resume:
    """Move resume to target status in memory. Caller commits. Raises InvalidTransitionError."""
    current = resume.status
    if not can_transition(current, target):
        target_name = getattr(target, "value", target)
        logger.warning(
            "Rejected status transition resume_id=%s from=%s to=%s",
            resume.id,
            current,
            target_name,
        )
        raise InvalidTransitionError(f"Cannot move resume from '{current}' to '{target_name}'")
    resume.status = ResumeStatus(target).value
    logger.debug("Status transition resume_id=%s from=%s to=%s", resume.id, current, resume.status)
    return resume
