"""Tests for the resume status state machine"""
import pytest

from resumeai.app.core.errors import InvalidTransitionError
from resumeai.app.models.resume import Resume, ResumeStatus
from resumeai.app.services.resume_lifecycle import can_transition, transition

S = ResumeStatus


@pytest.mark.parametrize(
    "current,target",
    [
        (S.UPLOADED, S.ANALYZING),
        (S.ANALYZING, S.ANALYZED),
        (S.ANALYZING, S.UPLOADED),
        (S.ANALYZED, S.ANALYZING),
        (S.ENHANCED, S.ANALYZING),
        (S.UPLOADED, S.ENHANCED),
        (S.ANALYZING, S.ENHANCED),
        (S.ANALYZED, S.ENHANCED),
        (S.ENHANCED, S.ENHANCED),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current, target)
    resume = Resume(id=1, status=current.value)
    transition(resume, target)
    assert resume.status == target.value


@pytest.mark.parametrize(
    "current,target",
    [
        (S.UPLOADED, S.ANALYZED),
        (S.UPLOADED, S.UPLOADED),
        (S.ANALYZED, S.UPLOADED),
        (S.ENHANCED, S.ANALYZED),
        (S.ENHANCED, S.UPLOADED),
    ],
)
def test_rejected_transitions_leave_status_unchanged(current, target):
    assert not can_transition(current, target)
    resume = Resume(id=1, status=current.value)
    with pytest.raises(InvalidTransitionError):
        transition(resume, target)
    assert resume.status == current.value


def test_unknown_status_is_rejected():
    assert not can_transition("archived", S.ANALYZING)
    resume = Resume(id=1, status="archived")
    with pytest.raises(InvalidTransitionError):
        transition(resume, S.ANALYZING)
