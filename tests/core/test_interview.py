from __future__ import annotations

import pytest

from recruitflow.core import (
    Application,
    ApplicationStatus,
    Interview,
    InterviewStatus,
    UserRole,
)
from recruitflow.errors import WrongEmployeeTypeError, WrongInterviewStatusError
from recruitflow.users import Employee


def build_interview() -> tuple[Interview, Application]:
    application = Application("alice", "acme--dev")
    application.status = ApplicationStatus.PENDING
    interview = Interview(application, "R1")
    application.record_interview("R1", interview)
    return interview, application


def build_interviewer(username: str = "ivy") -> Employee:
    return Employee(username, "acme", UserRole.INTERVIEWER)


def test_match_assigns_interviewer_and_notifies():
    interview, application = build_interview()
    interviewer = build_interviewer()

    interview.match(interviewer, "R1")

    assert interview.status is InterviewStatus.PENDING
    assert interview.interviewer is interviewer
    assert interviewer.interview_assignments == [interview]
    assert application.interview_for("R1") is interview
    assert interviewer.read_messages() == ["You got a new interview!"]


def test_second_match_fails_and_keeps_interviewer():
    interview, _ = build_interview()
    first = build_interviewer("ivy")
    second = build_interviewer("ian")
    interview.match(first, "R1")

    with pytest.raises(WrongInterviewStatusError):
        interview.match(second, "R1")

    assert interview.interviewer is first
    assert second.interview_assignments == []


def test_match_requires_interviewer_role():
    interview, _ = build_interview()
    recruiter = Employee("rob", "acme", UserRole.RECRUITER)

    with pytest.raises(WrongEmployeeTypeError):
        interview.match(recruiter, "R1")

    assert interview.status is InterviewStatus.UNMATCHED
    assert interview.interviewer is None


def test_pass_keeps_application_pending_and_releases_interviewer():
    interview, application = build_interview()
    interviewer = build_interviewer()
    interview.match(interviewer, "R1")

    interview.record_result(InterviewStatus.PASS, "Strong candidate")

    assert application.status is ApplicationStatus.PENDING
    assert interview.recommendation == "Strong candidate"
    assert interviewer.interview_assignments == []


def test_fail_rejects_application():
    interview, application = build_interview()
    interview.match(build_interviewer(), "R1")

    interview.record_result(InterviewStatus.FAIL)

    assert application.status is ApplicationStatus.REJECTED


def test_record_result_requires_pending_interview_and_verdict():
    interview, _ = build_interview()
    with pytest.raises(WrongInterviewStatusError):
        interview.record_result(InterviewStatus.PASS)

    interview.match(build_interviewer(), "R1")
    with pytest.raises(ValueError):
        interview.record_result(InterviewStatus.UNMATCHED)
    assert interview.status is InterviewStatus.PENDING


def test_cancel_twice_is_idempotent():
    interview, application = build_interview()
    interviewer = build_interviewer()
    interview.match(interviewer, "R1")

    interview.cancel()
    assert interview.status is InterviewStatus.FAIL
    assert interviewer.interview_assignments == []
    assert application.status is ApplicationStatus.REJECTED

    interview.cancel()
    assert interview.status is InterviewStatus.FAIL


def test_cancel_unmatched_interview_fails_it():
    interview, _ = build_interview()

    interview.cancel()

    assert interview.status is InterviewStatus.FAIL
    assert interview.interviewer is None


def test_cancel_after_pass_is_noop():
    interview, application = build_interview()
    interview.match(build_interviewer(), "R1")
    interview.record_result(InterviewStatus.PASS)

    interview.cancel()

    assert interview.status is InterviewStatus.PASS
    assert application.status is ApplicationStatus.PENDING


def test_cancel_releases_interviewer_once(monkeypatch: pytest.MonkeyPatch):
    interview, _ = build_interview()
    interviewer = build_interviewer()
    interview.match(interviewer, "R1")
    released = []
    monkeypatch.setattr(interviewer, "unassign_interview", released.append)

    interview.cancel()

    assert released == [interview]
    assert interview.status is InterviewStatus.FAIL
