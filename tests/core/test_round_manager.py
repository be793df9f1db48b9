from __future__ import annotations

import pendulum
import pytest

from recruitflow.core import (
    ApplicationStatus,
    InterviewRound,
    InterviewRoundStatus,
    InterviewStatus,
    JobPosting,
    UserRole,
)
from recruitflow.directory import EmploymentCenter
from recruitflow.errors import (
    ApplicationNotInPostingError,
    CurrentRoundUnfinishedError,
    InterviewRoundAlreadyExistsError,
    JobPostingAlreadyFilledError,
    NextRoundDoesNotExistError,
    WrongApplicationStatusError,
    WrongJobPostingStatusError,
)

AFTER_CLOSE = pendulum.date(2024, 1, 11)


def build_processing_posting(*applicants: str, positions: int = 1):
    center = EmploymentCenter()
    center.register(
        {"username": "hm", "role": "HIRING_MANAGER", "email": "hm@acme.com", "company_id": "acme"}
    )
    center.register(
        {"username": "ivy", "role": "INTERVIEWER", "email": "ivy@acme.com", "company_id": "acme"}
    )
    posting = JobPosting(
        {
            "job_id": "acme--dev",
            "company_id": "acme",
            "position_name": "Developer",
            "num_of_positions": positions,
            "close_date": "2024-01-10",
        }
    )
    center.add_job_posting(posting)
    applications = []
    for username in applicants:
        applicant = center.register(
            {"username": username, "role": "APPLICANT", "email": f"{username}@mail.com"}
        )
        application = applicant.start_application(posting)
        application.submit(center)
        applications.append(application)
    posting.maybe_close(AFTER_CLOSE)
    return center, posting, applications


def run_round(posting, center, results: dict[str, InterviewStatus]) -> None:
    """Match everyone in the current round to ivy and record ``results``."""
    manager = posting.manager
    current = manager.current_round()
    ivy = center.get_employee("ivy", UserRole.INTERVIEWER)
    for application in current.applications:
        interview = application.interview_for(current.name)
        interview.match(ivy, current.name)
        interview.record_result(results[application.applicant_id])
    manager.refresh_status()


def test_current_round_is_last_started_round():
    _, posting, _ = build_processing_posting("alice")
    manager = posting.manager
    first = manager.add_round(InterviewRound("R1"))
    manager.add_round(InterviewRound("R2"))

    assert manager.current_round() is None
    manager.advance()
    assert manager.current_round() is first


def test_advance_without_rounds_reports_missing_round():
    _, posting, _ = build_processing_posting("alice")

    with pytest.raises(NextRoundDoesNotExistError):
        posting.manager.advance()


def test_advance_starts_first_then_next_round_with_survivors():
    center, posting, (alice, bob) = build_processing_posting("alice", "bob")
    manager = posting.manager
    manager.add_round(InterviewRound("R1"))
    manager.add_round(InterviewRound("R2"))

    manager.advance()
    run_round(posting, center, {"alice": InterviewStatus.PASS, "bob": InterviewStatus.FAIL})
    assert manager.remaining_applications == [alice]

    second = manager.advance()
    assert second.applications == [alice]
    assert alice.interview_for("R2").status is InterviewStatus.UNMATCHED
    assert bob.interview_for("R2") is None

    run_round(posting, center, {"alice": InterviewStatus.PASS})
    with pytest.raises(NextRoundDoesNotExistError):
        manager.advance()


def test_advance_requires_finished_current_round():
    _, posting, _ = build_processing_posting("alice")
    manager = posting.manager
    manager.add_round(InterviewRound("R1"))
    manager.add_round(InterviewRound("R2"))
    manager.advance()

    with pytest.raises(CurrentRoundUnfinishedError):
        manager.advance()
    assert manager.rounds[1].status is InterviewRoundStatus.EMPTY


def test_advance_requires_processing_posting():
    _, posting, _ = build_processing_posting("alice")
    posting.manager.add_round(InterviewRound("R1"))
    posting.close()

    with pytest.raises(WrongJobPostingStatusError):
        posting.manager.advance()


def test_duplicate_round_names_rejected():
    _, posting, _ = build_processing_posting("alice")
    posting.manager.add_round(InterviewRound("R1"))

    with pytest.raises(InterviewRoundAlreadyExistsError):
        posting.manager.add_round(InterviewRound("R1"))


def test_hire_never_exceeds_open_positions():
    center, posting, (alice, bob) = build_processing_posting("alice", "bob")
    manager = posting.manager
    manager.add_round(InterviewRound("R1"))
    manager.advance()
    run_round(posting, center, {"alice": InterviewStatus.PASS, "bob": InterviewStatus.PASS})

    manager.hire(alice)
    with pytest.raises(JobPostingAlreadyFilledError):
        manager.hire(bob)

    assert alice.status is ApplicationStatus.HIRED
    assert bob.status is ApplicationStatus.PENDING
    assert len(manager.hired_applications()) == 1


def test_hire_preconditions():
    center, posting, (alice,) = build_processing_posting("alice")
    manager = posting.manager
    manager.add_round(InterviewRound("R1"))
    manager.advance()

    with pytest.raises(CurrentRoundUnfinishedError):
        manager.hire(alice)

    run_round(posting, center, {"alice": InterviewStatus.FAIL})
    with pytest.raises(WrongApplicationStatusError):
        manager.hire(alice)


def test_hire_rejects_application_from_elsewhere():
    _, posting, _ = build_processing_posting("alice")
    _, _, (stranger,) = build_processing_posting("zed")

    with pytest.raises(ApplicationNotInPostingError):
        posting.manager.hire(stranger)


def test_hire_without_rounds_is_allowed():
    _, posting, (alice,) = build_processing_posting("alice")

    posting.manager.hire(alice)

    assert alice.status is ApplicationStatus.HIRED


def test_end_all_rejects_pending_and_fails_open_interviews():
    center, posting, (alice, bob) = build_processing_posting("alice", "bob")
    manager = posting.manager
    manager.add_round(InterviewRound("R1"))
    manager.advance()
    ivy = center.get_employee("ivy", UserRole.INTERVIEWER)
    alice.interview_for("R1").match(ivy, "R1")

    manager.end_all()

    assert alice.status is ApplicationStatus.REJECTED
    assert bob.status is ApplicationStatus.REJECTED
    assert alice.interview_for("R1").status is InterviewStatus.FAIL
    assert bob.interview_for("R1").status is InterviewStatus.FAIL
    assert ivy.interview_assignments == []
    assert manager.remaining_applications == []


def test_end_all_keeps_hired_applications():
    _, posting, (alice, bob) = build_processing_posting("alice", "bob", positions=2)
    posting.manager.hire(alice)

    posting.manager.end_all()

    assert alice.status is ApplicationStatus.HIRED
    assert bob.status is ApplicationStatus.REJECTED
    assert posting.manager.remaining_applications == [alice]


def test_cancel_removes_from_pool_and_current_round():
    _, posting, (alice, bob) = build_processing_posting("alice", "bob")
    manager = posting.manager
    current = manager.add_round(InterviewRound("R1"))
    manager.advance()

    manager.cancel(alice)

    assert manager.remaining_applications == [bob]
    assert current.applications == [bob]
    assert alice.interview_for("R1").status is InterviewStatus.FAIL
