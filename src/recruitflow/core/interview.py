"""A scheduled encounter between an application and an interviewer."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ..errors import WrongEmployeeTypeError, WrongInterviewStatusError
from .status import InterviewStatus, UserRole

if TYPE_CHECKING:
    from .application import Application
    from .ports import Interviewer

NEW_INTERVIEW_MESSAGE = "You got a new interview!"

logger = structlog.get_logger(__name__)


class Interview:
    """Interview for one application in one named round.

    Holds non-owning handles to its application and, once matched, to its
    interviewer. Status changes are pushed up to the application.
    """

    def __init__(self, application: "Application", round_name: str) -> None:
        self.application = application
        self.round_name = round_name
        self.status = InterviewStatus.UNMATCHED
        self.interviewer: Interviewer | None = None
        self.recommendation: str | None = None

    def match(
        self,
        interviewer: "Interviewer",
        round_name: str | None = None,
        *,
        message: str = NEW_INTERVIEW_MESSAGE,
    ) -> None:
        if self.status is not InterviewStatus.UNMATCHED:
            raise WrongInterviewStatusError(
                f"Only unmatched interviews can be matched (status is {self.status.value})"
            )
        if getattr(interviewer, "role", UserRole.INTERVIEWER) is not UserRole.INTERVIEWER:
            raise WrongEmployeeTypeError(UserRole.INTERVIEWER)

        round_name = round_name or self.round_name
        interviewer.assign_interview(self)
        self.interviewer = interviewer
        self.set_status(InterviewStatus.PENDING)
        self.application.record_interview(round_name, self)
        interviewer.receive_message(message)
        logger.info(
            "interview.matched",
            applicant=self.application.applicant_id,
            job_id=self.application.job_posting_id,
            round=round_name,
            interviewer=interviewer.username,
        )

    def set_status(self, status: InterviewStatus) -> None:
        self.status = status
        self.application.on_interview_update(self)
        if status.is_resolved and self.interviewer is not None:
            self.interviewer.unassign_interview(self)

    def record_result(self, status: InterviewStatus, recommendation: str | None = None) -> None:
        """Interviewer verdict: resolve a pending interview to PASS or FAIL."""
        if self.status is not InterviewStatus.PENDING:
            raise WrongInterviewStatusError(
                f"Only pending interviews can be resolved (status is {self.status.value})"
            )
        if not status.is_resolved:
            raise ValueError(f"Interview result must be PASS or FAIL, got {status.value}")
        if recommendation is not None:
            self.recommendation = recommendation
        self.set_status(status)
        logger.info(
            "interview.resolved",
            applicant=self.application.applicant_id,
            job_id=self.application.job_posting_id,
            round=self.round_name,
            result=status.value,
        )

    def cancel(self) -> None:
        # set_status detaches the interviewer once the interview is resolved.
        if not self.status.is_resolved:
            self.set_status(InterviewStatus.FAIL)

    def filter_map(self) -> dict[str, str]:
        return {
            "applicant": self.application.applicant_id,
            "interviewer": self.interviewer.username if self.interviewer else "N/A",
            "round": self.round_name,
            "status": self.status.value,
        }

    def __repr__(self) -> str:
        return (
            f"Interview(applicant_id={self.application.applicant_id!r}, "
            f"round_name={self.round_name!r}, status={self.status.value})"
        )
