"""Interview rounds and the manager that walks a posting through them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import structlog

from ..errors import (
    ApplicationNotInPostingError,
    CurrentRoundUnfinishedError,
    InterviewRoundAlreadyExistsError,
    JobPostingAlreadyFilledError,
    NextRoundDoesNotExistError,
    WrongApplicationStatusError,
    WrongInterviewRoundStatusError,
    WrongJobPostingStatusError,
)
from .interview import Interview
from .status import ApplicationStatus, InterviewRoundStatus, InterviewStatus, JobPostingStatus

if TYPE_CHECKING:
    from .application import Application
    from .posting import JobPosting

logger = structlog.get_logger(__name__)


class InterviewRound:
    """A named cohort of applications going through one interview stage.

    The round's status is derived from its interviews by
    :meth:`refresh_status`; it is never set directly by callers.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.status = InterviewRoundStatus.EMPTY
        self.applications: list[Application] = []

    def start(self, applications: Iterable["Application"]) -> None:
        if self.status is not InterviewRoundStatus.EMPTY:
            raise WrongInterviewRoundStatusError(
                f"Round {self.name!r} has already started (status is {self.status.value})"
            )
        self.status = InterviewRoundStatus.MATCHING
        for application in applications:
            self.applications.append(application)
            application.record_interview(self.name, Interview(application, self.name))

    def interviews(self) -> list[Interview]:
        interviews = []
        for application in self.applications:
            interview = application.interview_for(self.name)
            if interview is not None:
                interviews.append(interview)
        return interviews

    def applications_with_status(self, status: InterviewStatus) -> list["Application"]:
        return [
            application
            for application in self.applications
            if (interview := application.interview_for(self.name)) is not None
            and interview.status is status
        ]

    def unmatched_applications(self) -> list["Application"]:
        return self.applications_with_status(InterviewStatus.UNMATCHED)

    def refresh_status(self) -> InterviewRoundStatus:
        statuses = {interview.status for interview in self.interviews()}
        if InterviewStatus.UNMATCHED in statuses:
            self.status = InterviewRoundStatus.MATCHING
        elif InterviewStatus.PENDING in statuses:
            self.status = InterviewRoundStatus.PENDING
        elif self.applications:
            self.status = InterviewRoundStatus.FINISHED
        return self.status

    def cancel_application(self, application: "Application") -> None:
        if application in self.applications:
            self.applications.remove(application)
        interview = application.interview_for(self.name)
        if interview is not None:
            interview.cancel()

    def filter_map(self) -> dict[str, str]:
        return {
            "round name": self.name,
            "remaining applications": str(len(self.applications)),
            "status": self.status.value,
        }

    def __repr__(self) -> str:
        return f"InterviewRound(name={self.name!r}, status={self.status.value})"


class InterviewRoundManager:
    """Ordered rounds and the surviving applicant pool for one posting."""

    def __init__(self, posting: "JobPosting", applications: Iterable["Application"]) -> None:
        self.posting = posting
        self.rounds: list[InterviewRound] = []
        self.remaining_applications: list[Application] = list(applications)

    def current_round(self) -> InterviewRound | None:
        current = None
        for interview_round in self.rounds:
            if interview_round.status is not InterviewRoundStatus.EMPTY:
                current = interview_round
        return current

    def get_round(self, name: str) -> InterviewRound | None:
        for interview_round in self.rounds:
            if interview_round.name == name:
                return interview_round
        return None

    def add_round(self, interview_round: InterviewRound) -> InterviewRound:
        if self.get_round(interview_round.name) is not None:
            raise InterviewRoundAlreadyExistsError(
                f"Round {interview_round.name!r} already exists for this posting"
            )
        self.rounds.append(interview_round)
        return interview_round

    def advance(self) -> InterviewRound:
        """Start the round after the current one (or the first round)."""
        self.require_processing()
        self.refresh_status()
        current = self.current_round()
        if current is not None and current.status is not InterviewRoundStatus.FINISHED:
            raise CurrentRoundUnfinishedError(
                f"Round {current.name!r} is {current.status.value}, not FINISHED"
            )
        next_index = self.rounds.index(current) + 1 if current is not None else 0
        if next_index >= len(self.rounds):
            raise NextRoundDoesNotExistError()

        next_round = self.rounds[next_index]
        next_round.start(list(self.remaining_applications))
        logger.info(
            "round.advanced",
            job_id=self.posting.job_id,
            round=next_round.name,
            applications=len(next_round.applications),
        )
        return next_round

    def refresh_status(self) -> None:
        current = self.current_round()
        if current is not None:
            current.refresh_status()
        self._drop_rejected()

    def hired_applications(self) -> list["Application"]:
        return [
            application
            for application in self.remaining_applications
            if application.status is ApplicationStatus.HIRED
        ]

    def hire(self, application: "Application") -> None:
        self.require_processing()
        self.refresh_status()
        if application.status is not ApplicationStatus.PENDING:
            raise WrongApplicationStatusError(
                f"Only pending applications can be hired (status is {application.status.value})"
            )
        if application not in self.remaining_applications:
            raise ApplicationNotInPostingError()
        current = self.current_round()
        if current is not None and current.status is not InterviewRoundStatus.FINISHED:
            raise CurrentRoundUnfinishedError(
                f"Round {current.name!r} is {current.status.value}, not FINISHED"
            )
        if len(self.hired_applications()) >= self.posting.num_of_positions:
            raise JobPostingAlreadyFilledError()

        application.status = ApplicationStatus.HIRED
        logger.info("application.hired", job_id=self.posting.job_id, applicant=application.applicant_id)

    def end_all(self) -> None:
        """Reject every application still pending and fail its open interview."""
        current = self.current_round()
        for application in self.remaining_applications:
            if application.status is not ApplicationStatus.PENDING:
                continue
            application.status = ApplicationStatus.REJECTED
            if current is None:
                continue
            interview = application.interview_for(current.name)
            if interview is not None:
                interview.cancel()
        self._drop_rejected()

    def cancel(self, application: "Application") -> None:
        if application in self.remaining_applications:
            self.remaining_applications.remove(application)
        current = self.current_round()
        if current is not None:
            current.cancel_application(application)

    def require_processing(self) -> None:
        if self.posting.status is not JobPostingStatus.PROCESSING:
            raise WrongJobPostingStatusError(JobPostingStatus.PROCESSING, self.posting.status)

    def _drop_rejected(self) -> None:
        self.remaining_applications = [
            application
            for application in self.remaining_applications
            if application.status is not ApplicationStatus.REJECTED
        ]
