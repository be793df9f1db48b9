"""Job postings and their OPEN -> PROCESSING -> FINISHED lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

import pendulum
import structlog

from ..errors import (
    ApplicationAlreadyExistsError,
    CompanyDoesNotExistError,
    WrongJobPostingStatusError,
)
from ..schemas.posting import JobPostingDetails
from .ports import ApplicantDirectory, CompanyAccount, CompanyDirectory
from .rounds import InterviewRoundManager
from .status import ApplicationStatus, JobPostingStatus

if TYPE_CHECKING:
    from .application import Application

REJECTION_MESSAGE = "Sorry! You are rejected by a Job Posting!"

logger = structlog.get_logger(__name__)


class JobPosting:
    """A posting that collects applications while open.

    Once its close date has passed the posting freezes its applicant pool
    into an :class:`InterviewRoundManager`, created exactly once.
    """

    def __init__(self, details: JobPostingDetails | Mapping[str, Any]) -> None:
        if not isinstance(details, JobPostingDetails):
            details = JobPostingDetails.model_validate(dict(details))
        self.details = details
        self.status = JobPostingStatus.OPEN
        self.applications: list[Application] = []
        self.manager: InterviewRoundManager | None = None

    @property
    def job_id(self) -> str:
        return self.details.job_id

    @property
    def company_id(self) -> str:
        return self.details.company_id

    @property
    def num_of_positions(self) -> int:
        return self.details.num_of_positions

    @property
    def close_date(self) -> pendulum.Date:
        return self.details.close_date

    @property
    def is_open(self) -> bool:
        return self.status is JobPostingStatus.OPEN

    def has_applicant(self, applicant_id: str) -> bool:
        return any(app.applicant_id == applicant_id for app in self.applications)

    def maybe_close(self, now: pendulum.Date) -> bool:
        """Move to PROCESSING if the close date is strictly before ``now``."""
        if not self.is_open or not self.close_date < now:
            return False
        self.status = JobPostingStatus.PROCESSING
        self.manager = InterviewRoundManager(self, self.applications)
        logger.info(
            "posting.processing",
            job_id=self.job_id,
            applications=len(self.applications),
            as_of=now.isoformat(),
        )
        return True

    def submit_application(self, application: "Application", companies: CompanyDirectory) -> None:
        if self.has_applicant(application.applicant_id):
            raise ApplicationAlreadyExistsError(
                f"{application.applicant_id!r} has already applied to {self.job_id!r}"
            )
        if not self.is_open:
            raise WrongJobPostingStatusError(JobPostingStatus.OPEN, self.status)
        company = self._company(companies)
        company.receive_application(application)
        self.applications.append(application)

    def cancel_application(self, application: "Application", companies: CompanyDirectory) -> None:
        company = self._company(companies)
        if application in self.applications:
            self.applications.remove(application)
        company.cancel_application(application)
        if self.manager is not None:
            self.manager.cancel(application)

    def close(self) -> None:
        """Finish the posting, rejecting whoever is still pending."""
        if self.status is JobPostingStatus.FINISHED:
            raise WrongJobPostingStatusError(
                (JobPostingStatus.OPEN, JobPostingStatus.PROCESSING), self.status
            )
        self.status = JobPostingStatus.FINISHED
        if self.manager is not None:
            self.manager.end_all()
        logger.info("posting.finished", job_id=self.job_id)

    def notify_rejected(
        self,
        users: ApplicantDirectory,
        *,
        message: str = REJECTION_MESSAGE,
    ) -> int:
        sent = 0
        for application in self.applications:
            if application.status is not ApplicationStatus.REJECTED:
                continue
            applicant = users.get_applicant(application.applicant_id)
            if applicant is None:
                logger.warning(
                    "posting.notify.unknown_applicant",
                    job_id=self.job_id,
                    applicant=application.applicant_id,
                )
                continue
            applicant.receive_message(message)
            sent += 1
        return sent

    def filter_map(self) -> dict[str, str]:
        return {
            "job id": self.job_id,
            "company": self.company_id,
            "position (no.)": f"{self.details.position_name}({self.num_of_positions})",
            "close date": self.close_date.isoformat(),
            "status": self.status.value,
        }

    def _company(self, companies: CompanyDirectory) -> CompanyAccount:
        company = companies.get_company(self.company_id)
        if company is None:
            raise CompanyDoesNotExistError(f"Company {self.company_id!r} does not exist")
        return company

    def __repr__(self) -> str:
        return f"JobPosting(job_id={self.job_id!r}, status={self.status.value})"
