"""One applicant's candidacy for one job posting."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ..errors import JobPostingDoesNotExistError, WrongApplicationStatusError
from .documents import DocumentStore
from .ports import PostingDirectory
from .status import ApplicationStatus, InterviewStatus

if TYPE_CHECKING:
    from .interview import Interview
    from .posting import JobPosting

logger = structlog.get_logger(__name__)


class Application:
    """Application identified by ``(applicant_id, job_posting_id)``.

    Owns its document store, which stays editable only while the application
    is a draft, and the per-round interview map.
    """

    def __init__(self, applicant_id: str, job_posting_id: str) -> None:
        self.applicant_id = applicant_id
        self.job_posting_id = job_posting_id
        self.status = ApplicationStatus.DRAFT
        self.documents = DocumentStore(editable=True)
        self._interviews: dict[str, Interview] = {}

    @property
    def interviews(self) -> list["Interview"]:
        return list(self._interviews.values())

    def interview_for(self, round_name: str) -> "Interview | None":
        return self._interviews.get(round_name)

    def record_interview(self, round_name: str, interview: "Interview") -> None:
        self._interviews[round_name] = interview

    def submit(self, directory: PostingDirectory) -> None:
        """Send the draft to its posting and freeze the attached documents."""
        if self.status is not ApplicationStatus.DRAFT:
            raise WrongApplicationStatusError(
                f"Only draft applications can be submitted (status is {self.status.value})"
            )
        posting = self._posting(directory)
        posting.submit_application(self, directory)
        self.documents.set_editable(False)
        self.status = ApplicationStatus.PENDING
        logger.info("application.submitted", applicant=self.applicant_id, job_id=self.job_posting_id)

    def withdraw(self, directory: PostingDirectory) -> None:
        """Pull a pending application back to draft."""
        if self.status is not ApplicationStatus.PENDING:
            raise WrongApplicationStatusError(
                f"Only pending applications can be withdrawn (status is {self.status.value})"
            )
        posting = self._posting(directory)
        posting.cancel_application(self, directory)
        self.documents.set_editable(True)
        self.status = ApplicationStatus.DRAFT
        logger.info("application.withdrawn", applicant=self.applicant_id, job_id=self.job_posting_id)

    def on_interview_update(self, interview: "Interview") -> None:
        # A single failed round rejects the application; passing never hires.
        if interview.status is InterviewStatus.FAIL:
            self.status = ApplicationStatus.REJECTED

    def filter_map(self) -> dict[str, str]:
        return {
            "applicant": self.applicant_id,
            "job posting": self.job_posting_id,
            "status": self.status.value,
        }

    def _posting(self, directory: PostingDirectory) -> "JobPosting":
        posting = directory.get_job_posting(self.job_posting_id)
        if posting is None:
            raise JobPostingDoesNotExistError(f"Job posting {self.job_posting_id!r} does not exist")
        return posting

    def __repr__(self) -> str:
        return (
            f"Application(applicant_id={self.applicant_id!r}, "
            f"job_posting_id={self.job_posting_id!r}, status={self.status.value})"
        )
