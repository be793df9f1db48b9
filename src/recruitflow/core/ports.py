"""Collaborator contracts consumed by the workflow core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .application import Application
    from .interview import Interview
    from .posting import JobPosting


@runtime_checkable
class MessageSink(Protocol):
    """Anything that can receive a best-effort notification."""

    def receive_message(self, text: str) -> None:
        """Queue ``text`` for the recipient's next read."""


@runtime_checkable
class CompanyAccount(Protocol):
    """Company-side aggregate view of applications."""

    def receive_application(self, application: "Application") -> None:
        """Record a newly submitted application."""

    def cancel_application(self, application: "Application") -> None:
        """Forget a withdrawn application."""


@runtime_checkable
class Interviewer(MessageSink, Protocol):
    """An employee that can be matched to interviews."""

    username: str

    def assign_interview(self, interview: "Interview") -> None:
        """Add ``interview`` to this interviewer's workload."""

    def unassign_interview(self, interview: "Interview") -> None:
        """Drop ``interview`` from this interviewer's workload."""


class CompanyDirectory(Protocol):
    def get_company(self, company_id: str) -> CompanyAccount | None:
        """Return the company or ``None`` when unknown."""


class PostingDirectory(CompanyDirectory, Protocol):
    def get_job_posting(self, job_id: str) -> "JobPosting | None":
        """Return the job posting or ``None`` when unknown."""


class ApplicantDirectory(Protocol):
    def get_applicant(self, username: str) -> MessageSink | None:
        """Return the applicant or ``None`` when unknown."""


__all__ = [
    "ApplicantDirectory",
    "CompanyAccount",
    "CompanyDirectory",
    "Interviewer",
    "MessageSink",
    "PostingDirectory",
]
