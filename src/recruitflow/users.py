"""Users, employees and companies taking part in recruitment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .core.application import Application
from .core.documents import DocumentStore
from .core.status import ApplicationStatus, InterviewStatus, UserRole
from .errors import (
    ApplicationAlreadyExistsError,
    NotEmployeeError,
    WrongApplicationStatusError,
    WrongEmployeeTypeError,
)

if TYPE_CHECKING:
    from .core.interview import Interview
    from .core.posting import JobPosting


class User:
    """Base user with a de-duplicating unread-message inbox."""

    def __init__(self, username: str, role: UserRole, details: dict[str, Any] | None = None) -> None:
        self.username = username
        self.role = role
        self.details: dict[str, Any] = dict(details or {})
        self._unread: list[str] = []

    @property
    def company_id(self) -> str:
        raise NotEmployeeError(f"{self.username!r} is not an employee")

    @property
    def real_name(self) -> str:
        first = self.details.get("first_name", "")
        last = self.details.get("last_name", "")
        return f"{first} {last}".strip()

    def receive_message(self, text: str) -> None:
        if text not in self._unread:
            self._unread.append(text)

    def read_messages(self) -> list[str]:
        messages, self._unread = self._unread, []
        return messages

    def filter_map(self) -> dict[str, str]:
        return {"username": self.username, "real name": self.real_name, "role": self.role.value}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(username={self.username!r})"


class Applicant(User):
    """A job seeker with a personal document store and their applications."""

    def __init__(self, username: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(username, UserRole.APPLICANT, details)
        self.documents = DocumentStore(editable=True)
        self._applications: dict[str, Application] = {}

    @property
    def applications(self) -> list[Application]:
        return list(self._applications.values())

    def application_for(self, job_id: str) -> Application | None:
        return self._applications.get(job_id)

    def start_application(self, posting: "JobPosting") -> Application:
        """Create a draft application for ``posting``."""
        if posting.job_id in self._applications:
            raise ApplicationAlreadyExistsError(
                f"{self.username!r} already has an application for {posting.job_id!r}"
            )
        application = Application(self.username, posting.job_id)
        self._applications[posting.job_id] = application
        return application

    def delete_application(self, application: Application) -> None:
        if application.status is not ApplicationStatus.DRAFT:
            raise WrongApplicationStatusError(
                f"Only draft applications can be deleted (status is {application.status.value})"
            )
        self._applications.pop(application.job_posting_id, None)

    def ongoing_interviews(self) -> list["Interview"]:
        return [
            interview
            for application in self._applications.values()
            for interview in application.interviews
            if not interview.status.is_resolved
        ]

    def past_interviews(self) -> list["Interview"]:
        return [
            interview
            for application in self._applications.values()
            for interview in application.interviews
            if interview.status.is_resolved
        ]


class Employee(User):
    """Company staff member.

    Interviewers carry interview assignments; recruiters and hiring managers
    carry posting assignments. Asking an employee for the other kind raises
    :class:`WrongEmployeeTypeError`.
    """

    _POSTING_ROLES = (UserRole.RECRUITER, UserRole.HIRING_MANAGER)

    def __init__(
        self,
        username: str,
        company_id: str,
        role: UserRole,
        details: dict[str, Any] | None = None,
    ) -> None:
        if role is UserRole.APPLICANT:
            raise ValueError("Applicants can not be employees")
        super().__init__(username, role, details)
        self._company_id = company_id
        self._interviews: list[Interview] = []
        self._postings: list[JobPosting] = []

    @property
    def company_id(self) -> str:
        return self._company_id

    @property
    def interview_assignments(self) -> list["Interview"]:
        self._require_role(UserRole.INTERVIEWER)
        return list(self._interviews)

    @property
    def posting_assignments(self) -> list["JobPosting"]:
        self._require_role(*self._POSTING_ROLES)
        return list(self._postings)

    def assign_interview(self, interview: "Interview") -> None:
        self._require_role(UserRole.INTERVIEWER)
        if interview not in self._interviews:
            self._interviews.append(interview)

    def unassign_interview(self, interview: "Interview") -> None:
        if interview in self._interviews:
            self._interviews.remove(interview)

    def assign_posting(self, posting: "JobPosting") -> None:
        self._require_role(*self._POSTING_ROLES)
        if posting not in self._postings:
            self._postings.append(posting)

    def filter_map(self) -> dict[str, str]:
        mapping = super().filter_map()
        mapping["company"] = self._company_id
        return mapping

    def _require_role(self, *roles: UserRole) -> None:
        if self.role not in roles:
            raise WrongEmployeeTypeError(roles if len(roles) > 1 else roles[0])


class Company:
    """A hiring company and its aggregate view of received applications."""

    def __init__(self, company_id: str, hiring_manager_id: str) -> None:
        self.id = company_id
        self.hiring_manager_id = hiring_manager_id
        self.recruiter_ids: list[str] = []
        self.interviewer_ids: list[str] = []
        self.job_posting_ids: list[str] = []
        self._applications: dict[str, list[Application]] = {}

    def add_employee(self, username: str, role: UserRole) -> None:
        if role is UserRole.RECRUITER:
            self.recruiter_ids.append(username)
        elif role is UserRole.INTERVIEWER:
            self.interviewer_ids.append(username)
        else:
            raise WrongEmployeeTypeError((UserRole.RECRUITER, UserRole.INTERVIEWER))

    def add_job_posting_id(self, job_id: str) -> None:
        if job_id not in self.job_posting_ids:
            self.job_posting_ids.append(job_id)

    def receive_application(self, application: Application) -> None:
        self._applications.setdefault(application.applicant_id, []).append(application)

    def cancel_application(self, application: Application) -> None:
        received = self._applications.get(application.applicant_id)
        if not received:
            return
        if application in received:
            received.remove(application)
        if not received:
            del self._applications[application.applicant_id]

    def all_applications(self) -> list[Application]:
        return [app for received in self._applications.values() for app in received]

    def __repr__(self) -> str:
        return f"Company(id={self.id!r})"
