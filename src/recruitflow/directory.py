"""In-memory directory of users, companies and job postings."""

from __future__ import annotations

import re
from typing import Any, Mapping

import pendulum
import structlog

from .core.posting import JobPosting
from .core.status import JobPostingStatus, UserRole
from .errors import (
    CompanyAlreadyExistsError,
    CompanyDoesNotExistError,
    JobPostingAlreadyExistsError,
    UserAlreadyExistsError,
    WrongEmailFormatError,
)
from .schemas.registration import UserRegistration
from .users import Applicant, Company, Employee, User

EMAIL_PATTERN = re.compile(r".+@(.+\.)com")

logger = structlog.get_logger(__name__)


class EmploymentCenter:
    """Registry that resolves ids to users, companies and postings.

    Lookups return ``None`` for unknown ids; callers decide how to handle
    absence.
    """

    def __init__(self) -> None:
        self._users: dict[UserRole, dict[str, User]] = {role: {} for role in UserRole}
        self._companies: dict[str, Company] = {}
        self._postings: dict[str, JobPosting] = {}

    # -- users ----------------------------------------------------------------

    def register(self, registration: UserRegistration | Mapping[str, Any]) -> User:
        if not isinstance(registration, UserRegistration):
            registration = UserRegistration.model_validate(dict(registration))
        self._validate(registration)

        role = registration.role
        profile = registration.profile()
        user: User
        if role is UserRole.APPLICANT:
            user = Applicant(registration.username, profile)
        elif role is UserRole.HIRING_MANAGER:
            company = Company(registration.company_id, registration.username)
            self._companies[company.id] = company
            user = Employee(registration.username, company.id, role, profile)
        else:
            company = self._companies[registration.company_id]
            company.add_employee(registration.username, role)
            user = Employee(registration.username, company.id, role, profile)

        self._users[role][user.username] = user
        logger.info("user.registered", username=user.username, role=role.value)
        return user

    def get_user(self, username: str, role: UserRole | None = None) -> User | None:
        roles = [role] if role is not None else list(UserRole)
        for candidate_role in roles:
            user = self._users[candidate_role].get(username)
            if user is not None:
                return user
        return None

    def get_applicant(self, username: str) -> Applicant | None:
        user = self._users[UserRole.APPLICANT].get(username)
        return user if isinstance(user, Applicant) else None

    def get_employee(self, username: str, role: UserRole) -> Employee | None:
        user = self._users[role].get(username)
        return user if isinstance(user, Employee) else None

    def get_interviewers(self, usernames: list[str]) -> list[Employee]:
        interviewers = []
        for username in usernames:
            interviewer = self.get_employee(username, UserRole.INTERVIEWER)
            if interviewer is not None:
                interviewers.append(interviewer)
        return interviewers

    def users(self, role: UserRole) -> list[User]:
        return list(self._users[role].values())

    # -- companies ------------------------------------------------------------

    def get_company(self, company_id: str | None) -> Company | None:
        if company_id is None:
            return None
        return self._companies.get(company_id)

    # -- postings -------------------------------------------------------------

    def add_job_posting(self, posting: JobPosting) -> None:
        company = self.get_company(posting.company_id)
        if company is None:
            raise CompanyDoesNotExistError(f"Company {posting.company_id!r} does not exist")
        if posting.job_id in self._postings:
            raise JobPostingAlreadyExistsError(f"Job posting {posting.job_id!r} already exists")
        self._postings[posting.job_id] = posting
        company.add_job_posting_id(posting.job_id)

    def get_job_posting(self, job_id: str) -> JobPosting | None:
        return self._postings.get(job_id)

    def job_postings(self) -> list[JobPosting]:
        return list(self._postings.values())

    def open_job_postings(self) -> list[JobPosting]:
        return [p for p in self._postings.values() if p.status is JobPostingStatus.OPEN]

    def update_open_job_postings(self, now: pendulum.Date) -> list[JobPosting]:
        """Periodic tick: close every open posting whose close date has passed."""
        return [posting for posting in self.open_job_postings() if posting.maybe_close(now)]

    def _validate(self, registration: UserRegistration) -> None:
        if not EMAIL_PATTERN.fullmatch(registration.email):
            raise WrongEmailFormatError(f"Wrong email format: {registration.email!r}")
        if registration.username in self._users[registration.role]:
            raise UserAlreadyExistsError(f"User {registration.username!r} already exists")

        company_exists = self.get_company(registration.company_id) is not None
        if registration.role is UserRole.HIRING_MANAGER:
            if not registration.company_id:
                raise CompanyDoesNotExistError("Hiring managers must name a company")
            if company_exists:
                raise CompanyAlreadyExistsError(
                    f"Company {registration.company_id!r} already exists"
                )
        elif registration.role in (UserRole.RECRUITER, UserRole.INTERVIEWER) and not company_exists:
            raise CompanyDoesNotExistError(f"Company {registration.company_id!r} does not exist")
