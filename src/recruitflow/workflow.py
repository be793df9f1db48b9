"""Application service: id-based recruitment commands over the core engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import structlog

from .clock import Clock, SimulatedClock
from .core import (
    Application,
    Document,
    Interview,
    InterviewRound,
    InterviewRoundManager,
    InterviewStatus,
    JobPosting,
    JobPostingStatus,
    UserRole,
    load_document,
)
from .directory import EmploymentCenter
from .errors import (
    ApplicationNotInPostingError,
    JobPostingDoesNotExistError,
    UserDoesNotExistError,
    WrongInterviewRoundStatusError,
    WrongInterviewStatusError,
    WrongJobPostingStatusError,
)
from .schemas.config import AppConfig
from .schemas.posting import JobPostingDetails
from .schemas.registration import UserRegistration
from .search import filter_records
from .storage import AuditLogger
from .users import Applicant, Employee, User


class RecruitmentService:
    """Resolves ids through the directory and drives the workflow engine.

    Every successful command is logged and, when an audit logger is
    configured, appended to the audit trail.
    """

    def __init__(
        self,
        *,
        center: EmploymentCenter,
        clock: Clock,
        settings: AppConfig | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self.center = center
        self.clock = clock
        self.settings = settings or AppConfig()
        self._audit = audit_logger
        self._logger = structlog.get_logger(__name__)

    # -- users ----------------------------------------------------------------

    def register_user(self, registration: UserRegistration | Mapping[str, Any]) -> User:
        user = self.center.register(registration)
        self._record("user.registered", username=user.username, role=user.role)
        return user

    def read_messages(self, username: str, role: UserRole) -> list[str]:
        """Drain the inbox of the account registered under ``role``."""
        user = self.center.get_user(username, role)
        if user is None:
            raise UserDoesNotExistError(f"{role.value.lower()} {username!r} does not exist")
        return user.read_messages()

    # -- postings -------------------------------------------------------------

    def post_job(self, hiring_manager_id: str, details: Mapping[str, Any]) -> JobPosting:
        manager = self._employee(hiring_manager_id, UserRole.HIRING_MANAGER)
        now = self.clock.now()
        payload = dict(details)
        payload["company_id"] = manager.company_id
        payload.setdefault("post_date", now)
        payload.setdefault(
            "job_id",
            f"{manager.company_id}--{payload.get('position_name', '')}--{now.isoformat()}"
            f"--{len(self.center.job_postings()) + 1}",
        )
        recruiter = None
        if payload.get("recruiter_id"):
            recruiter = self._employee(payload["recruiter_id"], UserRole.RECRUITER)
            if recruiter.company_id != manager.company_id:
                raise UserDoesNotExistError(
                    f"Recruiter {recruiter.username!r} does not work for {manager.company_id!r}"
                )

        posting = JobPosting(JobPostingDetails.model_validate(payload))
        self.center.add_job_posting(posting)
        manager.assign_posting(posting)
        if recruiter is not None:
            recruiter.assign_posting(posting)
            recruiter.receive_message(self.settings.messages.new_posting)

        self._record(
            "posting.created",
            job_id=posting.job_id,
            company_id=posting.company_id,
            close_date=posting.close_date,
        )
        return posting

    def tick(self) -> list[JobPosting]:
        """Move every open posting past its close date into processing."""
        closed = self.center.update_open_job_postings(self.clock.now())
        for posting in closed:
            self._record("posting.processing", job_id=posting.job_id)
        return closed

    def advance_days(self, days: int) -> list[JobPosting]:
        if not isinstance(self.clock, SimulatedClock):
            raise TypeError("Only a simulated clock can be advanced")
        self.clock.advance(days)
        self._record("clock.advanced", days=days)
        return self.tick()

    def close_posting(self, job_id: str) -> int:
        """Finish the posting and notify rejected applicants; return messages sent."""
        posting = self._posting(job_id)
        posting.close()
        sent = posting.notify_rejected(self.center, message=self.settings.messages.rejection)
        self._record("posting.finished", job_id=job_id, rejections_sent=sent)
        return sent

    def search_postings(self, query: str, *, open_only: bool = True) -> list[JobPosting]:
        postings = self.center.open_job_postings() if open_only else self.center.job_postings()
        return filter_records(postings, query, min_similarity=self.settings.search.min_similarity)

    def posting_summary(self, job_id: str) -> dict[str, Any]:
        posting = self._posting(job_id)
        summary: dict[str, Any] = {
            "job_id": posting.job_id,
            "status": posting.status.value,
            "positions": posting.num_of_positions,
            "close_date": posting.close_date.isoformat(),
            "required_documents": posting.details.required_documents,
            "applications": {app.applicant_id: app.status.value for app in posting.applications},
        }
        if posting.manager is not None:
            current = posting.manager.current_round()
            summary["rounds"] = [r.filter_map() for r in posting.manager.rounds]
            summary["current_round"] = current.name if current else None
            summary["remaining"] = [a.applicant_id for a in posting.manager.remaining_applications]
        return summary

    # -- applications ---------------------------------------------------------

    def start_application(self, username: str, job_id: str) -> Application:
        applicant = self._applicant(username)
        application = applicant.start_application(self._posting(job_id))
        self._record("application.created", applicant=username, job_id=job_id)
        return application

    def submit_application(self, username: str, job_id: str) -> Application:
        application = self._application(username, job_id)
        application.submit(self.center)
        self._record("application.submitted", applicant=username, job_id=job_id)
        return application

    def withdraw_application(self, username: str, job_id: str) -> Application:
        application = self._application(username, job_id)
        application.withdraw(self.center)
        posting = self._posting(job_id)
        if posting.manager is not None:
            posting.manager.refresh_status()
        self._record("application.withdrawn", applicant=username, job_id=job_id)
        return application

    def delete_application(self, username: str, job_id: str) -> None:
        applicant = self._applicant(username)
        applicant.delete_application(self._application(username, job_id))
        self._record("application.deleted", applicant=username, job_id=job_id)

    # -- documents ------------------------------------------------------------

    def upload_document(self, username: str, path: str | Path) -> Document:
        applicant = self._applicant(username)
        document = load_document(path, self.clock.now())
        applicant.documents.add(document)
        self._record("document.uploaded", applicant=username, name=document.name)
        return document

    def attach_document(self, username: str, job_id: str, name: str) -> Document:
        """Copy one of the applicant's documents onto a draft application."""
        applicant = self._applicant(username)
        application = self._application(username, job_id)
        source = applicant.documents.get(name)
        if source is None:
            raise FileNotFoundError(f"{username!r} has no document named {name!r}")
        source.touch()
        copy = Document(name=source.name, content=source.content, last_used_date=self.clock.now())
        application.documents.add(copy)
        self._record("document.attached", applicant=username, job_id=job_id, name=name)
        return copy

    def sweep_documents(self, username: str) -> list[str]:
        applicant = self._applicant(username)
        now = self.clock.now()
        max_idle = self.settings.documents.max_idle_days
        stores = [applicant.documents] + [app.documents for app in applicant.applications]
        evicted = [doc.name for store in stores for doc in store.sweep(now, max_idle_days=max_idle)]
        if evicted:
            self._record("documents.evicted", applicant=username, names=evicted)
        return evicted

    def list_documents(self, username: str) -> list[Document]:
        """Evict stale documents, then list what the applicant still holds."""
        self.sweep_documents(username)
        return self._applicant(username).documents.list_all()

    # -- rounds and interviews --------------------------------------------------

    def add_round(self, job_id: str, round_name: str) -> InterviewRound:
        manager = self._manager(job_id)
        interview_round = manager.add_round(InterviewRound(round_name))
        self._record("round.added", job_id=job_id, round=round_name)
        return interview_round

    def advance_round(self, job_id: str) -> InterviewRound:
        interview_round = self._manager(job_id).advance()
        self._record("round.started", job_id=job_id, round=interview_round.name)
        return interview_round

    def match_interview(self, job_id: str, applicant_id: str, interviewer_id: str) -> Interview:
        manager = self._manager(job_id)
        current = manager.current_round()
        if current is None:
            raise WrongInterviewRoundStatusError("No interview round has started yet")
        application = self._application(applicant_id, job_id)
        interview = application.interview_for(current.name)
        if interview is None or application not in current.applications:
            raise ApplicationNotInPostingError(
                f"{applicant_id!r} is not part of round {current.name!r}"
            )
        interviewer = self._company_interviewer(manager.posting, interviewer_id)
        interview.match(interviewer, current.name, message=self.settings.messages.new_interview)
        manager.refresh_status()
        self._record(
            "interview.matched",
            job_id=job_id,
            applicant=applicant_id,
            interviewer=interviewer_id,
            round=current.name,
        )
        return interview

    def record_interview_result(
        self,
        interviewer_id: str,
        job_id: str,
        applicant_id: str,
        *,
        passed: bool,
        recommendation: str | None = None,
    ) -> Interview:
        manager = self._manager(job_id)
        interviewer = self._employee(interviewer_id, UserRole.INTERVIEWER)
        interview = self._assigned_interview(interviewer, job_id, applicant_id)
        interview.record_result(
            InterviewStatus.PASS if passed else InterviewStatus.FAIL,
            recommendation,
        )
        manager.refresh_status()
        self._record(
            "interview.resolved",
            job_id=job_id,
            applicant=applicant_id,
            interviewer=interviewer_id,
            result=interview.status,
        )
        return interview

    def hire(self, job_id: str, applicant_id: str) -> Application:
        manager = self._manager(job_id)
        application = self._application(applicant_id, job_id)
        manager.hire(application)
        self._record("application.hired", job_id=job_id, applicant=applicant_id)
        return application

    def applicant_interviews(self, username: str) -> dict[str, list[Interview]]:
        applicant = self._applicant(username)
        return {"ongoing": applicant.ongoing_interviews(), "past": applicant.past_interviews()}

    # -- lookups --------------------------------------------------------------

    def _posting(self, job_id: str) -> JobPosting:
        posting = self.center.get_job_posting(job_id)
        if posting is None:
            raise JobPostingDoesNotExistError(f"Job posting {job_id!r} does not exist")
        return posting

    def _manager(self, job_id: str) -> InterviewRoundManager:
        posting = self._posting(job_id)
        if posting.manager is None:
            raise WrongJobPostingStatusError(JobPostingStatus.PROCESSING, posting.status)
        posting.manager.require_processing()
        return posting.manager

    def _applicant(self, username: str) -> Applicant:
        applicant = self.center.get_applicant(username)
        if applicant is None:
            raise UserDoesNotExistError(f"Applicant {username!r} does not exist")
        return applicant

    def _employee(self, username: str, role: UserRole) -> Employee:
        employee = self.center.get_employee(username, role)
        if employee is None:
            raise UserDoesNotExistError(f"{role.value.lower()} {username!r} does not exist")
        return employee

    def _company_interviewer(self, posting: JobPosting, username: str) -> Employee:
        company = self.center.get_company(posting.company_id)
        staff = self.center.get_interviewers(company.interviewer_ids) if company else []
        for interviewer in staff:
            if interviewer.username == username:
                return interviewer
        raise UserDoesNotExistError(
            f"Interviewer {username!r} does not work for {posting.company_id!r}"
        )

    def _application(self, username: str, job_id: str) -> Application:
        application = self._applicant(username).application_for(job_id)
        if application is None:
            raise ApplicationNotInPostingError(f"{username!r} has no application for {job_id!r}")
        return application

    @staticmethod
    def _assigned_interview(interviewer: Employee, job_id: str, applicant_id: str) -> Interview:
        for interview in interviewer.interview_assignments:
            application = interview.application
            if application.job_posting_id == job_id and application.applicant_id == applicant_id:
                return interview
        raise WrongInterviewStatusError(
            f"{interviewer.username!r} has no pending interview with {applicant_id!r} for {job_id!r}"
        )

    def _record(self, event: str, **fields: Any) -> None:
        self._logger.info(event, **{k: _plain(v) for k, v in fields.items()})
        if self._audit is not None:
            self._audit.append({"event": event, "date": self.clock.now(), **fields})


def _plain(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return getattr(value, "value", value)

