"""Status enumerations for the workflow entities."""

from __future__ import annotations

from enum import Enum


class ApplicationStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    HIRED = "HIRED"
    REJECTED = "REJECTED"


class InterviewStatus(str, Enum):
    UNMATCHED = "UNMATCHED"
    PENDING = "PENDING"
    PASS = "PASS"
    FAIL = "FAIL"

    @property
    def is_resolved(self) -> bool:
        return self in (InterviewStatus.PASS, InterviewStatus.FAIL)


class InterviewRoundStatus(str, Enum):
    EMPTY = "EMPTY"
    MATCHING = "MATCHING"
    PENDING = "PENDING"
    FINISHED = "FINISHED"


class JobPostingStatus(str, Enum):
    OPEN = "OPEN"
    PROCESSING = "PROCESSING"
    FINISHED = "FINISHED"


class UserRole(str, Enum):
    APPLICANT = "APPLICANT"
    INTERVIEWER = "INTERVIEWER"
    HIRING_MANAGER = "HIRING_MANAGER"
    RECRUITER = "RECRUITER"
