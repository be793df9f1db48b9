"""Exception hierarchy for the recruitment workflow.

Every command checks its preconditions before touching state, so catching any
of these leaves the affected aggregate exactly as it was before the call.
"""

from __future__ import annotations

from typing import Any


class RecruitmentError(Exception):
    """Base class for recoverable workflow failures."""

    default_message = "Recruitment workflow error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


# -- status preconditions ---------------------------------------------------


class StatusError(RecruitmentError):
    """A command was issued while an entity was in the wrong state."""


class WrongApplicationStatusError(StatusError):
    default_message = "Wrong application status"


class WrongInterviewStatusError(StatusError):
    default_message = "Wrong interview status"


class WrongInterviewRoundStatusError(StatusError):
    default_message = "Wrong interview round status"


class CurrentRoundUnfinishedError(WrongInterviewRoundStatusError):
    default_message = "The current interview round is not finished"


class WrongJobPostingStatusError(StatusError):
    """Raised with the status the posting should have been in."""

    def __init__(self, expected: Any, actual: Any | None = None):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Wrong job posting status! Should be {_status_name(expected)}")


# -- uniqueness ---------------------------------------------------------------


class UniquenessError(RecruitmentError):
    """A duplicate was rejected; the existing entry is untouched."""


class ApplicationAlreadyExistsError(UniquenessError):
    default_message = "Application already exists"


class DocumentAlreadyExistsError(UniquenessError):
    default_message = "Document already exists"


class UserAlreadyExistsError(UniquenessError):
    default_message = "User already exists"


class CompanyAlreadyExistsError(UniquenessError):
    default_message = "Company already exists"


class InterviewRoundAlreadyExistsError(UniquenessError):
    default_message = "Interview round already exists"


class JobPostingAlreadyExistsError(UniquenessError):
    default_message = "Job posting already exists"


# -- missing targets ----------------------------------------------------------


class MissingTargetError(RecruitmentError):
    """The requested transition has no valid target."""


class CompanyDoesNotExistError(MissingTargetError):
    default_message = "Company does not exist"


class JobPostingDoesNotExistError(MissingTargetError):
    default_message = "Job posting does not exist"


class UserDoesNotExistError(MissingTargetError):
    default_message = "User does not exist"


class ApplicationNotInPostingError(MissingTargetError):
    default_message = "Application is not part of this job posting"


class NextRoundDoesNotExistError(MissingTargetError):
    default_message = "Next round does not exist! Please add a new round first"


class JobPostingAlreadyFilledError(MissingTargetError):
    default_message = "Job posting has already been filled"


# -- roles --------------------------------------------------------------------


class RoleError(RecruitmentError):
    """The entity does not support the requested capability."""


class NotEmployeeError(RoleError):
    default_message = "User is not an employee"


class WrongEmployeeTypeError(RoleError):
    def __init__(self, expected: Any):
        self.expected = expected
        super().__init__(f"Wrong employee type! Should be {_status_name(expected)}")


# -- documents and registration ----------------------------------------------


class DocumentStoreLockedError(RecruitmentError):
    default_message = "Documents can not be edited right now"


class EmptyDocumentNameError(RecruitmentError):
    default_message = "Document name can not be empty"


class WrongEmailFormatError(RecruitmentError):
    default_message = "Wrong email format"


def _status_name(value: Any) -> str:
    if isinstance(value, (tuple, list, set, frozenset)):
        return " or ".join(_status_name(item) for item in value)
    return str(getattr(value, "value", value))
