"""Core recruitment workflow engine."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .application import Application
from .documents import Document, DocumentStore, load_document
from .interview import Interview
from .posting import JobPosting
from .rounds import InterviewRound, InterviewRoundManager
from .status import (
    ApplicationStatus,
    InterviewRoundStatus,
    InterviewStatus,
    JobPostingStatus,
    UserRole,
)

__all__ = [
    "Application",
    "ApplicationStatus",
    "Document",
    "DocumentStore",
    "Interview",
    "InterviewRound",
    "InterviewRoundManager",
    "InterviewRoundStatus",
    "InterviewStatus",
    "JobPosting",
    "JobPostingStatus",
    "UserRole",
    "load_document",
]
