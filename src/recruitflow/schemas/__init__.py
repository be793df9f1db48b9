"""Pydantic schema definitions for workflow inputs and configuration."""

from __future__ import annotations

# NOTE: posting first; registration pulls in the core package, which needs it.
from .posting import JobPostingDetails
from .config import AppConfig, load_config
from .registration import UserRegistration

__all__ = [
    "AppConfig",
    "JobPostingDetails",
    "UserRegistration",
    "load_config",
]
