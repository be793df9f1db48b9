"""Pydantic schema for job posting details."""

from __future__ import annotations

from datetime import date

import pendulum
from pydantic import BaseModel, ConfigDict, PositiveInt, field_validator


class JobPostingDetails(BaseModel):
    """Key/value details a hiring manager fills in for a posting.

    Unknown keys are kept so free-form details survive round trips.
    """

    job_id: str
    company_id: str
    position_name: str
    num_of_positions: PositiveInt
    close_date: date
    post_date: date | None = None
    recruiter_id: str | None = None
    cv: bool = False
    cover_letter: bool = False
    reference: bool = False
    extra_document: bool = False
    description: str = ""

    model_config = ConfigDict(extra="allow")

    @field_validator("close_date", "post_date")
    @classmethod
    def _as_pendulum(cls, value: date | None) -> date | None:
        if value is None or isinstance(value, pendulum.Date):
            return value
        return pendulum.date(value.year, value.month, value.day)

    @field_validator("job_id", "company_id", "position_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def required_documents(self) -> list[str]:
        flags = {
            "CV": self.cv,
            "Cover letter": self.cover_letter,
            "Reference": self.reference,
            "Extra document": self.extra_document,
        }
        return [name for name, required in flags.items() if required]
