"""Pydantic schema for user registration requests."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.status import UserRole


class UserRegistration(BaseModel):
    """Details submitted when a user signs up."""

    username: str
    role: UserRole
    email: str
    company_id: str | None = None
    first_name: str = ""
    last_name: str = ""
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @field_validator("username")
    @classmethod
    def _username_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("username must not be blank")
        return value

    def profile(self) -> dict[str, Any]:
        profile = dict(self.details)
        profile.update(email=self.email, first_name=self.first_name, last_name=self.last_name)
        return profile
