"""Dependency injection container for the recruitment workflow."""

from __future__ import annotations

from typing import Any

import pendulum
from dependency_injector import containers, providers

from .clock import SimulatedClock, SystemClock
from .directory import EmploymentCenter
from .schemas.config import AppConfig, load_config
from .storage import AuditLogger
from .workflow import RecruitmentService


class RecruitmentContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    app_config = providers.Singleton(load_config, config)

    clock = providers.Singleton(SystemClock)

    center = providers.Singleton(EmploymentCenter)

    audit_logger = providers.Object(None)

    service = providers.Factory(
        RecruitmentService,
        center=center,
        clock=clock,
        settings=app_config,
        audit_logger=audit_logger,
    )


def create_container(
    *,
    settings: dict[str, Any] | None = None,
    center: EmploymentCenter | None = None,
    current_date: pendulum.Date | None = None,
) -> RecruitmentContainer:
    """Instantiate container with optional overrides.

    ``center`` and ``current_date`` come from a restored snapshot; otherwise
    the clock starts at ``clock.start_date`` from the settings, or today.
    """

    app_config = load_config(settings or {})
    container = RecruitmentContainer()
    container.config.from_dict(app_config.to_settings())

    start = current_date or app_config.clock.start_date
    container.clock.override(providers.Singleton(SimulatedClock, start))

    if center is not None:
        container.center.override(providers.Object(center))

    if app_config.storage.audit_log:
        container.audit_logger.override(
            providers.Singleton(AuditLogger, app_config.storage.audit_log)
        )

    return container


__all__ = ["RecruitmentContainer", "create_container", "AppConfig"]
