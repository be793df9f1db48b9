"""Clock implementations supplying the workflow's notion of "today"."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import pendulum


@runtime_checkable
class Clock(Protocol):
    """Source of the current date."""

    def now(self) -> pendulum.Date:
        """Return the current date."""


class SystemClock:
    """Clock backed by the host's local date."""

    def now(self) -> pendulum.Date:
        return pendulum.today().date()


class SimulatedClock:
    """Clock pinned to a date that only moves when told to.

    Used by tests and by the CLI's ``tick --days`` to fast-forward the
    workflow without waiting for real days to pass.
    """

    def __init__(self, start: pendulum.Date | str | None = None) -> None:
        self._current = _coerce_date(start) if start is not None else pendulum.today().date()

    def now(self) -> pendulum.Date:
        return self._current

    def advance(self, days: int) -> pendulum.Date:
        if days < 0:
            raise ValueError("Days to advance must be non-negative")
        self._current = self._current.add(days=days)
        return self._current

    def set(self, value: pendulum.Date | str) -> None:
        self._current = _coerce_date(value)


def parse_date(value: str) -> pendulum.Date:
    """Parse an ISO ``YYYY-MM-DD`` string into a date."""
    parsed = pendulum.parse(value, exact=True)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    raise ValueError(f"Not a calendar date: {value!r}")


def _coerce_date(value: pendulum.Date | str) -> pendulum.Date:
    if isinstance(value, str):
        return parse_date(value)
    if isinstance(value, pendulum.DateTime):
        return value.date()
    if isinstance(value, pendulum.Date):
        return value
    # plain datetime.date
    return pendulum.date(value.year, value.month, value.day)


__all__ = ["Clock", "SystemClock", "SimulatedClock", "parse_date"]
