"""Snapshot persistence and the append-only audit log."""

from __future__ import annotations

import json
import os
import pickle
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pendulum

from . import __version__
from .directory import EmploymentCenter


@dataclass(slots=True)
class Snapshot:
    """Everything needed to resume the workflow between CLI invocations."""

    center: EmploymentCenter
    current_date: pendulum.Date
    app_version: str = __version__


class SnapshotStore:
    """Opaque pickle snapshot of the whole object graph."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Snapshot | None:
        if not self._path.exists():
            return None
        with self._path.open("rb") as handle:
            snapshot = pickle.load(handle)
        if not isinstance(snapshot, Snapshot):
            raise ValueError(f"{self._path} does not contain a recruitflow snapshot")
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
        try:
            with os.fdopen(fd, "wb") as handle:
                pickle.dump(snapshot, handle)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict[str, Any]) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False, default=_json_default))
            handle.write("\n")


def _json_default(value: Any) -> Any:
    if isinstance(value, (pendulum.Date, pendulum.DateTime)):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
