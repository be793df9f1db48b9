"""Uploaded documents and the per-owner document store."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pendulum
import structlog

from ..errors import (
    DocumentAlreadyExistsError,
    DocumentStoreLockedError,
    EmptyDocumentNameError,
)
from ..pdf_utils import read_document_text

DEFAULT_MAX_IDLE_DAYS = 30

logger = structlog.get_logger(__name__)


@dataclass(eq=False)
class Document:
    """A named artifact uploaded by an applicant."""

    name: str
    content: str
    last_used_date: pendulum.Date
    used: bool = False

    def touch(self) -> None:
        """Mark the document as used during the current cycle."""
        self.used = True

    def update(self, now: pendulum.Date) -> None:
        if self.used:
            self.used = False
            self.last_used_date = now

    def is_stale(self, now: pendulum.Date, max_idle_days: int = DEFAULT_MAX_IDLE_DAYS) -> bool:
        return self.last_used_date.add(days=max_idle_days) < now

    def filter_map(self) -> dict[str, str]:
        return {
            "document name": self.name,
            "last used date": self.last_used_date.isoformat(),
        }


def load_document(path: str | Path, now: pendulum.Date) -> Document:
    """Build a document from a file on disk, marked as used today."""
    path = Path(path)
    document = Document(name=path.name, content=read_document_text(path), last_used_date=now)
    document.touch()
    document.update(now)
    return document


class DocumentStore:
    """Holds documents for an applicant or an application.

    The store can be locked (an application's documents are frozen once it is
    submitted); documents that sit unused for too long are evicted by
    :meth:`sweep`.
    """

    def __init__(self, editable: bool = True) -> None:
        self._documents: list[Document] = []
        self._editable = editable

    @property
    def editable(self) -> bool:
        return self._editable

    def set_editable(self, editable: bool) -> None:
        self._editable = editable

    def add(self, document: Document) -> None:
        if not self._editable:
            raise DocumentStoreLockedError()
        if not document.name.strip():
            raise EmptyDocumentNameError()
        if self.get(document.name) is not None:
            raise DocumentAlreadyExistsError(f"Document {document.name!r} already exists")
        self._documents.append(document)

    def remove(self, document: Document) -> None:
        if document in self._documents:
            self._documents.remove(document)

    def get(self, name: str) -> Document | None:
        for document in self._documents:
            if document.name == name:
                return document
        return None

    def list_all(self) -> list[Document]:
        return list(self._documents)

    def sweep(
        self,
        now: pendulum.Date,
        *,
        max_idle_days: int = DEFAULT_MAX_IDLE_DAYS,
    ) -> list[Document]:
        """Refresh usage dates and evict stale documents; return the evicted ones."""
        kept: list[Document] = []
        evicted: list[Document] = []
        for document in self._documents:
            document.update(now)
            if document.is_stale(now, max_idle_days):
                evicted.append(document)
            else:
                kept.append(document)
        self._documents = kept
        if evicted:
            logger.info(
                "documents.evicted",
                names=[document.name for document in evicted],
                as_of=now.isoformat(),
            )
        return evicted

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document: object) -> bool:
        return document in self._documents
