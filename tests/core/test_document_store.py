from __future__ import annotations

import pendulum
import pytest

from recruitflow.core import Document, DocumentStore
from recruitflow.errors import (
    DocumentAlreadyExistsError,
    DocumentStoreLockedError,
    EmptyDocumentNameError,
)

NOW = pendulum.date(2024, 3, 31)


def build_document(name: str = "cv.txt", *, idle_days: int = 0, used: bool = False) -> Document:
    return Document(
        name=name,
        content="content",
        last_used_date=NOW.subtract(days=idle_days),
        used=used,
    )


def test_add_rejects_locked_blank_and_duplicate_documents():
    store = DocumentStore()
    store.add(build_document("cv.txt"))

    with pytest.raises(DocumentAlreadyExistsError):
        store.add(build_document("cv.txt"))
    with pytest.raises(EmptyDocumentNameError):
        store.add(build_document("   "))

    store.set_editable(False)
    with pytest.raises(DocumentStoreLockedError):
        store.add(build_document("letter.txt"))

    assert [doc.name for doc in store.list_all()] == ["cv.txt"]


def test_remove_missing_document_is_noop():
    store = DocumentStore()
    kept = build_document("cv.txt")
    store.add(kept)

    store.remove(build_document("other.txt"))

    assert store.list_all() == [kept]


def test_sweep_keeps_thirty_day_old_document_and_evicts_older():
    store = DocumentStore()
    boundary = build_document("boundary.txt", idle_days=30)
    stale = build_document("stale.txt", idle_days=31)
    store.add(boundary)
    store.add(stale)

    evicted = store.sweep(NOW)

    assert evicted == [stale]
    assert store.list_all() == [boundary]


def test_sweep_refreshes_documents_used_this_cycle():
    store = DocumentStore()
    old_but_used = build_document("used.txt", idle_days=90)
    old_but_used.touch()
    store.add(old_but_used)

    assert store.sweep(NOW) == []
    assert old_but_used.last_used_date == NOW
    assert old_but_used.used is False


def test_sweep_respects_configured_idle_window():
    store = DocumentStore()
    doc = build_document("cv.txt", idle_days=8)
    store.add(doc)

    assert store.sweep(NOW, max_idle_days=7) == [doc]
