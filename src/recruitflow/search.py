"""Record filtering for listing screens and CLI search."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, TypeVar, runtime_checkable

from rapidfuzz import fuzz


@runtime_checkable
class Filterable(Protocol):
    def filter_map(self) -> dict[str, str]:
        """Return the searchable column -> value view of the record."""


T = TypeVar("T", bound=Filterable)


def filter_records(
    records: Iterable[T],
    query: str,
    *,
    min_similarity: float = 80.0,
) -> list[T]:
    """Return records matching any ``;``-separated term of ``query``.

    A term matches when a field value starts with it (case-insensitive) or
    when the fuzzy partial ratio reaches ``min_similarity``.
    """

    terms = [term.strip().lower() for term in query.split(";") if term.strip()]
    if not terms:
        return list(records)
    return [record for record in records if _matches(record.filter_map().values(), terms, min_similarity)]


def headings(records: Sequence[Filterable]) -> list[str]:
    if not records:
        return []
    return list(records[0].filter_map().keys())


def _matches(values: Iterable[str], terms: list[str], min_similarity: float) -> bool:
    for value in values:
        normalized = str(value).lower()
        for term in terms:
            if normalized.startswith(term):
                return True
            if fuzz.partial_ratio(term, normalized) >= min_similarity:
                return True
    return False


__all__ = ["Filterable", "filter_records", "headings"]
