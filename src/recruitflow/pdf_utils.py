"""Utilities for extracting text from uploaded application documents."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Sequence

import pymupdf4llm

_PDF_SUFFIXES: frozenset[str] = frozenset({".pdf"})


def extract_markdown(
    pdf_path: str | Path,
    *,
    exclude_patterns: Sequence[str] | None = None,
) -> str:
    """Return markdown text extracted from a PDF, removing boilerplate lines.

    Parameters
    ----------
    pdf_path:
        Path to the source PDF file.
    exclude_patterns:
        Optional list of string patterns to remove entirely from the output lines.
        Each pattern is matched as a substring (case-sensitive), optionally
        followed by a page counter such as ``1 / 3``, and any line containing
        it is dropped.
    """

    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(pdf_path)

    markdown = pymupdf4llm.to_markdown(str(pdf_path))
    patterns = _build_patterns(exclude_patterns or ())

    cleaned_lines: list[str] = []
    for line in markdown.splitlines():
        if line.strip() and any(pattern.search(line) for pattern in patterns):
            continue
        cleaned_lines.append(line)
    return "\n".join(cleaned_lines)


def read_document_text(
    path: str | Path,
    *,
    exclude_patterns: Sequence[str] | None = None,
) -> str:
    """Return the text content of a document file.

    PDFs are converted to markdown; anything else is read as UTF-8 with each
    line stripped of surrounding whitespace.
    """

    path = Path(path)
    if path.suffix.lower() in _PDF_SUFFIXES:
        return extract_markdown(path, exclude_patterns=exclude_patterns)
    with path.open("r", encoding="utf-8") as handle:
        return "".join(f"{line.strip()}\n" for line in handle)


def _build_patterns(excludes: Iterable[str]) -> list[re.Pattern[str]]:
    patterns: list[re.Pattern[str]] = []
    for text in excludes:
        escaped = re.escape(text)
        pattern = re.compile(rf"{escaped}(?:\s+\d+\s*/\s*\d+)?")
        patterns.append(pattern)
    return patterns


__all__ = ["extract_markdown", "read_document_text"]
