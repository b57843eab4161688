# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Rendering of run results for people (table) and editors (JSON)"""
from __future__ import annotations

from .checker import FileReport
from typing import Any, Sequence

TABLE_LAYOUT = ["file", "line", "column", "word", "suggestions"]
FAILURE_LAYOUT = ["file", "error"]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def finding_rows(reports: Sequence[FileReport]) -> list[dict[str, Any]]:
    return [
        {
            "file": report.path,
            "line": finding.line,
            "column": finding.column,
            "word": finding.word,
            "suggestions": [suggestion.word for suggestion in finding.suggestions],
        }
        for report in reports
        for finding in report.findings
    ]


def failure_rows(reports: Sequence[FileReport]) -> list[dict[str, Any]]:
    return [{"file": report.path, "error": str(report.error)} for report in reports if report.error is not None]


def json_document(reports: Sequence[FileReport]) -> dict[str, Any]:
    """The stable machine readable shape of a run"""
    errors = [
        {
            "file": report.path,
            "line": finding.line,
            "column": finding.column,
            "byte_start": finding.start,
            "byte_end": finding.end,
            "word": finding.word,
            "context": finding.excerpt,
            "suggestions": [suggestion.word for suggestion in finding.suggestions],
            "distances": [suggestion.distance for suggestion in finding.suggestions],
        }
        for report in reports
        for finding in report.findings
    ]
    return {
        "files_checked": len(reports),
        "total_errors": len(errors),
        "errors": errors,
        "failures": failure_rows(reports),
    }


def summary_line(reports: Sequence[FileReport], fix: bool = False) -> str:
    if fix:
        fixed = sum(report.fixed for report in reports)
        if not fixed:
            return "No corrections needed"
        files = sum(1 for report in reports if report.fixed)
        return f"{_plural(fixed, 'correction')} applied to {_plural(files, 'file')}"

    total = sum(len(report.findings) for report in reports)
    if not total:
        return "No spelling errors found"
    return f"{_plural(total, 'error')} found in {_plural(len(reports), 'file')}"
