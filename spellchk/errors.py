# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations


class SpellchkError(Exception):
    """Base class for spell checker errors"""


class DictionaryNotFound(SpellchkError):
    def __init__(self, language: str, path: str) -> None:
        super().__init__(language, path)
        self.language = language
        self.path = path

    def __str__(self) -> str:
        return (
            f"No dictionary installed for {self.language!r} (expected {self.path}); "
            f"run 'spellchk dict download {self.language}' first"
        )


class DictionaryCorrupt(SpellchkError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"Dictionary {self.path} is corrupt: {self.reason}"


class FileUnreadable(SpellchkError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"Cannot read {self.path}: {self.reason}"


class FileUnwritable(SpellchkError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"Cannot write corrections to {self.path}: {self.reason}"


class OverlappingReplacement(SpellchkError):
    def __init__(self, first: tuple[int, int], second: tuple[int, int]) -> None:
        super().__init__(first, second)
        self.first = first
        self.second = second

    def __str__(self) -> str:
        return "Replacement at bytes [{}, {}) overlaps replacement at bytes [{}, {})".format(*self.first, *self.second)


class InvalidIgnorePattern(SpellchkError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(pattern, reason)
        self.pattern = pattern
        self.reason = reason

    def __str__(self) -> str:
        return f"Invalid ignore pattern {self.pattern!r}: {self.reason}"


class DownloadError(SpellchkError):
    """Word list download failed"""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(url, status)
        self.url = url
        self.status = status

    def __str__(self) -> str:
        return f"Failed to download {self.url}: HTTP {self.status}"
