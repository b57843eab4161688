# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Turn raw file bytes into checkable, positioned spans"""
from __future__ import annotations

from . import markdown, plaintext, source_code
from .common import Context, SourceText, Span, split_camel_case
from .source_code import SourceLang
from enum import Enum
from spellchk._typing import assert_never
from typing import Iterator

import os

MARKDOWN_EXTENSIONS = frozenset({"md", "mdx", "markdown", "mkd"})

__all__ = [
    "Context",
    "Document",
    "FileType",
    "SourceLang",
    "SourceText",
    "Span",
    "split_camel_case",
    "tokenize",
]


class FileType(Enum):
    MARKDOWN = "markdown"
    SOURCE_CODE = "source_code"
    PLAIN_TEXT = "plain_text"

    @classmethod
    def from_path(cls, path: str) -> FileType:
        _, ext = os.path.splitext(path)
        if ext.lower().lstrip(".") in MARKDOWN_EXTENSIONS:
            return cls.MARKDOWN
        if SourceLang.from_path(path) is not None:
            return cls.SOURCE_CODE
        return cls.PLAIN_TEXT


def tokenize(file_type: FileType, source: SourceText | bytes, lang: SourceLang = SourceLang.OTHER) -> Iterator[Span]:
    if isinstance(source, bytes):
        source = SourceText(source)
    if file_type is FileType.MARKDOWN:
        return markdown.tokenize(source)
    elif file_type is FileType.SOURCE_CODE:
        return source_code.tokenize(source, lang)
    elif file_type is FileType.PLAIN_TEXT:
        return plaintext.tokenize(source)
    else:
        assert_never(file_type)


class Document:
    """One file's content and type; `spans()` can be iterated any number of times"""

    def __init__(
        self,
        path: str,
        data: bytes,
        file_type: FileType | None = None,
        lang: SourceLang | None = None,
    ) -> None:
        self.path = path
        self.source = SourceText(data, path)
        self.file_type = file_type or FileType.from_path(path)
        self.lang = lang or SourceLang.from_path(path) or SourceLang.OTHER

    @property
    def data(self) -> bytes:
        return self.source.data

    @property
    def text(self) -> str:
        return self.source.text

    def spans(self) -> Iterator[Span]:
        return tokenize(self.file_type, self.source, self.lang)

    def line_text(self, line: int) -> str:
        return self.source.line_text(line)
