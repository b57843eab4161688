# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from enum import Enum
from itertools import accumulate
from spellchk.errors import FileUnreadable
from typing import AbstractSet, Iterator, NamedTuple

import bisect
import codecs
import re

# Letters, optionally joined by apostrophes or hyphens: "don't", "well-formed"
WORD_RE = re.compile(r"[^\W\d_]+(?:['’-][^\W\d_]+)*")
NEWLINE_RE = re.compile(r"\n")
TOKEN_RE = re.compile(r"\S+")


class Context(Enum):
    PLAIN_TEXT = "plain_text"
    COMMENT = "comment"
    STRING_LITERAL = "string_literal"
    HEADING = "heading"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"

    @property
    def checkable(self) -> bool:
        return self is not Context.CODE_BLOCK


class Span(NamedTuple):
    text: str
    start: int  # byte offset in the original file
    end: int
    line: int  # 1-based
    column: int  # 1-based, in characters
    context: Context
    index: int  # character offset of the word in the decoded text
    token_start: int  # character range of the whitespace-delimited chunk holding the word
    token_end: int


def _utf8_length(char: str) -> int:
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def split_camel_case(word: str) -> list[tuple[int, int]]:
    """Character ranges of the sub-words of a camelCase or PascalCase word.

    >>> split_camel_case("parseHTTPResponse")
    [(0, 5), (5, 9), (9, 17)]
    """
    bounds = [0]
    for index in range(1, len(word)):
        previous, current = word[index - 1], word[index]
        following = word[index + 1] if index + 1 < len(word) else ""
        if current.isupper() and (previous.islower() or (previous.isupper() and following.islower())):
            bounds.append(index)
    bounds.append(len(word))
    return list(zip(bounds, bounds[1:]))


class SourceText:
    """Decoded file content with exact character to byte offset mapping"""

    def __init__(self, data: bytes, path: str = "<memory>") -> None:
        self.path = path
        self.data = data
        base = len(codecs.BOM_UTF8) if data.startswith(codecs.BOM_UTF8) else 0
        try:
            self.text = data[base:].decode("utf-8")
        except UnicodeDecodeError as ex:
            raise FileUnreadable(path, f"not valid UTF-8 at byte {base + ex.start}") from ex

        self._byte_offsets: list[int] | None = None
        self._base = base
        if len(self.text) != len(data) - base:
            self._byte_offsets = list(accumulate((_utf8_length(char) for char in self.text), initial=base))
        self._line_starts = [0] + [match.end() for match in NEWLINE_RE.finditer(self.text)]
        self._token_starts: list[int] = []
        self._token_ends: list[int] = []
        for match in TOKEN_RE.finditer(self.text):
            self._token_starts.append(match.start())
            self._token_ends.append(match.end())

    def byte_offset(self, index: int) -> int:
        if self._byte_offsets is None:
            return self._base + index
        return self._byte_offsets[index]

    def line_column(self, index: int) -> tuple[int, int]:
        line = bisect.bisect_right(self._line_starts, index)
        return line, index - self._line_starts[line - 1] + 1

    def line_text(self, line: int) -> str:
        start = self._line_starts[line - 1]
        end = self._line_starts[line] - 1 if line < len(self._line_starts) else len(self.text)
        return self.text[start:end].rstrip("\r")

    def token_bounds(self, index: int) -> tuple[int, int]:
        """Character range of the whitespace-delimited token holding text[index], which must not be whitespace"""
        position = bisect.bisect_right(self._token_starts, index) - 1
        return self._token_starts[position], self._token_ends[position]

    def span(self, start: int, end: int, context: Context) -> Span:
        line, column = self.line_column(start)
        token_start, token_end = self.token_bounds(start)
        return Span(
            text=self.text[start:end],
            start=self.byte_offset(start),
            end=self.byte_offset(end),
            line=line,
            column=column,
            context=context,
            index=start,
            token_start=token_start,
            token_end=token_end,
        )

    def words(
        self,
        start: int,
        end: int,
        context: Context,
        split_identifiers: bool = False,
        escapes: AbstractSet[int] = frozenset(),
    ) -> Iterator[Span]:
        """Spans for the words in text[start:end], in order.

        `escapes` holds indexes of characters that follow a backslash escape; they never
        start a word.
        """
        for match in WORD_RE.finditer(self.text, start, end):
            word_start, word_end = match.span()
            if word_start in escapes:
                word_start += 1
                while word_start < word_end and not self.text[word_start].isalpha():
                    word_start += 1
                if word_start == word_end:
                    continue
            if not split_identifiers:
                yield self.span(word_start, word_end, context)
                continue
            for sub_start, sub_end in split_camel_case(self.text[word_start:word_end]):
                yield self.span(word_start + sub_start, word_start + sub_end, context)
