# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Prose of Markdown documents

Code (fenced, indented and inline), front matter, HTML comments and tags, and link
destinations are never checked. Headings and list items keep their own context tag.
"""
from __future__ import annotations

from .common import Context, SourceText, Span
from typing import Iterator, Match

import re

FENCE_RE = re.compile(r" {0,3}(`{3,}|~{3,})")
HEADING_RE = re.compile(r" {0,3}#{1,6}(?:\s|$)")
LIST_ITEM_RE = re.compile(r" {0,3}(?:>\s?)*(?:[-*+]|\d{1,9}[.)])(?:\s|$)")
INDENTED_CODE_RE = re.compile(r"(?: {4}|\t)")
FRONT_MATTER_END_RE = re.compile(r"(?:---|\.\.\.)\s*$")

BACKTICK_RUN_RE = re.compile(r"`+")
LINK_DESTINATION_RE = re.compile(r"\]\(\s*(<[^>\n]*>|[^)\s]*)")
AUTOLINK_RE = re.compile(r"<(?:[A-Za-z][A-Za-z0-9+.-]{1,31}:[^\s<>]*|[^\s<>@]+@[^\s<>]+)>")
REFERENCE_DEFINITION_RE = re.compile(r" {0,3}\[[^\]\n]+\]:\s*(\S+)")
HTML_TAG_RE = re.compile(r"</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>\n]*)?/?>")
HTML_COMMENT_START = "<!--"
HTML_COMMENT_END = "-->"


def _fence_opening(line: str) -> Match[str] | None:
    opening = FENCE_RE.match(line)
    # a backtick fence line cannot contain other backticks
    if opening and not (opening.group(1)[0] == "`" and "`" in line[opening.end() :]):
        return opening
    return None


def _closing_run(line: str, run: str, start: int = 0) -> Match[str] | None:
    for match in BACKTICK_RUN_RE.finditer(line, start):
        if len(match.group()) == len(run):
            return match
    return None


class InlineCode:
    """Backtick code spans of a document, which may continue over the lines of a paragraph

    A backtick run opens a code span only when a run of the same length closes it before
    the paragraph ends; otherwise the backticks are literal text.
    """

    def __init__(self, lines: list[str]) -> None:
        self.lines = lines
        self.open_run: str | None = None
        # run lengths with no closing run in the rest of the current paragraph
        self._unclosed: set[int] = set()

    def end_paragraph(self) -> None:
        self.open_run = None
        self._unclosed.clear()

    def _closes_later(self, number: int, run: str) -> bool:
        if len(run) in self._unclosed:
            return False
        for index in range(number + 1, len(self.lines)):
            following = self.lines[index]
            if not following.strip() or _fence_opening(following) or _line_context(following) is not Context.PLAIN_TEXT:
                break
            if _closing_run(following, run) is not None:
                return True
        self._unclosed.add(len(run))
        return False

    def ranges(self, number: int, multiline: bool = True) -> list[tuple[int, int]]:
        """Character ranges of lines[number] inside code spans"""
        line = self.lines[number]
        ranges = []
        position = 0
        if self.open_run is not None:
            closing = _closing_run(line, self.open_run)
            if closing is None:
                return [(0, len(line))]
            ranges.append((0, closing.end()))
            position = closing.end()
            self.open_run = None

        while True:
            opening = BACKTICK_RUN_RE.search(line, position)
            if opening is None:
                return ranges
            closing = _closing_run(line, opening.group(), opening.end())
            if closing is not None:
                ranges.append((opening.start(), closing.end()))
                position = closing.end()
            elif multiline and self._closes_later(number, opening.group()):
                ranges.append((opening.start(), len(line)))
                self.open_run = opening.group()
                return ranges
            else:
                position = opening.end()


def _excluded_ranges(line: str) -> list[tuple[int, int]]:
    ranges = [match.span(1) for match in LINK_DESTINATION_RE.finditer(line)]
    ranges.extend(match.span() for match in AUTOLINK_RE.finditer(line))
    ranges.extend(match.span() for match in HTML_TAG_RE.finditer(line))
    definition = REFERENCE_DEFINITION_RE.match(line)
    if definition:
        ranges.append(definition.span(1))
    return ranges


def _line_context(line: str) -> Context:
    if HEADING_RE.match(line):
        return Context.HEADING
    if LIST_ITEM_RE.match(line):
        return Context.LIST_ITEM
    return Context.PLAIN_TEXT


def tokenize(source: SourceText) -> Iterator[Span]:
    text = source.text
    offset = 0
    fence: str | None = None
    in_html_comment = False
    previous_blank = True
    in_indented_code = False
    in_list = False

    lines = text.split("\n")
    if lines and lines[0].rstrip() == "---":
        # YAML front matter
        for number, line in enumerate(lines[1:], 1):
            if FRONT_MATTER_END_RE.match(line):
                offset = sum(len(skipped) + 1 for skipped in lines[: number + 1])
                lines = lines[number + 1 :]
                break

    code = InlineCode(lines)
    for number, line in enumerate(lines):
        line_start = offset
        offset += len(line) + 1
        blank = not line.strip()

        if fence is not None:
            closing = FENCE_RE.match(line)
            if closing and closing.group(1)[0] == fence[0] and len(closing.group(1)) >= len(fence):
                if not line[closing.end() :].strip():
                    fence = None
            continue

        opening = _fence_opening(line)
        if opening:
            fence = opening.group(1)
            previous_blank = False
            code.end_paragraph()
            continue

        if in_indented_code and (blank or INDENTED_CODE_RE.match(line)):
            continue
        in_indented_code = False
        if previous_blank and not in_list and INDENTED_CODE_RE.match(line) and not blank:
            in_indented_code = True
            code.end_paragraph()
            continue

        if blank:
            previous_blank = True
            code.end_paragraph()
            continue
        previous_blank = False

        context = _line_context(line)
        if context is Context.LIST_ITEM:
            in_list = True
        elif not line[:1].isspace():
            in_list = False
        if context is not Context.PLAIN_TEXT:
            code.end_paragraph()

        excluded = _excluded_ranges(line)
        excluded.extend(code.ranges(number, multiline=context is not Context.HEADING))
        search_from = 0
        while True:
            if in_html_comment:
                close = line.find(HTML_COMMENT_END, search_from)
                if close < 0:
                    excluded.append((search_from, len(line)))
                    break
                excluded.append((search_from, close + len(HTML_COMMENT_END)))
                search_from = close + len(HTML_COMMENT_END)
                in_html_comment = False
            start = line.find(HTML_COMMENT_START, search_from)
            if start < 0:
                break
            in_html_comment = True
            search_from = start

        for span in source.words(line_start, line_start + len(line), context):
            word_start = span.column - 1
            word_end = word_start + len(span.text)
            if any(start < word_end and word_start < end for start, end in excluded):
                continue
            yield span
