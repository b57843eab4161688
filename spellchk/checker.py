# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Check orchestration: files in, ordered findings and corrected bytes out"""
from __future__ import annotations

from .config import CheckConfig, compile_ignore_patterns, COMPOUND_RULE, DEFAULT_RULES
from .dictionary import DictionaryStore, PersonalDictionary
from .errors import FileUnreadable, FileUnwritable, OverlappingReplacement, SpellchkError
from .fixer import apply_replacements, Replacement
from .parser import Context, Document, FileType, Span
from .speller import DEFAULT_MAX_DISTANCE, DEFAULT_MAX_SUGGESTIONS, has_regular_case, suggest, Suggestion
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, Iterable, Iterator, NamedTuple, Pattern, Sequence

import bisect
import logging
import os
import stat
import tempfile

log = logging.getLogger("spellchk.checker")

APOSTROPHES = "'’"
POSSESSIVE_SUFFIX = "'s"


class Finding(NamedTuple):
    word: str
    start: int  # byte range in the original file
    end: int
    line: int
    column: int
    suggestions: tuple[Suggestion, ...]
    context: Context
    excerpt: str


class FileReport(NamedTuple):
    path: str
    findings: tuple[Finding, ...] = ()
    error: SpellchkError | None = None
    corrected: bytes | None = None  # None: file unchanged
    fixed: int = 0
    unresolved: tuple[Finding, ...] = ()


class RunOutcome(Enum):
    CLEAN = "clean"
    FINDINGS = "findings"
    FATAL = "fatal"


def summarize(reports: Iterable[FileReport]) -> RunOutcome:
    outcome = RunOutcome.CLEAN
    for report in reports:
        if report.error is not None:
            return RunOutcome.FATAL
        if report.unresolved:
            outcome = RunOutcome.FINDINGS
    return outcome


def read_file(path: str) -> bytes:
    try:
        with open(path, "rb") as fp:
            return fp.read()
    except OSError as ex:
        raise FileUnreadable(path, ex.strerror or str(ex)) from ex


def write_corrections(report: FileReport) -> bool:
    """Write the corrected bytes of a report back to its file, if there are any"""
    if report.corrected is None:
        return False
    # the original file is only replaced once the corrected copy is fully on disk
    directory = os.path.dirname(os.path.abspath(report.path))
    try:
        fd, temp_path = tempfile.mkstemp(prefix=".spellchk-", dir=directory)
    except OSError as ex:
        raise FileUnwritable(report.path, ex.strerror or str(ex)) from ex
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(report.corrected)
        os.chmod(temp_path, stat.S_IMODE(os.stat(report.path).st_mode))
        os.replace(temp_path, report.path)
    except OSError as ex:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise FileUnwritable(report.path, ex.strerror or str(ex)) from ex
    log.debug("%s: wrote %d correction(s)", report.path, report.fixed)
    return True


def auto_replacement(finding: Finding) -> Replacement | None:
    """Top ranked suggestion, or None when there is nothing to change"""
    if not finding.suggestions or finding.suggestions[0].word == finding.word:
        return None
    return Replacement.from_finding(finding, finding.suggestions[0].word)


def _segments(span: Span) -> Iterator[Span]:
    """Sub-spans of a hyphenated span, one per hyphen separated part"""
    index = 0
    for part in span.text.split("-"):
        if part:
            yield span._replace(
                text=part,
                start=span.start + len(span.text[:index].encode("utf-8")),
                end=span.start + len(span.text[: index + len(part)].encode("utf-8")),
                column=span.column + index,
                index=span.index + index,
            )
        index += len(part) + 1


class IgnoredRanges:
    """Ignore pattern matches of one document, searched once per whitespace-delimited token

    Spans arrive in text order, so only the matches of the current token are kept.
    """

    def __init__(self, text: str, patterns: Sequence[Pattern[str]]) -> None:
        self.text = text
        self.patterns = patterns
        self._token: tuple[int, int] | None = None
        # per pattern: match starts and match ends, both non-decreasing
        self._matches: list[tuple[list[int], list[int]]] = []

    def _load(self, token_start: int, token_end: int) -> None:
        token = self.text[token_start:token_end]
        self._matches = []
        for pattern in self.patterns:
            starts: list[int] = []
            ends: list[int] = []
            for match in pattern.finditer(token):
                starts.append(match.start())
                ends.append(match.end())
            self._matches.append((starts, ends))
        self._token = (token_start, token_end)

    def covers(self, span: Span) -> bool:
        """True when some pattern match in the span's token overlaps the word"""
        if not self.patterns:
            return False
        if self._token != (span.token_start, span.token_end):
            self._load(span.token_start, span.token_end)
        word_start = span.index - span.token_start
        word_end = word_start + len(span.text)
        for starts, ends in self._matches:
            position = bisect.bisect_right(ends, word_start)
            if position < len(starts) and starts[position] < word_end:
                return True
        return False


class SpellChecker:
    def __init__(
        self,
        store: DictionaryStore,
        personal: PersonalDictionary | None = None,
        ignore_patterns: Sequence[Pattern[str]] = (),
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        case_sensitive: bool = False,
        rules: Iterable[str] = DEFAULT_RULES,
    ) -> None:
        self.store = store
        self.personal = personal if personal is not None else PersonalDictionary()
        self.ignore_patterns = tuple(ignore_patterns)
        self.max_suggestions = max_suggestions
        self.max_distance = max_distance
        self.case_sensitive = case_sensitive
        self.rules = frozenset(rules)

    @classmethod
    def from_config(
        cls,
        config: CheckConfig,
        store: DictionaryStore | None = None,
        personal: PersonalDictionary | None = None,
    ) -> SpellChecker:
        # patterns are validated before anything is loaded or any file is read
        patterns = compile_ignore_patterns(config.ignore_patterns)
        if store is None:
            store = DictionaryStore.for_language(config.language, config.data_dir)
        if personal is None:
            personal = PersonalDictionary.load(config.personal_dictionary)
        return cls(
            store,
            personal=personal,
            ignore_patterns=patterns,
            max_suggestions=config.max_suggestions,
            max_distance=config.max_distance,
            case_sensitive=config.case_sensitive,
            rules=config.enabled_rules,
        )

    @property
    def check_compound(self) -> bool:
        return COMPOUND_RULE in self.rules

    def _in_dictionaries(self, word: str) -> bool:
        return word in self.personal or self.store.contains(word)

    def is_known(self, word: str) -> bool:
        if self.case_sensitive and not has_regular_case(word):
            return False
        key = word.lower()
        for apostrophe in APOSTROPHES[1:]:
            key = key.replace(apostrophe, APOSTROPHES[0])
        if self._in_dictionaries(key):
            return True
        if key.endswith(POSSESSIVE_SUFFIX) and len(key) > len(POSSESSIVE_SUFFIX) + 1:
            return self._in_dictionaries(key[: -len(POSSESSIVE_SUFFIX)])
        return False

    def is_ignored(self, span: Span, ranges: IgnoredRanges) -> bool:
        if len(span.text) <= 1 or span.text.isnumeric():
            return True
        if any(pattern.search(span.text) for pattern in self.ignore_patterns):
            return True
        return ranges.covers(span)

    def _finding(self, span: Span, document: Document) -> Finding:
        suggestions = suggest(span.text, self.store, self.max_suggestions, self.max_distance)
        return Finding(
            word=span.text,
            start=span.start,
            end=span.end,
            line=span.line,
            column=span.column,
            suggestions=tuple(suggestions),
            context=span.context,
            excerpt=document.line_text(span.line).strip(),
        )

    def check_document(self, document: Document) -> Iterator[Finding]:
        """Findings of one document in increasing byte order"""
        ranges = IgnoredRanges(document.text, self.ignore_patterns)
        for span in document.spans():
            if not span.context.checkable or self.is_ignored(span, ranges):
                continue
            if self.is_known(span.text):
                continue
            if "-" in span.text and self.check_compound:
                for segment in _segments(span):
                    if not self.is_ignored(segment, ranges) and not self.is_known(segment.text):
                        yield self._finding(segment, document)
                continue
            yield self._finding(span, document)

    def check_bytes(self, path: str, data: bytes, file_type: FileType | None = None) -> list[Finding]:
        return list(self.check_document(Document(path, data, file_type=file_type)))

    def check_file(self, path: str) -> FileReport:
        try:
            findings = tuple(self.check_bytes(path, read_file(path)))
        except FileUnreadable as ex:
            log.warning("%s: %s", path, ex)
            return FileReport(path, error=ex)
        log.debug("%s: %d finding(s)", path, len(findings))
        return FileReport(path, findings=findings, unresolved=findings)

    def corrected_report(
        self,
        path: str,
        data: bytes,
        findings: Sequence[Finding],
        replacements: Sequence[Replacement],
        unresolved: Sequence[Finding],
    ) -> FileReport:
        """Report for a fix pass; overlapping replacements leave the file unmodified"""
        try:
            corrected = apply_replacements(data, replacements)
        except OverlappingReplacement as ex:
            log.warning("%s: %s", path, ex)
            return FileReport(path, findings=tuple(findings), error=ex, unresolved=tuple(findings))
        return FileReport(
            path,
            findings=tuple(findings),
            corrected=corrected if corrected != data else None,
            fixed=len(replacements),
            unresolved=tuple(unresolved),
        )

    def fix_file(self, path: str) -> FileReport:
        """Auto-fix: every finding takes its top suggestion, findings without one are skipped"""
        try:
            data = read_file(path)
            findings = self.check_bytes(path, data)
        except FileUnreadable as ex:
            log.warning("%s: %s", path, ex)
            return FileReport(path, error=ex)

        replacements = []
        unresolved = []
        for finding in findings:
            replacement = auto_replacement(finding)
            if replacement is None:
                unresolved.append(finding)
            else:
                replacements.append(replacement)
        return self.corrected_report(path, data, findings, replacements, unresolved)

    def _run_parallel(self, func: Callable[[str], FileReport], paths: Iterable[str], jobs: int | None) -> list[FileReport]:
        paths = list(paths)
        if not paths:
            return []
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            # map() yields in submission order whatever order the workers finish in
            return list(executor.map(func, paths))

    def check_files(self, paths: Iterable[str], jobs: int | None = None) -> list[FileReport]:
        return self._run_parallel(self.check_file, paths, jobs)

    def fix_files(self, paths: Iterable[str], jobs: int | None = None) -> list[FileReport]:
        return self._run_parallel(self.fix_file, paths, jobs)
