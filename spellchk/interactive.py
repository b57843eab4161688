# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Interactive fix mode

Every finding starts out pending and is resolved by the user to one of skipped,
fixed (with a chosen or typed replacement), added to the personal dictionary, or
quit. Quitting stops the whole run, but replacements already chosen for the current
file are still applied.
"""
from __future__ import annotations

from ._typing import assert_never
from .checker import FileReport, Finding, read_file, SpellChecker
from .errors import FileUnreadable
from .fixer import Replacement
from enum import Enum
from typing import Callable, Iterable, NamedTuple, TextIO

import logging
import sys

log = logging.getLogger("spellchk.interactive")

MAX_CHOICES = 9


class Outcome(Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    FIXED = "fixed"
    ADDED = "added"
    QUIT = "quit"


class Resolution(NamedTuple):
    outcome: Outcome
    replacement: str | None = None


PENDING = Resolution(Outcome.PENDING)
SKIP = Resolution(Outcome.SKIPPED)
ADD = Resolution(Outcome.ADDED)
QUIT = Resolution(Outcome.QUIT)


def parse_choice(answer: str, finding: Finding) -> Resolution:
    """Resolution for a prompt answer; PENDING when the answer is not a valid choice"""
    answer = answer.strip().lower()
    if answer == "s":
        return SKIP
    if answer == "a":
        return ADD
    if answer == "q":
        return QUIT
    if answer.isdigit():
        index = int(answer) - 1
        if 0 <= index < min(len(finding.suggestions), MAX_CHOICES):
            return Resolution(Outcome.FIXED, finding.suggestions[index].word)
    return PENDING


class InteractiveSession:
    def __init__(
        self,
        checker: SpellChecker,
        prompt: Callable[[str], str] = input,
        output: TextIO | None = None,
    ) -> None:
        self.checker = checker
        self.prompt = prompt
        self.output = output or sys.stdout
        self.quit = False

    def _show(self, path: str, finding: Finding) -> None:
        print(f"\nMisspelling found: {path}:{finding.line}:{finding.column}: {finding.word}", file=self.output)
        print(f"  {finding.excerpt}", file=self.output)
        options = ["[s] Skip"]
        options.extend(
            f"[{number}] {suggestion.word}"
            for number, suggestion in enumerate(finding.suggestions[:MAX_CHOICES], 1)
        )
        options.extend(["[e] Edit", "[a] Add to dictionary", "[q] Quit"])
        for option in options:
            print(f"  {option}", file=self.output)

    def ask(self, path: str, finding: Finding) -> Resolution:
        """Prompt until the finding is resolved; end of input quits"""
        self._show(path, finding)
        while True:
            try:
                answer = self.prompt("Choice: ")
                resolution = parse_choice(answer, finding)
                if answer.strip().lower() == "e":
                    replacement = self.prompt("Replace with: ").strip()
                    if replacement:
                        resolution = Resolution(Outcome.FIXED, replacement)
            except EOFError:
                return QUIT
            if resolution.outcome is not Outcome.PENDING:
                return resolution
            print(f"  Invalid choice {answer.strip()!r}", file=self.output)

    def fix_file(self, path: str) -> FileReport:
        try:
            data = read_file(path)
            findings = self.checker.check_bytes(path, data)
        except FileUnreadable as ex:
            log.warning("%s: %s", path, ex)
            return FileReport(path, error=ex)

        reported: list[Finding] = []
        replacements: list[Replacement] = []
        unresolved: list[Finding] = []
        for position, finding in enumerate(findings):
            if finding.word in self.checker.personal:
                # added earlier in this run
                continue
            resolution = self.ask(path, finding)
            if resolution.outcome is Outcome.SKIPPED:
                reported.append(finding)
                unresolved.append(finding)
            elif resolution.outcome is Outcome.FIXED:
                assert resolution.replacement is not None
                reported.append(finding)
                if resolution.replacement != finding.word:
                    replacements.append(Replacement.from_finding(finding, resolution.replacement))
            elif resolution.outcome is Outcome.ADDED:
                self.checker.personal.add(finding.word)
            elif resolution.outcome is Outcome.QUIT:
                self.quit = True
                remaining = [item for item in findings[position:] if item.word not in self.checker.personal]
                reported.extend(remaining)
                unresolved.extend(remaining)
                break
            elif resolution.outcome is Outcome.PENDING:
                raise AssertionError(f"finding {finding.word!r} left pending")
            else:
                assert_never(resolution.outcome)

        return self.checker.corrected_report(path, data, reported, replacements, unresolved)

    def run(
        self,
        paths: Iterable[str],
        on_report: Callable[[FileReport], FileReport] | None = None,
    ) -> list[FileReport]:
        """Fix files one at a time.

        `on_report` gets each report as soon as its file is done and returns the report
        to keep. Words added to the personal dictionary are appended to its file when the
        run ends, including when it ends by quitting or by an exception.
        """
        reports = []
        with self.checker.personal.appending():
            for path in paths:
                report = self.fix_file(path)
                if on_report is not None:
                    report = on_report(report)
                reports.append(report)
                if self.quit:
                    log.info("Quit requested, stopping")
                    break
        return reports
