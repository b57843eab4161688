# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from . import argx, output
from .base_cli import SpellchkBaseCLI
from .checker import FileReport, summarize, write_corrections
from .cliarg import arg
from .errors import FileUnwritable
from .interactive import InteractiveSession
from typing import Callable, Sequence, TypeVar

F = TypeVar("F", bound=Callable)


def check_options(func: F) -> F:
    """Options shared by the check and fix commands"""
    for option in (
        arg.files,
        arg.language,
        arg.format,
        arg.ignore_pattern,
        arg.personal_dict,
        arg.max_suggestions,
        arg.max_distance,
        arg.case_sensitive,
        arg.no_compound,
        arg.jobs,
        arg.no_fail,
    ):
        func = option(func)
    return func


class SpellchkCheckCLI(SpellchkBaseCLI):
    def render(self, reports: Sequence[FileReport], fix: bool = False) -> None:
        # after a fix run only the findings left in the files are reported
        if fix:
            pending = [report._replace(findings=report.unresolved) for report in reports]
        else:
            pending = list(reports)
        if self.args.format == "json":
            self.print_response(output.json_document(pending), json=True)
            return

        rows = output.finding_rows(pending)
        if rows:
            self.print_response(rows, json=False, table_layout=output.TABLE_LAYOUT)
            print()
        failures = output.failure_rows(reports)
        if failures:
            self.print_response(failures, json=False, table_layout=output.FAILURE_LAYOUT)
            print()
        print(output.summary_line(reports, fix=fix))

    def _write(self, report: FileReport) -> FileReport:
        try:
            write_corrections(report)
        except FileUnwritable as ex:
            self.log.warning("%s: %s", report.path, ex)
            return report._replace(error=ex, corrected=None, fixed=0, unresolved=report.findings)
        return report

    @check_options
    def check(self) -> int:
        """Check files for misspellings"""
        config = self.resolve_config()
        checker = self.create_checker(config)
        reports = checker.check_files(self.args.files, jobs=config.jobs)
        self.render(reports)
        return self.exit_code(summarize(reports))

    @check_options
    @arg.interactive
    def fix(self) -> int:
        """Correct misspellings in place, using the best suggestion or asking for each one"""
        config = self.resolve_config()
        if self.args.interactive and self.args.format == "json":
            raise argx.UserError("--interactive cannot be combined with JSON output")
        checker = self.create_checker(config)
        if self.args.interactive:
            if config.jobs not in (None, 1):
                self.log.info("Interactive mode fixes files one at a time, ignoring jobs=%s", config.jobs)
            reports = InteractiveSession(checker).run(self.args.files, on_report=self._write)
        else:
            reports = [self._write(report) for report in checker.fix_files(self.args.files, jobs=config.jobs)]
        self.render(reports, fix=True)
        return self.exit_code(summarize(reports), fix=True)
