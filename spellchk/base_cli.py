# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from . import argx, envdefault
from ._typing import assert_never
from .checker import RunOutcome, SpellChecker
from .config import CheckConfig, COMPOUND_RULE, load_config
from .dictionaries import WordListClient
from argparse import ArgumentParser, Namespace
from typing import Any, Callable, Protocol

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_FATAL = argx.EXIT_FATAL


def config_overrides(args: Namespace) -> dict[str, Any]:
    """Configuration values given on the command line; options not given are None"""
    return {
        "language": getattr(args, "language", None),
        "personal_dictionary": getattr(args, "personal_dict", None),
        "ignore_patterns": getattr(args, "ignore_patterns", None),
        "max_suggestions": getattr(args, "max_suggestions", None),
        "max_distance": getattr(args, "max_distance", None),
        "case_sensitive": getattr(args, "case_sensitive", None),
        "jobs": getattr(args, "jobs", None),
        "data_dir": getattr(args, "data_dir", None),
    }


class ClientFactory(Protocol):
    def __call__(self, base_url: str | None, show_http: bool, request_timeout: float | None) -> WordListClient:
        ...


class CheckerFactory(Protocol):
    def __call__(self, config: CheckConfig) -> SpellChecker:
        ...


class SpellchkBaseCLI(argx.CommandLineTool):
    client: WordListClient

    def __init__(
        self,
        client_factory: ClientFactory = WordListClient,
        checker_factory: CheckerFactory = SpellChecker.from_config,
    ) -> None:
        argx.CommandLineTool.__init__(self, "spellchk")
        self.client_factory = client_factory
        self.checker_factory = checker_factory

    def add_args(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--data-dir",
            help="Directory of installed dictionaries [SPELLCHK_DATA_DIR], default {!r}".format(
                envdefault.SPELLCHK_DATA_DIR
            ),
            default=None,
            metavar="DIR",
        )
        parser.add_argument("--show-http", help="Show HTTP requests and responses", action="store_true")
        parser.add_argument(
            "--wordlist-url",
            help="Base url of downloadable word lists [SPELLCHK_WORDLIST_URL]",
            default=None,
        )
        parser.add_argument(
            "--request-timeout",
            type=float,
            default=None,
            help="Wait for up to N seconds for a response to a request (default: infinite)",
        )

    def pre_run(self, func: Callable[[], int | None]) -> None:
        self.client = self.client_factory(
            base_url=self.args.wordlist_url,
            show_http=self.args.show_http,
            request_timeout=self.args.request_timeout,
        )

    def resolve_config(self) -> CheckConfig:
        """Defaults, global and project configuration files, then the command line"""
        config = load_config(global_path=self.args.config, overrides=config_overrides(self.args))
        if getattr(self.args, "no_compound", False):
            config = config._replace(enabled_rules=tuple(rule for rule in config.enabled_rules if rule != COMPOUND_RULE))
        self.log.debug("using configuration %r", config)
        return config

    def create_checker(self, config: CheckConfig) -> SpellChecker:
        return self.checker_factory(config)

    def exit_code(self, outcome: RunOutcome, fix: bool = False) -> int:
        if outcome is RunOutcome.CLEAN:
            return EXIT_CLEAN
        elif outcome is RunOutcome.FINDINGS:
            return EXIT_CLEAN if fix or getattr(self.args, "no_fail", False) else EXIT_FINDINGS
        elif outcome is RunOutcome.FATAL:
            return EXIT_FATAL
        else:
            assert_never(outcome)
