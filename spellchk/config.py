# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Layered configuration: defaults < global file < project file < command line"""
from __future__ import annotations

from . import envdefault
from .argx import Config, UserError
from .errors import InvalidIgnorePattern
from typing import Any, Mapping, NamedTuple, Pattern, Sequence

import logging
import os
import re

log = logging.getLogger("spellchk.config")

COMPOUND_RULE = "check-compound"
DEFAULT_RULES = (COMPOUND_RULE,)
DEFAULT_IGNORE_PATTERNS = (
    r"\b[A-Z0-9_]{2,}\b",  # ALL_CAPS
    r"https?://\S+",  # URLs
    r"\b[a-fA-F0-9]{32,}\b",  # hashes
    r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}",  # e-mail addresses
    r"\bv?\d+(?:\.\d+)+(?:[-+][0-9A-Za-z.-]+)?",  # version strings
)


class CheckConfig(NamedTuple):
    language: str = "en_US"
    personal_dictionary: str | None = None
    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    enabled_rules: tuple[str, ...] = DEFAULT_RULES
    max_suggestions: int = 5
    max_distance: int = 2
    case_sensitive: bool = False
    jobs: int | None = None
    data_dir: str = envdefault.SPELLCHK_DATA_DIR


def _coerce(key: str, value: Any, source: str) -> Any:
    def invalid(expected: str) -> UserError:
        return UserError(f"Invalid value for {key!r} in {source}: expected {expected}, got {value!r}")

    if key in {"language", "data_dir"}:
        if not isinstance(value, str) or not value:
            raise invalid("a non-empty string")
        return value
    if key == "personal_dictionary":
        if value is not None and not isinstance(value, str):
            raise invalid("a file path")
        return os.path.expanduser(value) if value else None
    if key in {"ignore_patterns", "enabled_rules"}:
        if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
            raise invalid("a list of strings")
        return tuple(value)
    if key in {"max_suggestions", "max_distance"}:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise invalid("a non-negative integer")
        return value
    if key == "jobs":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise invalid("a positive integer")
        return value
    if key == "case_sensitive":
        if not isinstance(value, bool):
            raise invalid("true or false")
        return value
    raise KeyError(key)


def merge_config(
    layers: Sequence[tuple[str, Mapping[str, Any]]],
    overrides: Mapping[str, Any] | None = None,
) -> CheckConfig:
    """Merge (source name, values) layers in increasing priority, then apply command line overrides.

    A key present in a later layer replaces the earlier value. Overrides set to None are
    not given on the command line; override ignore patterns extend the merged list.
    """
    values = CheckConfig()._asdict()
    for source, layer in layers:
        for key, value in layer.items():
            if key not in values:
                log.warning("Ignoring unknown configuration key %r in %s", key, source)
                continue
            values[key] = _coerce(key, value, source)

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        value = _coerce(key, value, "command line arguments")
        if key == "ignore_patterns":
            value = values[key] + value
        values[key] = value

    if values["personal_dictionary"] is None:
        values["personal_dictionary"] = envdefault.SPELLCHK_PERSONAL_DICT
    return CheckConfig(**values)


def load_config(
    global_path: str = envdefault.SPELLCHK_CONFIG,
    project_dir: str | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> CheckConfig:
    project_path = os.path.join(project_dir or os.getcwd(), envdefault.PROJECT_CONFIG_FILE)
    layers: list[tuple[str, Mapping[str, Any]]] = []
    if envdefault.SPELLCHK_LANGUAGE:
        layers.append(("SPELLCHK_LANGUAGE", {"language": envdefault.SPELLCHK_LANGUAGE}))
    layers.append((global_path, Config(global_path)))
    layers.append((project_path, Config(project_path)))
    return merge_config(layers, overrides)


def compile_ignore_patterns(patterns: Sequence[str]) -> list[Pattern[str]]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as ex:
            raise InvalidIgnorePattern(pattern, str(ex)) from ex
    return compiled
