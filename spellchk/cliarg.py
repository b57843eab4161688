# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from .argx import arg

import argparse


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"invalid integer {value!r}") from ex
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"invalid integer {value!r}") from ex
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {number}")
    return number


arg.files = arg("files", nargs="+", metavar="FILE", help="Files to check")
arg.language = arg("-l", "--language", help="Dictionary language, e.g. en_US (default: from configuration)")
arg.format = arg(
    "-o",
    "--format",
    choices=["text", "json"],
    default="text",
    help="Output format",
)
arg.ignore_pattern = arg(
    "--ignore-pattern",
    action="append",
    dest="ignore_patterns",
    metavar="REGEX",
    help="Never report words matching the regular expression, can be repeated",
)
arg.personal_dict = arg("--personal-dict", metavar="PATH", help="Personal dictionary file")
arg.max_suggestions = arg(
    "--max-suggestions",
    type=non_negative_int,
    metavar="N",
    help="Maximum number of suggestions per misspelling",
)
arg.max_distance = arg(
    "--max-distance",
    type=non_negative_int,
    metavar="N",
    help="Maximum edit distance of suggestions",
)
arg.case_sensitive = arg(
    "--case-sensitive",
    action="store_const",
    const=True,
    default=None,
    help="Report words with irregular casing even when the dictionary knows them",
)
arg.no_compound = arg(
    "--no-compound",
    action="store_true",
    help="Check hyphenated words only as a whole, not part by part",
)
arg.jobs = arg("-j", "--jobs", type=positive_int, metavar="N", help="Number of files checked in parallel")
arg.no_fail = arg("--no-fail", action="store_true", help="Exit with status 0 even when misspellings are found")
arg.interactive = arg("-i", "--interactive", action="store_true", help="Ask what to do about each misspelling")
arg.json = arg("--json", help="Raw json output", action="store_true", default=False)
arg.language_name = arg("language_name", metavar="LANGUAGE", help="Dictionary language, e.g. en_US")
arg.prefix = arg("--prefix", help="Only list words starting with the prefix")
arg.length = arg("--length", type=positive_int, metavar="N", help="Only list words of N characters")
