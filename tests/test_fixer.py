# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from spellchk.checker import Finding
from spellchk.errors import OverlappingReplacement
from spellchk.fixer import apply_replacements, Replacement
from spellchk.parser import Context
from spellchk.speller import Suggestion

import pytest


def test_no_replacements_returns_input_unchanged() -> None:
    data = "Ünïcode, tabs\tand\r\nnewlines\n".encode("utf-8")
    assert apply_replacements(data, []) is data


def test_replacements_use_original_offsets() -> None:
    data = b"teh quick brwn fox"
    replacements = [
        Replacement(10, 14, "brwn", "brown"),
        Replacement(0, 3, "teh", "the"),
    ]
    assert apply_replacements(data, replacements) == b"the quick brown fox"


def test_replacement_changing_byte_length() -> None:
    data = "naive cafe and cafe".encode("utf-8")
    replacements = [
        Replacement(0, 5, "naive", "naïve"),
        Replacement(6, 10, "cafe", "café"),
        Replacement(15, 19, "cafe", "café"),
    ]
    assert apply_replacements(data, replacements) == "naïve café and café".encode("utf-8")


def test_adjacent_ranges_do_not_overlap() -> None:
    assert apply_replacements(b"abcdef", [Replacement(0, 3, "abc", "x"), Replacement(3, 6, "def", "y")]) == b"xy"


@pytest.mark.parametrize(
    "first,second",
    [
        ((0, 5), (3, 8)),
        ((2, 4), (0, 10)),
        ((4, 6), (4, 6)),
    ],
)
def test_overlapping_replacements_fail(first: tuple[int, int], second: tuple[int, int]) -> None:
    data = bytearray(b"0123456789")
    replacements = [Replacement(*first, "x", "y"), Replacement(*second, "x", "y")]
    with pytest.raises(OverlappingReplacement) as excinfo:
        apply_replacements(bytes(data), replacements)
    assert {excinfo.value.first, excinfo.value.second} == {first, second}
    assert data == bytearray(b"0123456789")


@pytest.mark.parametrize("start,end", [(-1, 2), (5, 3), (8, 11)])
def test_replacement_out_of_range(start: int, end: int) -> None:
    with pytest.raises(ValueError):
        apply_replacements(b"0123456789", [Replacement(start, end, "x", "y")])


def test_replacement_from_finding() -> None:
    finding = Finding(
        word="wrold",
        start=6,
        end=11,
        line=1,
        column=7,
        suggestions=(Suggestion("world", 2),),
        context=Context.PLAIN_TEXT,
        excerpt="hello wrold",
    )
    replacement = Replacement.from_finding(finding, "world")
    assert replacement == Replacement(6, 11, "wrold", "world")
    assert apply_replacements(b"hello wrold", [replacement]) == b"hello world"
