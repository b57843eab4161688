# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Ranked spelling suggestions within a bounded Levenshtein distance"""
from __future__ import annotations

from .dictionary import DictionaryStore, prefix_range
from typing import Iterator, NamedTuple, Sequence

import os

DEFAULT_MAX_SUGGESTIONS = 5
DEFAULT_MAX_DISTANCE = 2


class Suggestion(NamedTuple):
    word: str
    distance: int


def edit_distance(a: str, b: str, cutoff: int | None = None) -> int:
    """Levenshtein distance (insert, delete, substitute; no transposition).

    With a cutoff the computation stops as soon as the distance is known to exceed it
    and `cutoff + 1` is returned.
    """
    if a == b:
        return 0
    if cutoff is not None and abs(len(a) - len(b)) > cutoff:
        return cutoff + 1
    if not a or not b:
        return len(a) or len(b)

    previous = list(range(len(b) + 1))
    for i, char in enumerate(a, 1):
        current = _next_row(previous, char, b)
        if cutoff is not None and min(current) > cutoff:
            return cutoff + 1
        previous = current

    distance = previous[-1]
    if cutoff is not None and distance > cutoff:
        return cutoff + 1
    return distance


def _next_row(row: Sequence[int], char: str, word: str) -> list[int]:
    current = [row[0] + 1]
    for j, other in enumerate(word, 1):
        current.append(min(row[j] + 1, current[j - 1] + 1, row[j - 1] + (other != char)))
    return current


def _walk_bucket(word: str, bucket: Sequence[str], cutoff: int) -> Iterator[tuple[str, int]]:
    """Yield (candidate, distance) for every word of the sorted bucket within `cutoff` of `word`.

    Consecutive sorted words share prefixes, so the DP rows of the shared prefix are kept
    and only the differing tail is computed. When a prefix row already exceeds the cutoff
    the whole range of words starting with that prefix is skipped.
    """
    rows = [list(range(len(word) + 1))]
    previous = ""
    index = 0
    while index < len(bucket):
        candidate = bucket[index]
        shared = min(len(os.path.commonprefix([previous, candidate])), len(rows) - 1)
        del rows[shared + 1 :]

        pruned = False
        for char in candidate[shared:]:
            row = _next_row(rows[-1], char, word)
            rows.append(row)
            if min(row) > cutoff:
                pruned = True
                break

        previous = candidate[: len(rows) - 1]
        if pruned:
            _, index = prefix_range(previous, bucket, index)
            continue

        distance = rows[-1][-1]
        if distance <= cutoff:
            yield candidate, distance
        index += 1


def match_case(template: str, word: str) -> str:
    """Render `word` in the casing pattern of `template` (ALL CAPS, Capitalized or lowercase)"""
    letters = [char for char in template if char.isalpha()]
    if not letters:
        return word
    if len(letters) > 1 and all(char.isupper() for char in letters):
        return word.upper()
    if letters[0].isupper():
        return word[:1].upper() + word[1:]
    return word


def has_regular_case(word: str) -> bool:
    """True for lowercase, Capitalized and ALL CAPS words"""
    letters = [char for char in word if char.isalpha()]
    if not letters:
        return True
    rest = letters[1:]
    return (
        all(char.islower() for char in letters)
        or all(char.isupper() for char in letters)
        or (letters[0].isupper() and all(char.islower() for char in rest))
    )


def suggest(
    word: str,
    store: DictionaryStore,
    max_count: int = DEFAULT_MAX_SUGGESTIONS,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> list[Suggestion]:
    """Dictionary words within `max_distance` edits of `word`, best first.

    Ranked by distance, then frequency (most common first), then alphabetically, capped
    at `max_count` and case-matched to `word`. No candidate within reach gives an empty
    list.
    """
    if not word or max_count <= 0 or max_distance < 0:
        return []

    target = word.lower()
    found: list[tuple[str, int]] = []
    for length in range(max(1, len(target) - max_distance), len(target) + max_distance + 1):
        found.extend(_walk_bucket(target, store.bucket(length), max_distance))

    found.sort(key=lambda item: (item[1], -store.frequency(item[0]), item[0]))
    return [Suggestion(match_case(word, candidate), distance) for candidate, distance in found[:max_count]]
