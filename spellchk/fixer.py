# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from .errors import OverlappingReplacement
from typing import Iterable, NamedTuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .checker import Finding


class Replacement(NamedTuple):
    start: int  # byte range in the original buffer
    end: int
    original: str
    accepted: str

    @classmethod
    def from_finding(cls, finding: Finding, accepted: str) -> Replacement:
        return cls(start=finding.start, end=finding.end, original=finding.word, accepted=accepted)


def apply_replacements(data: bytes, replacements: Iterable[Replacement]) -> bytes:
    """Splice accepted corrections into the original bytes.

    Replacements are applied from the highest offset down: an edit never moves the bytes
    in front of it, so every remaining range is still valid in the original coordinates.
    """
    ordered = sorted(replacements, key=lambda item: (item.start, item.end))
    if not ordered:
        return data

    for replacement in ordered:
        if not 0 <= replacement.start <= replacement.end <= len(data):
            raise ValueError(
                f"Replacement range [{replacement.start}, {replacement.end}) outside of {len(data)} byte buffer"
            )
    for first, second in zip(ordered, ordered[1:]):
        if second.start < first.end:
            raise OverlappingReplacement((first.start, first.end), (second.start, second.end))

    result = bytearray(data)
    for replacement in reversed(ordered):
        result[replacement.start : replacement.end] = replacement.accepted.encode("utf-8")
    return bytes(result)
