# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from .common import Context, SourceText, Span
from typing import Iterator


def tokenize(source: SourceText) -> Iterator[Span]:
    """Every word of the file; snake_case, camelCase and PascalCase identifiers are split into sub-words"""
    return source.words(0, len(source.text), Context.PLAIN_TEXT, split_identifiers=True)
