# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Comments and string literals of source files

Only text inside comments and string literals is checked: identifiers, keywords and
everything else in the code is skipped. A per-language syntax table tells the scanner
which delimiters open and close each region.
"""
from __future__ import annotations

from .common import Context, SourceText, Span
from enum import Enum
from typing import Iterator, NamedTuple, Pattern

import functools
import os
import re

# Rust char literal: 'a', '\n', '\u{1F600}'; anything else starting with ' is a lifetime
CHAR_LITERAL_RE = re.compile(r"'(?:\\(?:u\{[0-9a-fA-F]{1,6}\}|x[0-9a-fA-F]{2}|.)|[^\\'\n])'")


class Syntax(NamedTuple):
    line_comments: tuple[str, ...] = ()
    block_comments: tuple[tuple[str, str], ...] = ()
    strings: tuple[str, ...] = ()
    multiline_strings: tuple[str, ...] = ()
    char_literals: bool = False


C_STYLE = Syntax(line_comments=("//",), block_comments=(("/*", "*/"),), strings=('"', "'"))
JS_STYLE = C_STYLE._replace(multiline_strings=("`",))
RUST_STYLE = Syntax(line_comments=("//",), block_comments=(("/*", "*/"),), strings=('"',), char_literals=True)
PYTHON_STYLE = Syntax(line_comments=("#",), strings=('"', "'"), multiline_strings=('"""', "'''"))
HASH_STYLE = Syntax(line_comments=("#",), strings=('"', "'"))
SQL_STYLE = Syntax(line_comments=("--",), block_comments=(("/*", "*/"),), strings=("'", '"'))
LUA_STYLE = Syntax(line_comments=("--",), block_comments=(("--[[", "]]"),), strings=('"', "'"))
CSS_STYLE = Syntax(block_comments=(("/*", "*/"),), strings=('"', "'"))


class SourceLang(Enum):
    RUST = "rust"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JSX = "jsx"
    TSX = "tsx"
    PYTHON = "python"
    GO = "go"
    JAVA = "java"
    C = "c"
    CPP = "cpp"
    CSHARP = "csharp"
    KOTLIN = "kotlin"
    SWIFT = "swift"
    RUBY = "ruby"
    SHELL = "shell"
    YAML = "yaml"
    TOML = "toml"
    SQL = "sql"
    LUA = "lua"
    CSS = "css"
    OTHER = "other"

    @classmethod
    def from_path(cls, path: str) -> SourceLang | None:
        _, ext = os.path.splitext(path)
        return EXTENSIONS.get(ext.lower().lstrip("."))

    @property
    def syntax(self) -> Syntax:
        return SYNTAX.get(self, C_STYLE)


EXTENSIONS = {
    "rs": SourceLang.RUST,
    "js": SourceLang.JAVASCRIPT,
    "mjs": SourceLang.JAVASCRIPT,
    "cjs": SourceLang.JAVASCRIPT,
    "ts": SourceLang.TYPESCRIPT,
    "mts": SourceLang.TYPESCRIPT,
    "cts": SourceLang.TYPESCRIPT,
    "jsx": SourceLang.JSX,
    "tsx": SourceLang.TSX,
    "py": SourceLang.PYTHON,
    "pyw": SourceLang.PYTHON,
    "pyi": SourceLang.PYTHON,
    "go": SourceLang.GO,
    "java": SourceLang.JAVA,
    "c": SourceLang.C,
    "h": SourceLang.C,
    "cpp": SourceLang.CPP,
    "cc": SourceLang.CPP,
    "cxx": SourceLang.CPP,
    "hpp": SourceLang.CPP,
    "hh": SourceLang.CPP,
    "cs": SourceLang.CSHARP,
    "kt": SourceLang.KOTLIN,
    "kts": SourceLang.KOTLIN,
    "swift": SourceLang.SWIFT,
    "rb": SourceLang.RUBY,
    "sh": SourceLang.SHELL,
    "bash": SourceLang.SHELL,
    "zsh": SourceLang.SHELL,
    "yml": SourceLang.YAML,
    "yaml": SourceLang.YAML,
    "toml": SourceLang.TOML,
    "sql": SourceLang.SQL,
    "lua": SourceLang.LUA,
    "css": SourceLang.CSS,
    "scss": SourceLang.CSS,
}

SYNTAX = {
    SourceLang.RUST: RUST_STYLE,
    SourceLang.JAVASCRIPT: JS_STYLE,
    SourceLang.TYPESCRIPT: JS_STYLE,
    SourceLang.JSX: JS_STYLE,
    SourceLang.TSX: JS_STYLE,
    SourceLang.GO: JS_STYLE,  # `raw strings`
    SourceLang.PYTHON: PYTHON_STYLE,
    SourceLang.RUBY: HASH_STYLE,
    SourceLang.SHELL: HASH_STYLE,
    SourceLang.YAML: HASH_STYLE,
    SourceLang.TOML: HASH_STYLE,
    SourceLang.SQL: SQL_STYLE,
    SourceLang.LUA: LUA_STYLE,
    SourceLang.CSS: CSS_STYLE,
}


@functools.lru_cache(maxsize=None)
def _opener_re(syntax: Syntax) -> Pattern[str]:
    openers = [opening for opening, _ in syntax.block_comments]
    openers.extend(syntax.line_comments)
    openers.extend(syntax.multiline_strings)
    openers.extend(syntax.strings)
    if syntax.char_literals:
        openers.append("'")
    # longest first so that '"""' wins over '"' and '--[[' over '--'
    return re.compile("|".join(re.escape(opener) for opener in sorted(set(openers), key=len, reverse=True)))


def _string_end(text: str, start: int, delimiter: str, multiline: bool) -> tuple[int, int, set[int]]:
    """Find the end of a string literal whose content begins at `start`.

    Returns (content_end, resume_index, escaped_indexes). Single-line strings that are not
    closed end at the line break.
    """
    escapes: set[int] = set()
    index = start
    while index < len(text):
        char = text[index]
        if char == "\\":
            escapes.add(index + 1)
            index += 2
            continue
        if char == "\n" and not multiline:
            return index, index, escapes
        if text.startswith(delimiter, index):
            return index, index + len(delimiter), escapes
        index += 1
    return len(text), len(text), escapes


def tokenize(source: SourceText, lang: SourceLang = SourceLang.OTHER) -> Iterator[Span]:
    syntax = lang.syntax
    opener_re = _opener_re(syntax)
    block_closers = dict(syntax.block_comments)
    text = source.text
    index = 0
    while True:
        match = opener_re.search(text, index)
        if match is None:
            return
        opener = match.group()
        content_start = match.end()

        if opener in block_closers:
            closer = block_closers[opener]
            content_end = text.find(closer, content_start)
            if content_end < 0:
                content_end = len(text)
            index = content_end + len(closer)
            yield from source.words(content_start, content_end, Context.COMMENT, split_identifiers=True)
        elif opener in syntax.line_comments:
            content_end = text.find("\n", content_start)
            if content_end < 0:
                content_end = len(text)
            index = content_end
            yield from source.words(content_start, content_end, Context.COMMENT, split_identifiers=True)
        elif opener == "'" and syntax.char_literals:
            literal = CHAR_LITERAL_RE.match(text, match.start())
            index = literal.end() if literal else content_start
        else:
            multiline = opener in syntax.multiline_strings
            content_end, index, escapes = _string_end(text, content_start, opener, multiline)
            yield from source.words(
                content_start, content_end, Context.STRING_LITERAL, split_identifiers=True, escapes=escapes
            )
