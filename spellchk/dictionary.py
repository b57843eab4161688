# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Word membership store and personal dictionary

The main dictionary is an immutable sorted tuple of lower-case words. Binary search
gives membership tests and ordered enumeration of any prefix range, and a per-length
index of sorted buckets lets the suggestion engine walk only the words whose length
is close to the misspelled one.
"""
from __future__ import annotations

from .errors import DictionaryCorrupt, DictionaryNotFound, FileUnreadable
from contextlib import contextmanager
from typing import Final, Iterable, Iterator, Mapping, Sequence

import bisect
import errno
import logging
import mmap
import os

FORMAT_MAGIC: Final = "SPELLCHK-DICT"
FORMAT_VERSION: Final = 1
DICT_SUFFIX: Final = ".dict"
# Sorts after every character a dictionary word can contain
PREFIX_END: Final = "\U0010ffff"

log = logging.getLogger("spellchk.dictionary")


def dictionary_path(language: str, data_dir: str) -> str:
    return os.path.join(data_dir, language + DICT_SUFFIX)


def prefix_range(prefix: str, words: Sequence[str], lo: int = 0) -> tuple[int, int]:
    """Index range [lo, hi) of the words in sorted `words` starting with `prefix`, searching from `lo`"""
    lo = bisect.bisect_left(words, prefix, lo)
    hi = bisect.bisect_right(words, prefix + PREFIX_END, lo)
    return lo, hi


class DictionaryStore:
    def __init__(self, words: Sequence[str], frequencies: Mapping[str, int] | None = None) -> None:
        previous = None
        buckets: dict[int, list[str]] = {}
        for word in words:
            if not word or word != word.lower():
                raise DictionaryCorrupt("<memory>", f"word {word!r} is not a normalized lower-case word")
            if previous is not None and word <= previous:
                raise DictionaryCorrupt("<memory>", f"words not sorted and unique at {word!r}")
            buckets.setdefault(len(word), []).append(word)
            previous = word

        self._words: tuple[str, ...] = tuple(words)
        self._buckets: dict[int, tuple[str, ...]] = {length: tuple(bucket) for length, bucket in buckets.items()}
        self._frequencies: dict[str, int] = {}
        if frequencies:
            self._frequencies = {word: count for word, count in frequencies.items() if count and self.contains(word)}

    @classmethod
    def from_words(cls, words: Iterable[str], frequencies: Mapping[str, int] | None = None) -> DictionaryStore:
        """Build a store from an arbitrary word list: normalize, sort and deduplicate first"""
        normalized = sorted({word.strip().lower() for word in words} - {""})
        if frequencies:
            merged: dict[str, int] = {}
            for word, count in frequencies.items():
                key = word.strip().lower()
                merged[key] = max(merged.get(key, 0), count)
            frequencies = merged
        return cls(normalized, frequencies)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def contains(self, word: str) -> bool:
        word = word.lower()
        index = bisect.bisect_left(self._words, word)
        return index < len(self._words) and self._words[index] == word

    def frequency(self, word: str) -> int:
        return self._frequencies.get(word.lower(), 0)

    def bucket(self, length: int) -> Sequence[str]:
        """All words of exactly `length` characters, sorted"""
        return self._buckets.get(length, ())

    @property
    def lengths(self) -> list[int]:
        return sorted(self._buckets)

    def candidates_with_prefix(self, prefix: str) -> Iterator[str]:
        prefix = prefix.lower()
        lo, hi = prefix_range(prefix, self._words)
        return (self._words[index] for index in range(lo, hi))

    def candidates_of_length(self, length: int, k: int = 0) -> Iterator[str]:
        for bucket_length in range(max(1, length - k), length + k + 1):
            yield from self.bucket(bucket_length)

    def save(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as fp:
            fp.write(f"{FORMAT_MAGIC}\t{FORMAT_VERSION}\t{len(self._words)}\n")
            for word in self._words:
                fp.write(f"{word}\t{self._frequencies.get(word, 0)}\n")
        log.debug("Wrote %d words to %s", len(self._words), path)

    @classmethod
    def load(cls, path: str, language: str | None = None) -> DictionaryStore:
        try:
            fp = open(path, "rb")
        except OSError as ex:
            if ex.errno == errno.ENOENT:
                raise DictionaryNotFound(language or os.path.basename(path), path) from ex
            raise DictionaryCorrupt(path, f"{ex.__class__.__name__}: {ex}") from ex

        with fp:
            if os.fstat(fp.fileno()).st_size == 0:
                raise DictionaryCorrupt(path, "empty file")
            with mmap.mmap(fp.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
                words, frequencies = cls._parse(path, mapped)

        try:
            store = cls(words, frequencies)
        except DictionaryCorrupt as ex:
            raise DictionaryCorrupt(path, ex.reason) from ex
        log.debug("Loaded %d words from %s", len(store), path)
        return store

    @staticmethod
    def _parse(path: str, mapped: mmap.mmap) -> tuple[list[str], dict[str, int]]:
        try:
            header = mapped.readline().decode("utf-8").rstrip("\n").split("\t")
        except UnicodeDecodeError as ex:
            raise DictionaryCorrupt(path, "header is not valid UTF-8") from ex
        if len(header) != 3 or header[0] != FORMAT_MAGIC:
            raise DictionaryCorrupt(path, "not a spellchk dictionary")
        if header[1] != str(FORMAT_VERSION):
            raise DictionaryCorrupt(path, f"unsupported format version {header[1]!r}, expected {FORMAT_VERSION}")
        try:
            expected_count = int(header[2])
        except ValueError as ex:
            raise DictionaryCorrupt(path, f"invalid word count {header[2]!r}") from ex

        words: list[str] = []
        frequencies: dict[str, int] = {}
        line_number = 1
        for raw_line in iter(mapped.readline, b""):
            line_number += 1
            try:
                fields = raw_line.decode("utf-8").rstrip("\n").split("\t")
            except UnicodeDecodeError as ex:
                raise DictionaryCorrupt(path, f"line {line_number} is not valid UTF-8") from ex
            if len(fields) != 2 or not fields[0]:
                raise DictionaryCorrupt(path, f"malformed entry on line {line_number}")
            word, count = fields
            if not count.isdigit():
                raise DictionaryCorrupt(path, f"invalid frequency {count!r} on line {line_number}")
            words.append(word)
            if count != "0":
                frequencies[word] = int(count)

        if len(words) != expected_count:
            raise DictionaryCorrupt(path, f"expected {expected_count} words, found {len(words)}")
        return words, frequencies

    @classmethod
    def for_language(cls, language: str, data_dir: str) -> DictionaryStore:
        return cls.load(dictionary_path(language, data_dir), language=language)


class PersonalDictionary:
    """User-maintained words, unioned with the main dictionary at lookup time"""

    def __init__(self, path: str | None = None, words: Iterable[str] = ()) -> None:
        self.path = path
        self._words: set[str] = {word.lower() for word in words}
        self._pending: list[str] = []

    @classmethod
    def load(cls, path: str | None) -> PersonalDictionary:
        if not path:
            return cls()
        try:
            with open(path, encoding="utf-8") as fp:
                lines = fp.read().splitlines()
        except OSError as ex:
            if ex.errno == errno.ENOENT:
                return cls(path)
            raise FileUnreadable(path, f"{ex.__class__.__name__}: {ex}") from ex
        except UnicodeDecodeError as ex:
            raise FileUnreadable(path, "personal dictionary is not valid UTF-8") from ex

        words = (line.strip() for line in lines)
        return cls(path, (word for word in words if word and not word.startswith("#")))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._words

    def __len__(self) -> int:
        return len(self._words)

    @property
    def words(self) -> list[str]:
        return sorted(self._words)

    def add(self, word: str) -> bool:
        word = word.strip().lower()
        if not word or word in self._words:
            return False
        self._words.add(word)
        self._pending.append(word)
        return True

    def flush(self) -> None:
        if not self._pending or not self.path:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "a+b") as fp:
            # appends must not glue the first new word onto an unterminated last line
            if fp.seek(0, os.SEEK_END) > 0:
                fp.seek(-1, os.SEEK_END)
                if fp.read(1) != b"\n":
                    fp.write(b"\n")
            fp.write("".join(word + "\n" for word in self._pending).encode("utf-8"))
        log.info("Added %d word(s) to personal dictionary %s", len(self._pending), self.path)
        self._pending.clear()

    @contextmanager
    def appending(self) -> Iterator[PersonalDictionary]:
        """Words added inside the block are appended to the file on exit, however the block ends"""
        try:
            yield self
        finally:
            self.flush()
