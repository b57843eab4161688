# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Installing, building and inspecting dictionaries"""
from __future__ import annotations

from . import envdefault
from .argx import UserError
from .dictionary import DICT_SUFFIX, dictionary_path, DictionaryStore, FORMAT_VERSION
from .errors import DictionaryNotFound, DownloadError, FileUnreadable
from .session import get_requests_session
from requests import Response
from typing import Final, Iterable, Iterator, NamedTuple

import datetime
import errno
import logging
import os
import requests
import time

WORDLIST_BASE_URL: Final = "https://raw.githubusercontent.com/dwyl/english-words/6e4bc58ad764c3e6df8b5be4048671962c9d6a23"
WORDLIST_VERSION: Final = "2023.12"
WORDLISTS: Final = {
    "en_US": "words_alpha.txt",
    "en_GB": "words_alpha.txt",
}

log = logging.getLogger("spellchk.dictionaries")


class RetrySpec(NamedTuple):
    attempts: int = 3
    sleep: datetime.timedelta = datetime.timedelta(milliseconds=200)


class DictionaryInfo(NamedTuple):
    language: str
    path: str
    size_bytes: int
    word_count: int
    format_version: int
    wordlist_version: str = WORDLIST_VERSION


class WordListClient:
    """Fetches plain text word lists over HTTP"""

    NO_RETRY: Final = RetrySpec(attempts=1)
    DEFAULT_RETRY: Final = RetrySpec()

    def __init__(
        self,
        base_url: str | None = None,
        show_http: bool = False,
        request_timeout: float | None = None,
        retry: RetrySpec = DEFAULT_RETRY,
    ) -> None:
        self.log = logging.getLogger("spellchk.WordListClient")
        self.base_url = (base_url or envdefault.SPELLCHK_WORDLIST_URL or WORDLIST_BASE_URL).rstrip("/")
        self.log.debug("using %r", self.base_url)
        self.session = get_requests_session(timeout=request_timeout)
        self.http_log = logging.getLogger("spellchk_http")
        if show_http:
            self.http_log.setLevel(logging.DEBUG)
        self.retry = retry

    def url_for(self, name: str) -> str:
        return self.base_url + "/" + name

    def _get(self, url: str) -> Response:
        self.http_log.debug("-----Request Begin-----")
        self.http_log.debug("GET %s", url)
        self.http_log.debug("-----Request End-----")

        response = self.session.get(url)

        self.http_log.debug("-----Response Begin-----")
        self.http_log.debug("%s %s", response.status_code, response.reason)
        for header, header_value in response.headers.items():
            self.http_log.debug("%s: %s", header, header_value)
        self.http_log.debug("-----Response End-----")

        if not str(response.status_code).startswith("2"):
            raise DownloadError(url, response.status_code)
        return response

    def fetch_wordlist(self, name: str) -> str:
        url = self.url_for(name)
        attempts = self.retry.attempts
        while True:
            attempts -= 1
            try:
                response = self._get(url)
                break
            except requests.exceptions.ConnectionError as ex:
                if attempts <= 0:
                    raise
                self.log.warning(
                    "GET %s failed: %s: %s; retrying in %s seconds, %s attempts left",
                    url,
                    ex.__class__.__name__,
                    ex,
                    self.retry.sleep.total_seconds(),
                    attempts,
                )
                time.sleep(self.retry.sleep.total_seconds())

        response.encoding = response.encoding or "utf-8"
        return response.text


def normalize_words(lines: Iterable[str]) -> Iterator[str]:
    """Stripped, lower-cased words of a downloaded list; single characters are dropped"""
    for line in lines:
        word = line.strip().lower()
        if len(word) > 1:
            yield word


def parse_wordlist(lines: Iterable[str], path: str = "<memory>") -> tuple[list[str], dict[str, int]]:
    """Parse `word` or `word<whitespace>count` lines; blank lines and `#` comments are skipped"""
    words: list[str] = []
    frequencies: dict[str, int] = {}
    for line_number, line in enumerate(lines, 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        fields = line.split()
        if len(fields) > 2 or (len(fields) == 2 and not fields[1].isdigit()):
            raise UserError(f"{path}:{line_number}: expected 'word' or 'word count', got {line!r}")
        word = fields[0].lower()
        words.append(word)
        if len(fields) == 2:
            frequencies[word] = frequencies.get(word, 0) + int(fields[1])
    return words, frequencies


def download_dictionary(language: str, data_dir: str, client: WordListClient) -> DictionaryInfo:
    wordlist = WORDLISTS.get(language)
    if wordlist is None:
        raise UserError(
            "Language {!r} is not supported, available languages: {}".format(language, ", ".join(sorted(WORDLISTS)))
        )

    url = client.url_for(wordlist)
    log.info("Downloading %s dictionary (word list version %s) from %s", language, WORDLIST_VERSION, url)
    content = client.fetch_wordlist(wordlist)
    store = DictionaryStore.from_words(normalize_words(content.splitlines()))
    log.info("Found %d words", len(store))

    path = dictionary_path(language, data_dir)
    store.save(path)
    log.info("Dictionary installed: %s", path)
    return dictionary_info(language, data_dir, store=store)


def build_dictionary(wordlist_path: str, language: str, data_dir: str) -> DictionaryInfo:
    try:
        with open(wordlist_path, encoding="utf-8") as fp:
            words, frequencies = parse_wordlist(fp, wordlist_path)
    except OSError as ex:
        raise FileUnreadable(wordlist_path, f"{ex.__class__.__name__}: {ex}") from ex
    except UnicodeDecodeError as ex:
        raise FileUnreadable(wordlist_path, "word list is not valid UTF-8") from ex

    store = DictionaryStore.from_words(words, frequencies)
    path = dictionary_path(language, data_dir)
    store.save(path)
    log.info("Built %s dictionary with %d words: %s", language, len(store), path)
    return dictionary_info(language, data_dir, store=store)


def installed_dictionaries(data_dir: str) -> list[str]:
    try:
        names = os.listdir(data_dir)
    except OSError as ex:
        if ex.errno == errno.ENOENT:
            return []
        raise
    return sorted(name[: -len(DICT_SUFFIX)] for name in names if name.endswith(DICT_SUFFIX))


def dictionary_info(language: str, data_dir: str, store: DictionaryStore | None = None) -> DictionaryInfo:
    path = dictionary_path(language, data_dir)
    try:
        size = os.path.getsize(path)
    except OSError as ex:
        raise DictionaryNotFound(language, path) from ex
    if store is None:
        store = DictionaryStore.load(path, language=language)
    return DictionaryInfo(
        language=language,
        path=path,
        size_bytes=size,
        word_count=len(store),
        format_version=FORMAT_VERSION,
    )


def update_dictionaries(data_dir: str, client: WordListClient) -> list[DictionaryInfo]:
    """Download every installed downloadable dictionary again; locally built ones are left alone"""
    updated = []
    for language in installed_dictionaries(data_dir):
        if language not in WORDLISTS:
            log.info("Skipping %s: not a downloadable dictionary", language)
            continue
        updated.append(download_dictionary(language, data_dir, client))
    return updated
