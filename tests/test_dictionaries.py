# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from http import HTTPStatus
from pathlib import Path
from spellchk.argx import UserError
from spellchk.dictionaries import (
    build_dictionary,
    dictionary_info,
    download_dictionary,
    installed_dictionaries,
    normalize_words,
    parse_wordlist,
    RetrySpec,
    update_dictionaries,
    WORDLIST_BASE_URL,
    WORDLIST_VERSION,
    WordListClient,
)
from spellchk.dictionary import dictionary_path, DictionaryStore, FORMAT_VERSION
from spellchk.errors import DictionaryNotFound, DownloadError, FileUnreadable
from unittest import mock

import datetime
import pytest
import requests


class MockResponse:
    def __init__(self, status_code: int | HTTPStatus, text: str = "", headers: dict[str, str] | None = None):
        self.status_code = status_code.value if isinstance(status_code, HTTPStatus) else status_code
        self.text = text
        self.headers = {} if headers is None else headers
        self.reason = ""
        self.encoding: str | None = None


WORDLIST = "apple\nBanana\n\na\ncherry \napple\n"


def make_client(*responses: MockResponse | Exception) -> WordListClient:
    client = WordListClient("https://words.test/lists/", retry=RetrySpec(attempts=3, sleep=datetime.timedelta(0)))
    client.session = mock.Mock()
    client.session.get.side_effect = list(responses)
    return client


class TestWordListClient:
    def test_default_base_url(self) -> None:
        with mock.patch("spellchk.envdefault.SPELLCHK_WORDLIST_URL", None):
            client = WordListClient()
        assert client.url_for("words_alpha.txt") == WORDLIST_BASE_URL + "/words_alpha.txt"

    def test_base_url_from_environment(self) -> None:
        with mock.patch("spellchk.envdefault.SPELLCHK_WORDLIST_URL", "http://mirror.test/"):
            assert WordListClient().url_for("x.txt") == "http://mirror.test/x.txt"
            assert WordListClient("http://other.test").url_for("x.txt") == "http://other.test/x.txt"

    def test_fetch(self) -> None:
        client = make_client(MockResponse(HTTPStatus.OK, WORDLIST))
        assert client.fetch_wordlist("en.txt") == WORDLIST
        client.session.get.assert_called_once_with("https://words.test/lists/en.txt")

    def test_http_error(self) -> None:
        client = make_client(MockResponse(HTTPStatus.NOT_FOUND))
        with pytest.raises(DownloadError) as excinfo:
            client.fetch_wordlist("en.txt")
        assert excinfo.value.status == 404
        assert str(excinfo.value) == "Failed to download https://words.test/lists/en.txt: HTTP 404"

    def test_retries_connection_errors(self) -> None:
        client = make_client(
            requests.exceptions.ConnectionError("reset"),
            requests.exceptions.ConnectionError("reset"),
            MockResponse(HTTPStatus.OK, "word\n"),
        )
        with mock.patch("time.sleep") as sleep:
            assert client.fetch_wordlist("en.txt") == "word\n"
        assert client.session.get.call_count == 3
        assert sleep.call_count == 2

    def test_gives_up_after_attempts(self) -> None:
        client = make_client(*[requests.exceptions.ConnectionError("reset")] * 3)
        with pytest.raises(requests.exceptions.ConnectionError):
            client.fetch_wordlist("en.txt")
        assert client.session.get.call_count == 3

    def test_does_not_retry_http_errors(self) -> None:
        client = make_client(MockResponse(HTTPStatus.SERVICE_UNAVAILABLE), MockResponse(HTTPStatus.OK, "word\n"))
        with pytest.raises(DownloadError):
            client.fetch_wordlist("en.txt")
        assert client.session.get.call_count == 1


def test_normalize_words() -> None:
    assert list(normalize_words(["  Apple\n", "a", "", "ÉCOLE"])) == ["apple", "école"]


def test_parse_wordlist() -> None:
    lines = ["# comment", "", "Apple 10", "banana", "apple 5", "  cherry\t2  "]
    words, frequencies = parse_wordlist(lines)
    assert words == ["apple", "banana", "apple", "cherry"]
    assert frequencies == {"apple": 15, "cherry": 2}


@pytest.mark.parametrize("line", ["apple many", "apple 1 2", "apple -3"])
def test_parse_wordlist_errors(line: str) -> None:
    with pytest.raises(UserError) as excinfo:
        parse_wordlist(["fine", line], "words.txt")
    assert "words.txt:2:" in str(excinfo.value)


def test_download_dictionary(tmp_path: Path) -> None:
    client = make_client(MockResponse(HTTPStatus.OK, WORDLIST))
    info = download_dictionary("en_US", str(tmp_path), client)
    assert info.language == "en_US"
    assert info.word_count == 3
    assert info.format_version == FORMAT_VERSION
    assert info.wordlist_version == WORDLIST_VERSION
    assert info.path == dictionary_path("en_US", str(tmp_path))
    assert info.size_bytes == Path(info.path).stat().st_size
    assert list(DictionaryStore.load(info.path)) == ["apple", "banana", "cherry"]


def test_download_unsupported_language(tmp_path: Path) -> None:
    client = make_client()
    with pytest.raises(UserError) as excinfo:
        download_dictionary("xx_XX", str(tmp_path), client)
    assert "en_GB, en_US" in str(excinfo.value)
    client.session.get.assert_not_called()


def test_failed_download_keeps_existing_dictionary(tmp_path: Path) -> None:
    DictionaryStore.from_words(["old", "words"]).save(dictionary_path("en_US", str(tmp_path)))
    with pytest.raises(DownloadError):
        download_dictionary("en_US", str(tmp_path), make_client(MockResponse(HTTPStatus.BAD_GATEWAY)))
    assert list(DictionaryStore.for_language("en_US", str(tmp_path))) == ["old", "words"]


def test_build_dictionary(tmp_path: Path) -> None:
    wordlist = tmp_path / "team.txt"
    wordlist.write_text("# team words\nkubectl 3\nGrafana\nkubectl 2\n", encoding="utf-8")
    info = build_dictionary(str(wordlist), "en_TEAM", str(tmp_path / "data"))
    assert info.word_count == 2
    store = DictionaryStore.for_language("en_TEAM", str(tmp_path / "data"))
    assert list(store) == ["grafana", "kubectl"]
    assert store.frequency("kubectl") == 5


@pytest.mark.parametrize("content", [None, b"caf\xe9\n"])
def test_build_dictionary_unreadable(tmp_path: Path, content: bytes | None) -> None:
    wordlist = tmp_path / "team.txt"
    if content is not None:
        wordlist.write_bytes(content)
    with pytest.raises(FileUnreadable):
        build_dictionary(str(wordlist), "en_TEAM", str(tmp_path))


def test_installed_dictionaries_and_info(tmp_path: Path) -> None:
    assert installed_dictionaries(str(tmp_path / "missing")) == []
    DictionaryStore.from_words(["one", "two"]).save(dictionary_path("en_US", str(tmp_path)))
    DictionaryStore.from_words(["three"]).save(dictionary_path("de_DE", str(tmp_path)))
    (tmp_path / "notes.txt").write_text("not a dictionary", encoding="utf-8")
    assert installed_dictionaries(str(tmp_path)) == ["de_DE", "en_US"]

    info = dictionary_info("en_US", str(tmp_path))
    assert (info.language, info.word_count) == ("en_US", 2)
    with pytest.raises(DictionaryNotFound):
        dictionary_info("fi_FI", str(tmp_path))


def test_update_dictionaries(tmp_path: Path) -> None:
    DictionaryStore.from_words(["old"]).save(dictionary_path("en_GB", str(tmp_path)))
    DictionaryStore.from_words(["custom"]).save(dictionary_path("en_TEAM", str(tmp_path)))
    client = make_client(MockResponse(HTTPStatus.OK, WORDLIST))

    updated = update_dictionaries(str(tmp_path), client)
    assert [info.language for info in updated] == ["en_GB"]
    assert list(DictionaryStore.for_language("en_GB", str(tmp_path))) == ["apple", "banana", "cherry"]
    assert list(DictionaryStore.for_language("en_TEAM", str(tmp_path))) == ["custom"]
