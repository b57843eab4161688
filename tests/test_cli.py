# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from http import HTTPStatus
from pathlib import Path
from pytest import CaptureFixture, LogCaptureFixture, MonkeyPatch
from spellchk.checker import SpellChecker
from spellchk.cli import SpellchkCLI
from spellchk.config import CheckConfig, COMPOUND_RULE
from spellchk.dictionaries import WordListClient
from spellchk.dictionary import dictionary_path, DictionaryStore
from typing import Any, NamedTuple
from unittest import mock

import io
import json
import logging
import pytest

EXIT_CODE_INVALID_USAGE = 2
WORDS = ["brown", "formed", "fox", "hello", "idea", "quick", "the", "well", "world"]


class Workspace(NamedTuple):
    root: Path
    config: Path
    data_dir: Path
    personal: Path

    def run(self, *args: str, cli: SpellchkCLI | None = None) -> int | None:
        cli = cli or SpellchkCLI()
        return cli.run(args=["--config", str(self.config), "--data-dir", str(self.data_dir), *args])

    def write(self, name: str, content: bytes) -> str:
        path = self.root / name
        path.write_bytes(content)
        return name


@pytest.fixture(name="workspace")
def fixture_workspace(tmp_path: Path, monkeypatch: MonkeyPatch) -> Workspace:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("spellchk.envdefault.SPELLCHK_LANGUAGE", None)
    workspace = Workspace(
        root=tmp_path,
        config=tmp_path / "spellchk.json",
        data_dir=tmp_path / "data",
        personal=tmp_path / "personal.txt",
    )
    workspace.config.write_text(json.dumps({"personal_dictionary": str(workspace.personal)}), encoding="utf-8")
    DictionaryStore.from_words(WORDS).save(dictionary_path("en_US", str(workspace.data_dir)))
    return workspace


def test_help() -> None:
    with pytest.raises(SystemExit) as excinfo:
        SpellchkCLI().run(args=["--help"])
    assert excinfo.value.code == 0


def test_check_clean(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    name = workspace.write("notes.txt", b"the quick brown fox\n")
    assert workspace.run("check", name) == 0
    assert capsys.readouterr().out == "No spelling errors found\n"


def test_check_findings(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    name = workspace.write("notes.txt", b"helo wrold\n")
    assert workspace.run("check", name) == 1
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0].split() == ["FILE", "LINE", "COLUMN", "WORD", "SUGGESTIONS"]
    assert lines[2].split() == ["notes.txt", "1", "1", "helo", "hello,", "well"]
    assert lines[3].split() == ["notes.txt", "1", "6", "wrold", "world"]
    assert lines[-1] == "2 errors found in 1 file"

    assert workspace.run("check", "--no-fail", name) == 0


def test_check_json_output(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    first = workspace.write("a.txt", b"the helo\n")
    second = workspace.write("b.md", b"# Title\n")
    assert workspace.run("check", "-o", "json", first, second, "missing.txt") == EXIT_CODE_INVALID_USAGE
    document = json.loads(capsys.readouterr().out)
    assert document["files_checked"] == 3
    assert document["total_errors"] == 2
    assert document["errors"][0] == {
        "file": "a.txt",
        "line": 1,
        "column": 5,
        "byte_start": 4,
        "byte_end": 8,
        "word": "helo",
        "context": "the helo",
        "suggestions": ["hello", "well"],
        "distances": [1, 2],
    }
    assert document["errors"][1]["word"] == "Title"
    assert [failure["file"] for failure in document["failures"]] == ["missing.txt"]


def test_check_unreadable_file(workspace: Workspace, capsys: CaptureFixture[str], caplog: LogCaptureFixture) -> None:
    name = workspace.write("notes.txt", b"the fox\n")
    assert workspace.run("check", name, "missing.txt") == EXIT_CODE_INVALID_USAGE
    out = capsys.readouterr().out
    assert "missing.txt  Cannot read missing.txt" in out
    assert out.splitlines()[-1] == "No spelling errors found"
    assert "missing.txt: Cannot read missing.txt" in caplog.text


def test_check_without_dictionary(workspace: Workspace, caplog: LogCaptureFixture) -> None:
    name = workspace.write("notes.txt", b"the fox\n")
    assert workspace.run("check", "--language", "fi_FI", name) == EXIT_CODE_INVALID_USAGE
    assert "command failed: DictionaryNotFound: No dictionary installed for 'fi_FI'" in caplog.text


def test_check_invalid_ignore_pattern(workspace: Workspace, caplog: LogCaptureFixture) -> None:
    assert workspace.run("check", "--ignore-pattern", "(oops", "missing.txt") == EXIT_CODE_INVALID_USAGE
    assert "InvalidIgnorePattern" in caplog.text
    assert "Cannot read" not in caplog.text


def test_check_invalid_jobs(workspace: Workspace) -> None:
    with pytest.raises(SystemExit) as excinfo:
        workspace.run("check", "-j", "0", "notes.txt")
    assert excinfo.value.code == EXIT_CODE_INVALID_USAGE


def test_check_options_reach_configuration(workspace: Workspace) -> None:
    configs: list[CheckConfig] = []
    store = DictionaryStore.from_words(WORDS)

    def checker_factory(config: CheckConfig) -> SpellChecker:
        configs.append(config)
        return SpellChecker.from_config(config, store=store)

    name = workspace.write("notes.txt", b"the fox\n")
    cli = SpellchkCLI(checker_factory=checker_factory)
    args = ["check", "--max-suggestions", "1", "--case-sensitive", "-j", "3", "--ignore-pattern", "xyz", "--no-compound"]
    assert workspace.run(*args, name, cli=cli) == 0
    config = configs[0]
    assert config.max_suggestions == 1
    assert config.case_sensitive is True
    assert config.jobs == 3
    assert config.ignore_patterns[-1] == "xyz"
    assert COMPOUND_RULE not in config.enabled_rules
    assert config.personal_dictionary == str(workspace.personal)
    assert config.data_dir == str(workspace.data_dir)


def test_check_compound_option(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    name = workspace.write("notes.txt", b"a well-formd idea\n")
    workspace.run("check", "-o", "json", name)
    assert [error["word"] for error in json.loads(capsys.readouterr().out)["errors"]] == ["formd"]
    workspace.run("check", "-o", "json", "--no-compound", name)
    assert [error["word"] for error in json.loads(capsys.readouterr().out)["errors"]] == ["well-formd"]


def test_project_configuration(workspace: Workspace) -> None:
    name = workspace.write("notes.txt", b"the helo fox\n")
    (workspace.root / ".spellchk.json").write_text(json.dumps({"ignore_patterns": ["^helo$"]}), encoding="utf-8")
    assert workspace.run("check", name) == 0


def test_fix(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    name = workspace.write("notes.txt", b"helo wrold, xyzzyq\n")
    assert workspace.run("fix", name) == 0
    assert (workspace.root / name).read_bytes() == b"hello world, xyzzyq\n"
    out = capsys.readouterr().out
    assert "xyzzyq" in out
    assert "wrold" not in out
    assert out.splitlines()[-1] == "2 corrections applied to 1 file"

    assert workspace.run("fix", name) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "No corrections needed"


def test_fix_json_reports_remaining_findings(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    name = workspace.write("notes.txt", b"helo wrold, xyzzyq\n")
    assert workspace.run("fix", "-o", "json", name) == 0
    document = json.loads(capsys.readouterr().out)
    assert document["total_errors"] == 1
    assert [(error["word"], error["suggestions"]) for error in document["errors"]] == [("xyzzyq", [])]
    assert (workspace.root / name).read_bytes() == b"hello world, xyzzyq\n"


def test_fix_interactive(workspace: Workspace, capsys: CaptureFixture[str], monkeypatch: MonkeyPatch) -> None:
    name = workspace.write("notes.txt", b"helo wrold\n")
    monkeypatch.setattr("sys.stdin", io.StringIO("1\ns\n"))
    assert workspace.run("fix", "--interactive", name) == 0
    assert (workspace.root / name).read_bytes() == b"hello wrold\n"
    out = capsys.readouterr().out
    assert "Misspelling found: notes.txt:1:1: helo" in out
    assert out.splitlines()[-1] == "1 correction applied to 1 file"


def test_fix_interactive_rejects_json(workspace: Workspace, caplog: LogCaptureFixture) -> None:
    name = workspace.write("notes.txt", b"helo\n")
    assert workspace.run("fix", "-i", "-o", "json", name) == EXIT_CODE_INVALID_USAGE
    assert "--interactive cannot be combined with JSON output" in caplog.text
    assert (workspace.root / name).read_bytes() == b"helo\n"


def test_dict_list(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    workspace.run("dict", "list", "--json")
    rows = json.loads(capsys.readouterr().out)
    assert [row["language"] for row in rows] == ["en_US"]
    assert rows[0]["path"] == dictionary_path("en_US", str(workspace.data_dir))


def test_dict_list_empty(workspace: Workspace, caplog: LogCaptureFixture, capsys: CaptureFixture[str]) -> None:
    caplog.set_level(logging.INFO)
    workspace.run("--data-dir", str(workspace.root / "empty"), "dict", "list")
    assert capsys.readouterr().out == ""
    assert "No dictionaries installed" in caplog.text


def test_dict_build_and_words(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    wordlist = workspace.write("team.txt", b"kubectl 3\ngrafana\nkustomize\n")
    workspace.run("dict", "build", wordlist, "-l", "en_TEAM", "--json")
    infos = json.loads(capsys.readouterr().out)
    assert infos[0]["language"] == "en_TEAM"
    assert infos[0]["word_count"] == 3

    workspace.run("dict", "words", "-l", "en_TEAM", "--prefix", "ku")
    assert capsys.readouterr().out == "kubectl\nkustomize\n"
    workspace.run("dict", "words", "-l", "en_TEAM", "--length", "7")
    assert capsys.readouterr().out == "grafana\nkubectl\n"

    workspace.run("dict", "info", "en_TEAM")
    out = capsys.readouterr().out
    assert out.splitlines()[0].split() == ["LANGUAGE", "WORD_COUNT", "SIZE_BYTES", "FORMAT_VERSION", "WORDLIST_VERSION"]


def test_dict_add(workspace: Workspace, caplog: LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    name = workspace.write("notes.txt", b"deploy with kubectl\n")
    assert workspace.run("check", name) == 1
    workspace.run("dict", "add", "deploy", "with", "Kubectl")
    workspace.run("dict", "add", "kubectl")
    assert workspace.personal.read_text(encoding="utf-8") == "deploy\nwith\nkubectl\n"
    assert "'kubectl' is already in" in caplog.text
    assert workspace.run("check", name) == 0


def test_dict_download(workspace: Workspace, capsys: CaptureFixture[str]) -> None:
    response = mock.Mock(status_code=HTTPStatus.OK.value, text="alpha\nbeta\n", headers={}, reason="OK", encoding="utf-8")
    client_args: list[dict[str, Any]] = []

    def client_factory(base_url: str | None, show_http: bool, request_timeout: float | None) -> WordListClient:
        client_args.append({"base_url": base_url, "show_http": show_http, "request_timeout": request_timeout})
        client = WordListClient(base_url)
        client.session = mock.Mock()
        client.session.get.return_value = response
        return client

    cli = SpellchkCLI(client_factory=client_factory)
    args = ["--wordlist-url", "http://mirror.test", "--request-timeout", "5", "dict", "download", "en_GB", "--json"]
    assert workspace.run(*args, cli=cli) is None
    assert client_args == [{"base_url": "http://mirror.test", "show_http": False, "request_timeout": 5.0}]
    assert json.loads(capsys.readouterr().out)[0]["word_count"] == 2
    assert list(DictionaryStore.for_language("en_GB", str(workspace.data_dir))) == ["alpha", "beta"]


def test_dict_download_unsupported_language(workspace: Workspace, caplog: LogCaptureFixture) -> None:
    assert workspace.run("dict", "download", "xx_XX") == EXIT_CODE_INVALID_USAGE
    assert "Language 'xx_XX' is not supported" in caplog.text
