# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from . import dictionaries
from .base_cli import SpellchkBaseCLI
from .cliarg import arg
from .dictionary import dictionary_path, DictionaryStore, PersonalDictionary
from typing import Iterable

import os

INFO_LAYOUT = [["language", "word_count", "size_bytes", "format_version", "wordlist_version"], "path"]


class SpellchkDictCLI(SpellchkBaseCLI):
    def _print_infos(self, infos: Iterable[dictionaries.DictionaryInfo]) -> None:
        self.print_response([info._asdict() for info in infos], json=self.args.json, table_layout=INFO_LAYOUT)

    @arg.json
    def dict__list(self) -> None:
        """List installed dictionaries"""
        data_dir = self.resolve_config().data_dir
        languages = dictionaries.installed_dictionaries(data_dir)
        if not languages and not self.args.json:
            self.log.info("No dictionaries installed in %s, run 'spellchk dict download en_US' to get one", data_dir)
            return
        rows = []
        for language in languages:
            path = dictionary_path(language, data_dir)
            rows.append({"language": language, "size_bytes": os.path.getsize(path), "path": path})
        self.print_response(rows, json=self.args.json, table_layout=["language", "size_bytes", "path"])

    @arg.language_name
    @arg.json
    def dict__info(self) -> None:
        """Show details of an installed dictionary"""
        data_dir = self.resolve_config().data_dir
        self._print_infos([dictionaries.dictionary_info(self.args.language_name, data_dir)])

    @arg.language_name
    @arg.json
    def dict__download(self) -> None:
        """Download and install the dictionary of a language"""
        data_dir = self.resolve_config().data_dir
        self._print_infos([dictionaries.download_dictionary(self.args.language_name, data_dir, self.client)])

    @arg.json
    def dict__update(self) -> None:
        """Download all installed dictionaries again"""
        data_dir = self.resolve_config().data_dir
        infos = dictionaries.update_dictionaries(data_dir, self.client)
        if not infos and not self.args.json:
            self.log.info("No dictionaries to update")
            return
        self._print_infos(infos)

    @arg("wordlist", help="Word list file, one 'word' or 'word count' per line")
    @arg.language
    @arg.json
    def dict__build(self) -> None:
        """Build a dictionary from a local word list"""
        config = self.resolve_config()
        self._print_infos([dictionaries.build_dictionary(self.args.wordlist, config.language, config.data_dir)])

    @arg("words", nargs="+", metavar="WORD", help="Words to accept")
    @arg.personal_dict
    def dict__add(self) -> None:
        """Add words to the personal dictionary"""
        config = self.resolve_config()
        personal = PersonalDictionary.load(config.personal_dictionary)
        with personal.appending():
            for word in self.args.words:
                if not personal.add(word):
                    self.log.info("%r is already in %s", word, config.personal_dictionary)

    @arg.language
    @arg.prefix
    @arg.length
    def dict__words(self) -> None:
        """Print the words of a dictionary"""
        config = self.resolve_config()
        store = DictionaryStore.for_language(config.language, config.data_dir)
        if self.args.prefix is not None:
            words = store.candidates_with_prefix(self.args.prefix)
            if self.args.length is not None:
                words = (word for word in words if len(word) == self.args.length)
        elif self.args.length is not None:
            words = store.candidates_of_length(self.args.length)
        else:
            words = iter(store)
        for word in words:
            print(word)
