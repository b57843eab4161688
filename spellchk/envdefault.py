# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""
Configurable parameters via environment variables
"""

import os

USER_HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME") or os.path.join(USER_HOME, ".config")
XDG_DATA_HOME = os.environ.get("XDG_DATA_HOME") or os.path.join(USER_HOME, ".local", "share")

SPELLCHK_CONFIG_DIR = os.environ.get("SPELLCHK_CONFIG_DIR", os.path.join(XDG_CONFIG_HOME, "spellchk"))
SPELLCHK_DATA_DIR = os.environ.get("SPELLCHK_DATA_DIR", os.path.join(XDG_DATA_HOME, "spellchk"))

SPELLCHK_CONFIG = os.environ.get("SPELLCHK_CONFIG", os.path.join(SPELLCHK_CONFIG_DIR, "spellchk.json"))
SPELLCHK_PERSONAL_DICT = os.environ.get("SPELLCHK_PERSONAL_DICT", os.path.join(SPELLCHK_CONFIG_DIR, "personal.txt"))
SPELLCHK_LANGUAGE = os.environ.get("SPELLCHK_LANGUAGE")
SPELLCHK_WORDLIST_URL = os.environ.get("SPELLCHK_WORDLIST_URL")

PROJECT_CONFIG_FILE = ".spellchk.json"
