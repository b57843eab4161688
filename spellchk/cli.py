# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from .check_cli import SpellchkCheckCLI
from .dict_cli import SpellchkDictCLI
from typing import NoReturn, Sequence


class SpellchkCLI(
    SpellchkCheckCLI,
    SpellchkDictCLI,
):
    pass


def main(args: Sequence[str] | None = None) -> NoReturn:
    SpellchkCLI().main(args)


if __name__ == "__main__":
    main()
