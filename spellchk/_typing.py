# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from typing import NoReturn


def assert_never(arg: NoReturn, /) -> NoReturn:
    """Exhaustiveness check for the closed enums (file types, contexts, interactive outcomes).

    Same as typing.assert_never, which is only available from Python 3.11.
    """
    raise AssertionError(f"Unhandled variant: {arg!r}")
