# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from requests import adapters, models, Session
from requests.structures import CaseInsensitiveDict
from typing import Any

try:
    from .version import __version__
except ImportError:
    __version__ = "UNKNOWN"


class SpellchkAdapter(adapters.HTTPAdapter):
    """HTTP adapter applying a default timeout to every request without one"""

    def __init__(self, *args: Any, timeout: float | None = None, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, *args: Any, **kwargs: Any) -> models.Response:
        if not kwargs.get("timeout"):
            kwargs["timeout"] = self.timeout
        return super().send(*args, **kwargs)


def get_requests_session(*, timeout: float | None = None) -> Session:
    adapter = SpellchkAdapter(timeout=timeout)

    session = Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = True
    session.headers = CaseInsensitiveDict(
        {
            "accept": "text/plain",
            "user-agent": "spellchk/" + __version__,
        }
    )

    return session
