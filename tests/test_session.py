# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

# pylint: disable=no-member
from requests import Session
from spellchk.session import get_requests_session, SpellchkAdapter
from spellchk.version import __version__
from unittest import mock

import pytest


def test_valid_requests_session() -> None:
    """get_requests_session returns a Session with the spellchk adapter and user agent"""
    session = get_requests_session()

    assert isinstance(session, Session)
    assert session.headers["User-Agent"] == "spellchk/" + __version__

    adapter = session.adapters["https://"]
    assert isinstance(adapter, SpellchkAdapter)
    assert adapter.timeout is None
    assert session.adapters["http://"] is adapter


@pytest.mark.parametrize("timeout", [30, 0, 2.5])
def test_timeout_is_passed_to_adapter(timeout: float) -> None:
    session = get_requests_session(timeout=timeout)
    adapter = session.adapters["https://"]
    assert isinstance(adapter, SpellchkAdapter)
    assert adapter.timeout == timeout


@pytest.mark.parametrize(
    "explicit,expected",
    [
        (None, 7),
        (3, 3),
    ],
)
def test_adapter_applies_default_timeout(explicit: int | None, expected: int) -> None:
    adapter = SpellchkAdapter(timeout=7)
    with mock.patch("requests.adapters.HTTPAdapter.send") as send:
        adapter.send(mock.Mock(), timeout=explicit)
    assert send.call_args.kwargs["timeout"] == expected
