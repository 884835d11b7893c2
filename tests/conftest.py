"""Test configuration and fixtures for rimpub."""

from unittest.mock import patch

import pytest

from rimpub.path_resolver import NullPathResolver


@pytest.fixture(autouse=True)
def rimpub_home(tmp_path_factory, monkeypatch):
    """Keep every test away from the real ~/.rimpub and the real Steam install."""
    home = tmp_path_factory.mktemp("rimpub-home")
    monkeypatch.setenv("RIMPUB_HOME", str(home))
    with patch("rimpub.config.select_resolver", return_value=NullPathResolver()):
        yield home
