"""Shared pytest fixtures for the charparse test suite."""

from __future__ import annotations

import pytest

import charparse.main


@pytest.fixture
def tracing():
    """Turn on parse tracing for one test."""
    charparse.main.debug = True
    yield
    charparse.main.debug = False
