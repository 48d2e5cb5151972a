"""Pytest configuration and fixtures for sql-rw tests."""

from __future__ import annotations

import logging

import pytest

from tests.fakes import FakeConnection


@pytest.fixture()
def fake_conn() -> FakeConnection:
    """A fresh auto-commit connection with no tables."""
    return FakeConnection()


@pytest.fixture()
def test_logger() -> logging.Logger:
    """Logger injected into client calls so tests can capture its lines."""
    return logging.getLogger("sql-rw.test")
