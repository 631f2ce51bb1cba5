"""
Shared fixtures.
"""

import os

import pytest

from textcheck import config
from textcheck.logging_utils import reset_loggers
from textcheck.service import SpellCheckingService

from tests.fakes import FakeEngine, FakeIdentifier


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from default configuration."""
    for name in list(os.environ):
        if name.startswith('TEXTCHECK_'):
            monkeypatch.delenv(name, raising=False)
    config.reset_config()
    reset_loggers()
    yield
    config.reset_config()
    reset_loggers()


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def identifier() -> FakeIdentifier:
    return FakeIdentifier("en")


@pytest.fixture
def service(engine, identifier) -> SpellCheckingService:
    return SpellCheckingService(engine=engine, identifier=identifier)
