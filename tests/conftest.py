"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from scenepartner.config import ScenePartnerSettings, reset_settings, set_settings
from scenepartner.parser import ScreenplayParser

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test against default settings, unaffected by the environment."""
    for key in list(os.environ):
        if key.startswith("SCENEPARTNER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    set_settings(ScenePartnerSettings())
    yield
    reset_settings()


@pytest.fixture
def kitchen_lines():
    """The JOHN/MARY kitchen scene as normalized lines."""
    return [
        "INT. KITCHEN - DAY",
        "JOHN",
        "(smiling)",
        "Hello there.",
        "How are you?",
        "MARY",
        "I'm fine thanks.",
    ]


@pytest.fixture
def parser():
    """Create a ScreenplayParser with default settings."""
    return ScreenplayParser()


@pytest.fixture
def sample_screenplay_path():
    """Path to the plain text sample screenplay."""
    return FIXTURES_DIR / "coffee_shop.txt"


@pytest.fixture
def sample_script(parser, sample_screenplay_path):
    """Parsed sample screenplay."""
    return parser.parse_file(sample_screenplay_path)
