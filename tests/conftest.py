"""
Pytest configuration and shared fixtures for method guard tests.
"""

import pytest
from faker import Faker

from method_guards import config

fake = Faker()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings from the (restored) environment after every test."""
    yield
    config.reload()


@pytest.fixture
def long_text():
    """A string of at least ten characters."""
    return fake.pystr(min_chars=12, max_chars=40)


@pytest.fixture
def short_text():
    """A non-empty string shorter than ten characters."""
    return fake.pystr(min_chars=1, max_chars=9)
