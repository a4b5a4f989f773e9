"""
Basic package tests to ensure method_guards can be imported and exposes its API.
"""

import method_guards


def test_package_version():
    assert hasattr(method_guards, '__version__')
    assert method_guards.__version__ == "0.1.0"


def test_package_license():
    assert method_guards.__license__ == "MIT"


def test_public_api_is_reexported():
    for name in (
        "guard",
        "current_method",
        "Guard",
        "ValidationRule",
        "Required",
        "implements",
        "guarded",
        "MissingRequiredArgumentException",
        "InvalidArgumentValueException",
    ):
        assert hasattr(method_guards, name), name
