import json
from typing import Annotated

import pytest

from method_guards import MinLength, MissingRequiredArgumentException, Required, current_method, guard
from method_guards.core import localization


def register(email: Annotated[str, Required()]) -> None:
    guard(current_method()).argument("email", email)


@pytest.fixture
def lang_dir(tmp_path):
    directory = tmp_path / "lang"
    directory.mkdir()
    (directory / "de.json").write_text(json.dumps({
        "validation": {
            "required": "Das Feld {name} ist erforderlich.",
            "min_length": "{name} braucht mindestens {length} Zeichen.",
        },
        "messages": {"pin": "Die PIN {name} ist ungültig."},
    }))
    (directory / "en.json").write_text(json.dumps({"greeting": "Hello {name}"}))
    localization.set_locale_path(str(directory))
    return directory


def test_translations_replace_default_rule_messages(lang_dir):
    localization.set_locale("de")

    assert Required().format_message("email") == "Das Feld email ist erforderlich."
    assert MinLength(3).format_message("code") == "code braucht mindestens 3 Zeichen."


def test_guard_failures_use_the_current_locale(lang_dir):
    localization.set_locale("de")

    with pytest.raises(MissingRequiredArgumentException) as exc_info:
        register(None)

    assert exc_info.value.message == "The email argument is invalid: Das Feld email ist erforderlich."


def test_missing_translation_falls_back_to_default_message(lang_dir):
    localization.set_locale("fr")

    assert Required().format_message("email") == "The email field is required."


def test_translate_helper(lang_dir):
    __ = localization.__

    assert __("greeting", {"name": "Bob"}) == "Hello Bob"
    assert __("missing", default="fallback") == "fallback"


def test_error_message_override_may_be_a_translation_key(lang_dir):
    localization.set_locale("de")

    assert Required(error_message="messages.pin").format_message("pin") == "Die PIN pin ist ungültig."


def test_keys_missing_from_the_current_locale_come_from_the_fallback_locale(lang_dir):
    localization.set_locale("de")

    assert localization.__("greeting", {"name": "Bob"}) == "Hello Bob"


def test_unreadable_translation_file_falls_back_to_defaults(lang_dir):
    (lang_dir / "nl.json").write_text("{not json")
    localization.set_locale("nl")

    assert Required().format_message("email") == "The email field is required."
    assert localization.__("greeting", {"name": "Bob"}) == "Hello Bob"
