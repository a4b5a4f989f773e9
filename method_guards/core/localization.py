"""
Translatable rule messages.

Built-in rules look their message templates up here before falling back to the
English defaults they carry. Translation files are plain JSON, one per locale,
read from `GUARD_LOCALE_PATH`:

    lang/de.json
    {"validation": {"required": "Das Feld {name} ist erforderlich."}}

Usage:
    from method_guards.core.localization import __, set_locale

    __('validation.required', {'name': 'param'}, default='The {name} field is required.')
    set_locale('de')
"""

import json
import logging
from contextvars import ContextVar
from pathlib import Path
from typing import Dict, Any, Optional

from method_guards import config

_translations: Dict[str, Dict[str, Any]] = {}
_locale_path: Optional[str] = None
_current_locale: ContextVar[Optional[str]] = ContextVar('guard_locale', default=None)


def _get_nested(data: Dict[str, Any], key: str) -> Optional[str]:
    """Navigate nested dict with dot notation."""
    current: Any = data
    for part in key.split('.'):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def _read_locale_file(locale: str) -> Dict[str, Any]:
    locale_file = Path(_locale_path or config.GUARD_LOCALE_PATH) / f"{locale}.json"
    if not locale_file.is_file():
        return {}
    try:
        return json.loads(locale_file.read_text(encoding='utf-8'))
    except (json.JSONDecodeError, OSError) as e:
        logging.debug(f"[GUARD] Ignoring unreadable translation file {locale_file}: {e}")
        return {}


def _load_locale(locale: str) -> Dict[str, Any]:
    if locale not in _translations:
        _translations[locale] = _read_locale_file(locale)
    return _translations[locale]


def _lookup(key: str, locale: str) -> Optional[str]:
    for candidate in dict.fromkeys((locale, config.GUARD_LOCALE_FALLBACK)):
        template = _get_nested(_load_locale(candidate), key)
        if template is not None:
            return template
    return None


def __(key: str, parameters: Optional[Dict[str, Any]] = None,
      default: Optional[str] = None, locale: Optional[str] = None) -> str:
    """
    Translate `key` for the current locale, then the fallback locale, then `default`.

    Examples:
        __('validation.required')
        __('validation.min_length', {'name': 'x', 'length': 3})
        __('missing', default='Not found')
        __('validation.range', locale='es')
    """
    template = _lookup(key, locale or get_locale())
    text = str(template if template is not None else (default or key))
    if not parameters:
        return text
    try:
        return text.format(**parameters)
    except (KeyError, ValueError, IndexError):
        # Unknown placeholders: show the template as is
        return text


def set_locale(locale: str) -> None:
    _current_locale.set(locale)


def get_locale() -> str:
    return _current_locale.get() or config.GUARD_LOCALE_DEFAULT


def clear_cache() -> None:
    """Forget loaded translation files."""
    _translations.clear()


def set_locale_path(path: Optional[str]) -> None:
    """Override `GUARD_LOCALE_PATH` at runtime (None restores the configured path)."""
    global _locale_path
    _locale_path = path
    clear_cache()


def reset() -> None:
    set_locale_path(None)
    _current_locale.set(None)


trans = __
