"""
Localized text helpers.

Catalog names and descriptions are stored as {'en': ..., 'ru': ..., 'es': ...}
maps; English is always present and is the fallback.
"""

from typing import Any
from flask import session, current_app


def current_language() -> str:
    """Language stored in the session, or the configured default."""
    lang = session.get('lang')
    if lang in current_app.config.get('SUPPORTED_LANGUAGES', ('en',)):
        return lang
    return current_app.config.get('DEFAULT_LANGUAGE', 'en')


def localize(value: Any, lang: str = None) -> str:
    """Pick the text for lang from a localized map, falling back to English."""
    if not isinstance(value, dict):
        return '' if value is None else str(value)
    lang = lang or current_language()
    return value.get(lang) or value.get('en') or ''
