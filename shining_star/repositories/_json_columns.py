"""Helpers for JSON text columns (localized maps, id lists)."""

import json
import logging

logger = logging.getLogger(__name__)


def dump(value):
    return json.dumps(value, ensure_ascii=False)


def load(value, default):
    if value is None or value == '':
        return default
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        logger.warning(f"Could not decode JSON column value: {value!r}")
        return default
