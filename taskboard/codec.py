"""Conversion between a board's list tree and its stored column value.

Both directions are best effort: a corrupted or missing document decodes to
an empty tree, and anything that cannot be stored encodes as an empty array.
Neither function raises.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

EMPTY = "[]"


def decode_lists(raw: Any, log: Optional[logging.Logger] = None) -> list:
    log = log or logger
    if raw is None or raw == "" or raw == b"":
        return []
    if isinstance(raw, list):
        return raw
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as exc:
        log.warning("unreadable lists document, using empty tree: %s", exc)
        return []
    if not isinstance(value, list):
        log.warning("lists document is a %s, not an array; using empty tree", type(value).__name__)
        return []
    return value


def encode_lists(value: Any, log: Optional[logging.Logger] = None) -> str:
    log = log or logger
    if value is None:
        return EMPTY
    if not isinstance(value, (list, tuple)):
        log.warning("refusing to store a %s as lists; storing empty tree", type(value).__name__)
        return EMPTY
    try:
        return json.dumps(list(value), allow_nan=False)
    except (TypeError, ValueError) as exc:
        log.warning("lists are not serializable, storing empty tree: %s", exc)
        return EMPTY
