"""
Type coercion for raw option values.

Options frequently arrive as strings (environment variables, CLI flags,
credential files).  :func:`coerce` turns the handful of literal patterns we
understand into typed values and leaves everything else alone.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

_LITERALS: dict[str, bool] = {
    "true": True,
    "false": False,
}


def coerce(value: Any) -> Any:
    """Coerce a single scalar option value.

    ``"true"``/``"false"`` become booleans, signed or unsigned digit strings
    become ``int``.  Any other value (including non-strings) is returned
    unchanged; this function never raises.

    Args:
        value: Raw option value.

    Returns:
        The coerced value, or *value* itself.
    """
    if not isinstance(value, str):
        return value
    if value in _LITERALS:
        return _LITERALS[value]
    if _INTEGER_RE.fullmatch(value):
        return int(value)
    return value


def coerce_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *options* with every top-level scalar coerced.

    Mapping values (e.g. ``connection_options``) are kept verbatim.
    """
    return {
        key: value if isinstance(value, Mapping) else coerce(value)
        for key, value in options.items()
    }


__all__ = ["coerce", "coerce_options"]
