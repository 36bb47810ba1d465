"""
Option resolution.

:class:`OptionResolver` turns whatever the caller handed to a service
constructor into the final option mapping the Real/Mock implementation
receives:

1. A config object (``config_service`` is truthy) is returned untouched.
2. Keys are normalized to strings.
3. ``None`` values are dropped; a caller-side ``None`` also suppresses the
   global credential of the same name.
4. Caller options are merged over the global credentials snapshot.
5. Scalar values are coerced (``"true"`` -> ``True``, ``"42"`` -> ``42``).
6. Unrecognized keys are reported to the warning sink.
7. Missing required keys raise :class:`MissingRequiredOption`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from forge.base.coercion import coerce_options
from forge.base.credentials import CredentialProvider
from forge.base.exceptions import MissingRequiredOption
from forge.base.logger import LoggerWarningSink, WarningSink
from forge.base.schema import OptionKey, OptionSchema, normalize_key

logger = logging.getLogger("forge")

Credentials = CredentialProvider | Mapping[Any, Any] | None


def is_config_object(raw: Any) -> bool:
    """True if *raw* declares it can configure a service by itself."""
    if raw is None or isinstance(raw, dict):
        return False
    flag = getattr(raw, "config_service", False)
    if callable(flag):
        flag = flag()
    return flag is True


def _read_credentials(credentials: Credentials) -> dict[OptionKey, Any]:
    """Take one snapshot of the global credentials."""
    if credentials is None:
        return {}
    if isinstance(credentials, Mapping):
        snapshot = credentials
    else:
        snapshot = credentials.current_credentials()
    return {normalize_key(key): value for key, value in snapshot.items()}


class OptionResolver:
    """Merge, coerce and validate service options against a schema."""

    def __init__(self, warning_sink: WarningSink | None = None) -> None:
        self.warning_sink = warning_sink or LoggerWarningSink()

    def resolve(
        self,
        raw: Any,
        schema: OptionSchema,
        credentials: Credentials = None,
    ) -> Any:
        """Resolve *raw* options for a service described by *schema*.

        Args:
            raw: Caller options (mapping or None), or a config object.
            schema: The service's required/recognized keys.
            credentials: Global credentials provider or mapping. Not read
                when *raw* is a config object.

        Returns:
            The config object itself, or a new ``dict`` of resolved options.

        Raises:
            MissingRequiredOption: If a required key has no value.
            TypeError: If *raw* is neither a mapping nor a config object.
        """
        if is_config_object(raw):
            return raw
        if raw is not None and not isinstance(raw, Mapping):
            raise TypeError(
                f"Service options must be a mapping or a config object, got {type(raw).__name__}"
            )

        supplied: dict[OptionKey, Any] = {}
        suppressed: set[OptionKey] = set()
        for key, value in (raw or {}).items():
            key = normalize_key(key)
            if value is None:
                suppressed.add(key)
                supplied.pop(key, None)
            else:
                suppressed.discard(key)
                supplied[key] = value

        merged = {
            key: value
            for key, value in _read_credentials(credentials).items()
            if value is not None and key not in suppressed
        }
        merged.update(supplied)
        merged = coerce_options(merged)

        unrecognized = sorted(key for key in merged if key not in schema.known)
        if unrecognized:
            self._warn(f"Unrecognized arguments: {', '.join(unrecognized)}")

        missing = tuple(key for key in schema.required if merged.get(key) is None)
        if missing:
            raise MissingRequiredOption(missing)

        return merged

    def _warn(self, message: str) -> None:
        try:
            self.warning_sink.warn(message)
        except Exception:
            logger.warning("Warning sink failed to deliver: %s", message, exc_info=True)


def resolve_options(
    raw: Any,
    schema: OptionSchema,
    credentials: Credentials = None,
    warning_sink: WarningSink | None = None,
) -> Any:
    """Shortcut for ``OptionResolver(warning_sink).resolve(...)``."""
    return OptionResolver(warning_sink).resolve(raw, schema, credentials)


__all__ = ["OptionResolver", "resolve_options", "is_config_object"]
