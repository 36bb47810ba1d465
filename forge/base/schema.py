"""
Option schemas.

Each service type declares which option keys it *requires* and which extra
keys it *recognizes*.  Schemas are immutable pydantic models built once per
service type, usually through :class:`SchemaBuilder`::

    schema = (
        OptionSchema.builder()
        .requires("api_key")
        .recognizes("user", "region")
        .secrets("api_key")
        .build()
    )
"""

from __future__ import annotations

import enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

OptionKey = str


def normalize_key(key: Any) -> OptionKey:
    """Return the canonical string form of an option key.

    ``str`` keys are kept, enum members map to their ``name`` and anything
    else goes through ``str()``.
    """
    if isinstance(key, str):
        return key
    if isinstance(key, enum.Enum):
        return key.name
    return str(key)


def _as_keys(value: Any) -> Iterable[Any]:
    if value is None:
        return ()
    if isinstance(value, (str, enum.Enum)):
        return (value,)
    return value


def _dedupe(keys: Iterable[Any]) -> tuple[OptionKey, ...]:
    """Order-preserving de-duplication with key normalization."""
    seen: dict[OptionKey, None] = {}
    for key in keys:
        seen.setdefault(normalize_key(key), None)
    return tuple(seen)


class OptionSchema(BaseModel):
    """Required and recognized option keys for one service type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    required: tuple[OptionKey, ...] = Field(
        default=(), description="Keys that must resolve to a non-None value"
    )
    recognized: tuple[OptionKey, ...] = Field(
        default=(), description="Optional keys accepted without a warning"
    )
    secrets: tuple[OptionKey, ...] = Field(
        default=(), description="Keys masked when options are displayed"
    )

    @model_validator(mode="before")
    @classmethod
    def secrets_are_recognized(cls, values: Any) -> Any:
        """Secret keys count as recognized even when not declared as such."""
        if not isinstance(values, dict) or not values.get("secrets"):
            return values
        values = dict(values)
        values["recognized"] = [
            *_as_keys(values.get("recognized")),
            *_as_keys(values["secrets"]),
        ]
        return values

    @field_validator("required", "recognized", "secrets", mode="before")
    @classmethod
    def normalize_keys(cls, value: Any) -> tuple[OptionKey, ...]:
        return _dedupe(_as_keys(value))

    @property
    def known(self) -> frozenset[OptionKey]:
        """Every key that does not trigger an unrecognized-option warning."""
        return frozenset(self.required) | frozenset(self.recognized)

    @classmethod
    def builder(cls) -> SchemaBuilder:
        return SchemaBuilder()


class SchemaBuilder:
    """Chainable builder for :class:`OptionSchema`."""

    def __init__(self) -> None:
        self._required: list[Any] = []
        self._recognized: list[Any] = []
        self._secrets: list[Any] = []

    def requires(self, *keys: Any) -> SchemaBuilder:
        self._required.extend(keys)
        return self

    def recognizes(self, *keys: Any) -> SchemaBuilder:
        self._recognized.extend(keys)
        return self

    def secrets(self, *keys: Any) -> SchemaBuilder:
        self._secrets.extend(keys)
        return self

    def build(self) -> OptionSchema:
        return OptionSchema(
            required=self._required,
            recognized=self._recognized,
            secrets=self._secrets,
        )


__all__ = ["OptionKey", "OptionSchema", "SchemaBuilder", "normalize_key"]
