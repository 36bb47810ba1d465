"""
Process-wide default credentials.

The resolver merges caller options over a snapshot of global credentials
obtained from a :class:`CredentialProvider`.  Two providers ship here:

* :class:`StaticCredentials`: an in-memory mapping set up by the hosting
  application (the process-wide :data:`default_credentials` is one).
* :class:`FileCredentials`: a JSON file holding named credential
  profiles, located through :class:`CredentialSettings`.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from forge.base.exceptions import CredentialsError
from forge.base.schema import OptionKey, normalize_key

DEFAULT_CREDENTIALS_FILE = "~/.forge.json"
DEFAULT_PROFILE = "default"


@runtime_checkable
class CredentialProvider(Protocol):
    """Source of global default credentials."""

    def current_credentials(self) -> Mapping[OptionKey, Any]:
        """Return a consistent snapshot of the current credentials."""
        ...


def _normalize(mapping: Mapping[Any, Any]) -> dict[OptionKey, Any]:
    return {normalize_key(key): value for key, value in mapping.items()}


class StaticCredentials:
    """Thread-safe in-memory credentials.

    Updates swap in a whole new snapshot under a lock, so readers never see
    a half-applied change.
    """

    def __init__(self, credentials: Mapping[Any, Any] | None = None) -> None:
        self._lock = threading.Lock()
        self._snapshot: Mapping[OptionKey, Any] = MappingProxyType(_normalize(credentials or {}))

    def current_credentials(self) -> Mapping[OptionKey, Any]:
        with self._lock:
            return dict(self._snapshot)

    def replace(self, credentials: Mapping[Any, Any]) -> None:
        """Replace every stored credential with *credentials*."""
        snapshot = MappingProxyType(_normalize(credentials))
        with self._lock:
            self._snapshot = snapshot

    def update(self, **credentials: Any) -> None:
        """Add or overwrite individual credentials."""
        with self._lock:
            merged = dict(self._snapshot)
            merged.update(_normalize(credentials))
            self._snapshot = MappingProxyType(merged)

    def clear(self) -> None:
        self.replace({})


class CredentialSettings(BaseModel):
    """Where :class:`FileCredentials` looks for credentials.

    Values are resolved in order:
    1. Explicit values passed to the model.
    2. Environment variables (FORGE_RC, FORGE_CREDENTIAL).
    3. Defaults (``~/.forge.json`` and the ``default`` profile).
    """

    model_config = ConfigDict(extra="forbid")

    path: str | None = Field(default=None, description="Path to the JSON credentials file")
    credential: str | None = Field(default=None, description="Profile name inside the file")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for unset fields."""
        values = dict(values)
        if not values.get("path"):
            values["path"] = os.environ.get("FORGE_RC") or DEFAULT_CREDENTIALS_FILE
        if not values.get("credential"):
            values["credential"] = os.environ.get("FORGE_CREDENTIAL") or DEFAULT_PROFILE
        return values

    @property
    def file_path(self) -> Path:
        return Path(self.path or DEFAULT_CREDENTIALS_FILE).expanduser()

    @property
    def explicit_profile(self) -> bool:
        return self.credential != DEFAULT_PROFILE


class FileCredentials:
    """Credentials read from a JSON file of named profiles.

    The file is a JSON object mapping profile names to credential objects::

        {"default": {"api_key": "abc"}, "staging": {"api_key": "xyz"}}

    The file is read lazily on first use and cached; call :meth:`reload` to
    pick up changes.  A missing file yields empty credentials.

    Every key in the selected profile is merged into the options of every
    service built with these credentials, and keys a service does not
    recognize are reported as unrecognized arguments on each construction.
    Give services with different option sets their own profiles.
    """

    def __init__(self, settings: CredentialSettings | None = None) -> None:
        self.settings = settings or CredentialSettings()
        self._lock = threading.Lock()
        self._snapshot: Mapping[OptionKey, Any] | None = None

    def current_credentials(self) -> Mapping[OptionKey, Any]:
        with self._lock:
            if self._snapshot is None:
                self._snapshot = MappingProxyType(self._load())
            return dict(self._snapshot)

    def reload(self) -> None:
        with self._lock:
            self._snapshot = None

    def _load(self) -> dict[OptionKey, Any]:
        path = self.settings.file_path
        if not path.exists():
            if self.settings.explicit_profile:
                raise CredentialsError(
                    f"Credential profile '{self.settings.credential}' requested "
                    f"but {path} does not exist"
                )
            return {}
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CredentialsError(f"Invalid credentials file {path}: {e}") from e
        if not isinstance(document, dict):
            raise CredentialsError(f"Credentials file {path} must contain a JSON object")

        profile = document.get(self.settings.credential)
        if profile is None:
            if self.settings.explicit_profile:
                raise CredentialsError(
                    f"Credential profile '{self.settings.credential}' not found in {path}"
                )
            return {}
        if not isinstance(profile, dict):
            raise CredentialsError(
                f"Credential profile '{self.settings.credential}' in {path} must be an object"
            )
        return _normalize(profile)


# Process-wide default provider used by factories created without one.
default_credentials = StaticCredentials()
_default_provider: CredentialProvider = default_credentials
_default_lock = threading.Lock()


def get_default_credentials() -> CredentialProvider:
    with _default_lock:
        return _default_provider


def set_default_credentials(source: CredentialProvider | Mapping[Any, Any]) -> CredentialProvider:
    """Install the provider used by default factories.

    Args:
        source: A :class:`CredentialProvider`, or a mapping which is wrapped
            in :class:`StaticCredentials`.

    Returns:
        The installed provider.
    """
    global _default_provider
    provider = source if isinstance(source, CredentialProvider) else StaticCredentials(source)
    with _default_lock:
        _default_provider = provider
    return provider


def reset_default_credentials() -> None:
    """Restore :data:`default_credentials` (emptied) as the default provider."""
    default_credentials.clear()
    set_default_credentials(default_credentials)


__all__ = [
    "CredentialProvider",
    "StaticCredentials",
    "CredentialSettings",
    "FileCredentials",
    "default_credentials",
    "get_default_credentials",
    "set_default_credentials",
    "reset_default_credentials",
]
