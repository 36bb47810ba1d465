"""
Process-wide real/mock toggle.

``mock()`` switches every factory that uses the default toggle over to the
Mock implementations; ``unmock()`` switches back.  Setting ``FORGE_MOCK``
to ``1``/``true``/``yes`` enables mocking when the module is first imported.
"""

from __future__ import annotations

import os
import threading

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class MockingToggle:
    """Thread-safe boolean flag."""

    def __init__(self, enabled: bool = False) -> None:
        self._lock = threading.Lock()
        self._enabled = bool(enabled)

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def is_enabled(self) -> bool:
        with self._lock:
            return self._enabled

    __call__ = is_enabled


mocking = MockingToggle(os.environ.get("FORGE_MOCK", "").strip().lower() in _TRUTHY)


def mock() -> None:
    """Enable mocking process-wide."""
    mocking.enable()


def unmock() -> None:
    """Disable mocking process-wide."""
    mocking.disable()


def is_mocking() -> bool:
    return mocking.is_enabled()


__all__ = ["MockingToggle", "mocking", "mock", "unmock", "is_mocking"]
