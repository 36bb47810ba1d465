"""
Forge exception hierarchy.

Every error raised by the resolver or the factory inherits from
:class:`ForgeError`. Caller-facing argument problems additionally inherit
from the matching built-in (``ValueError``/``TypeError``) so existing
``except ValueError`` handlers keep working.
"""


# ── Base ──────────────────────────────────────────────────────────────
class ForgeError(Exception):
    """Root exception for all Forge errors."""


# ── Options ───────────────────────────────────────────────────────────
class MissingRequiredOption(ForgeError, ValueError):
    """One or more required options are absent (or None) after merging.

    Attributes:
        missing: The missing option keys, in schema declaration order.
    """

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"Missing required arguments: {', '.join(self.missing)}")


# ── Services ──────────────────────────────────────────────────────────
class UnknownServiceError(ForgeError, ValueError):
    """No service definition is registered under the requested name."""


class ServiceDefinitionError(ForgeError, TypeError):
    """A service definition is malformed (e.g. Real/Mock not callable)."""


# ── Credentials ───────────────────────────────────────────────────────
class CredentialsError(ForgeError):
    """Global credentials could not be loaded."""
