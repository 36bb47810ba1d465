"""Service factory and registry.

:class:`ServiceFactory` resolves options for a :class:`ServiceDefinition`
and builds its Real or Mock implementation.  Its collaborators (global
credentials, the mocking flag, the warning sink) are injected, defaulting
to the process-wide ones.

Service types are registered by name so callers can use the single
entry-point :func:`create_service`::

    from forge import create_service

    storage = create_service("storage", {"api_key": "abc"})
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from forge.base.credentials import get_default_credentials
from forge.base.exceptions import UnknownServiceError
from forge.base.logger import ForgeLogger, LoggerWarningSink, WarningSink, forge_logger
from forge.base.mocking import is_mocking as default_is_mocking
from forge.base.resolver import Credentials, OptionResolver
from forge.base.service import ServiceDefinition


class ServiceFactory:
    """Build Real or Mock service instances from raw options.

    Args:
        credentials: Global credentials provider or mapping. Defaults to the
            process-wide provider, looked up on every call.
        is_mocking: Zero-argument callable returning the mocking flag.
        warning_sink: Receiver for unrecognized-option warnings.
        logger: Structured logger for construction events.
    """

    def __init__(
        self,
        credentials: Credentials = None,
        is_mocking: Callable[[], bool] | None = None,
        warning_sink: WarningSink | None = None,
        logger: ForgeLogger | None = None,
    ) -> None:
        self._credentials = credentials
        self._is_mocking = is_mocking or default_is_mocking
        self._warning_sink = warning_sink
        self.logger = logger or forge_logger

    @property
    def credentials(self) -> Credentials:
        if self._credentials is None:
            return get_default_credentials()
        return self._credentials

    def create(self, definition: ServiceDefinition, raw: Any = None) -> Any:
        """Resolve *raw* against *definition* and construct the service.

        The mocking flag is read once, before resolution, so a concurrent
        ``mock()``/``unmock()`` cannot change the variant mid-call.

        Raises:
            MissingRequiredOption: If a required option has no value.
        """
        mocking = bool(self._is_mocking())
        mode = "mock" if mocking else "real"

        sink = self._warning_sink or LoggerWarningSink(self.logger, service=definition.name)
        options = OptionResolver(sink).resolve(raw, definition.schema, self.credentials)

        try:
            instance = definition.implementation(mocking)(options)
        except Exception:
            self.logger.error(
                f"Failed to construct {definition.name} service",
                service=definition.name,
                operation="create",
                mode=mode,
                exc_info=True,
            )
            raise

        if self.logger.logger.isEnabledFor(logging.DEBUG):
            shown = definition.redact(options) if isinstance(options, dict) else type(options).__name__
            self.logger.debug(
                f"Created {definition.name} service with options {shown}",
                service=definition.name,
                operation="create",
                mode=mode,
            )
        return instance


# ── Registry ──────────────────────────────────────────────────────────
_SERVICE_REGISTRY: dict[str, ServiceDefinition] = {}
_registry_lock = threading.Lock()


def register_service(definition: ServiceDefinition) -> ServiceDefinition:
    """Register *definition* under its name, replacing any previous one."""
    with _registry_lock:
        _SERVICE_REGISTRY[definition.name] = definition
    return definition


def unregister_service(name: str) -> None:
    with _registry_lock:
        if _SERVICE_REGISTRY.pop(name, None) is None:
            raise UnknownServiceError(f"Unsupported service '{name}'")


def get_service(name: str) -> ServiceDefinition:
    with _registry_lock:
        definition = _SERVICE_REGISTRY.get(name)
    if definition is None:
        raise UnknownServiceError(f"Unsupported service '{name}'")
    return definition


def registered_services() -> list[str]:
    with _registry_lock:
        return sorted(_SERVICE_REGISTRY)


def create_service(
    service_name: str,
    options: Any = None,
    *,
    credentials: Credentials = None,
    is_mocking: Callable[[], bool] | None = None,
    warning_sink: WarningSink | None = None,
) -> Any:
    """
    Create a registered service by name.
    Args:
        service_name: The registered service name (e.g. 'storage').
        options: Raw options mapping, a config object, or None.
        credentials: Overrides the process-wide credentials provider.
        is_mocking: Overrides the process-wide mocking flag.
        warning_sink: Overrides the default logging warning sink.
    Returns:
        A Real or Mock instance of the requested service.
    Raises:
        UnknownServiceError: If no service is registered under that name.
        MissingRequiredOption: If a required option has no value.
    """
    definition = get_service(service_name)
    factory = ServiceFactory(credentials, is_mocking, warning_sink)
    return factory.create(definition, options)


__all__ = [
    "ServiceFactory",
    "register_service",
    "unregister_service",
    "get_service",
    "registered_services",
    "create_service",
]
