"""Service definitions and the instance interface shared by Real and Mock."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol, runtime_checkable

from forge.base.exceptions import ServiceDefinitionError
from forge.base.schema import OptionSchema

if TYPE_CHECKING:
    from forge.factory import ServiceFactory

REDACTED = "***"


@runtime_checkable
class ServiceInstance(Protocol):
    """Anything built by the factory: exposes the options it was created with."""

    @property
    def options(self) -> Any: ...


class OptionsMixin:
    """Stores the resolved options and exposes them read-only.

    Real and Mock implementations can use this instead of writing the same
    constructor twice::

        class Real(OptionsMixin):
            def list_buckets(self): ...

        class Mock(OptionsMixin):
            def list_buckets(self): return []
    """

    def __init__(self, options: Any) -> None:
        self._options = options

    @property
    def options(self) -> Any:
        return self._options


class ServiceDefinition:
    """Static description of one service type.

    Attributes:
        name: Registry name (e.g. 'storage').
        schema: Required/recognized option keys.
        real: Callable(options) building the networked implementation.
        mock: Callable(options) building the simulated implementation.
    """

    def __init__(
        self,
        name: str,
        schema: OptionSchema,
        real: Callable[[Any], Any],
        mock: Callable[[Any], Any],
    ) -> None:
        if not name:
            raise ServiceDefinitionError("Service name must be a non-empty string")
        for label, impl in (("real", real), ("mock", mock)):
            if not callable(impl):
                raise ServiceDefinitionError(
                    f"Service '{name}': {label} implementation must be callable, got {impl!r}"
                )
        self.name = name
        self.schema = schema
        self.real = real
        self.mock = mock

    def implementation(self, mocking: bool) -> Callable[[Any], Any]:
        return self.mock if mocking else self.real

    def redact(self, options: Mapping[str, Any]) -> dict[str, Any]:
        """Copy of *options* with secret values masked, for display."""
        return {
            key: REDACTED if key in self.schema.secrets else value
            for key, value in options.items()
        }

    def new(self, raw: Any = None, factory: ServiceFactory | None = None) -> Any:
        """Build an instance through *factory* (a default one if omitted)."""
        if factory is None:
            from forge.factory import ServiceFactory  # avoid import cycle

            factory = ServiceFactory()
        return factory.create(self, raw)

    def __repr__(self) -> str:
        return f"ServiceDefinition(name={self.name!r}, schema={self.schema!r})"


__all__ = ["ServiceInstance", "OptionsMixin", "ServiceDefinition", "REDACTED"]
