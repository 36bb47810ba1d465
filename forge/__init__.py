"""Forge: option resolution and real/mock dispatch for service clients.

Declare a service type once, register it, then build clients with a
single call::

    from forge import OptionSchema, ServiceDefinition, register_service, create_service

    register_service(ServiceDefinition(
        "storage",
        OptionSchema.builder().requires("api_key").recognizes("region").build(),
        real=RealStorage,
        mock=MockStorage,
    ))
    storage = create_service("storage", {"api_key": "abc"})
"""

from .base import (
    MissingRequiredOption,
    OptionSchema,
    OptionsMixin,
    ServiceDefinition,
    StaticCredentials,
    FileCredentials,
    mock,
    unmock,
    is_mocking,
    set_default_credentials,
)
from .factory import ServiceFactory, create_service, register_service

__all__ = [
    "MissingRequiredOption",
    "OptionSchema",
    "OptionsMixin",
    "ServiceDefinition",
    "StaticCredentials",
    "FileCredentials",
    "mock",
    "unmock",
    "is_mocking",
    "set_default_credentials",
    "ServiceFactory",
    "create_service",
    "register_service",
]
