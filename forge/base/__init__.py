"""Core building blocks: option schemas, coercion, credentials and resolution.

Import these to declare your own service types or to resolve options
without going through the factory.
"""

from .coercion import coerce, coerce_options
from .credentials import (
    CredentialProvider,
    CredentialSettings,
    FileCredentials,
    StaticCredentials,
    default_credentials,
    get_default_credentials,
    reset_default_credentials,
    set_default_credentials,
)
from .exceptions import (
    CredentialsError,
    ForgeError,
    MissingRequiredOption,
    ServiceDefinitionError,
    UnknownServiceError,
)
from .logger import ForgeLogger, LoggerWarningSink, WarningSink, forge_logger
from .mocking import MockingToggle, is_mocking, mock, mocking, unmock
from .resolver import OptionResolver, is_config_object, resolve_options
from .schema import OptionKey, OptionSchema, SchemaBuilder, normalize_key
from .service import OptionsMixin, ServiceDefinition, ServiceInstance


__all__ = [
    "coerce",
    "coerce_options",
    "CredentialProvider",
    "CredentialSettings",
    "FileCredentials",
    "StaticCredentials",
    "default_credentials",
    "get_default_credentials",
    "reset_default_credentials",
    "set_default_credentials",
    "CredentialsError",
    "ForgeError",
    "MissingRequiredOption",
    "ServiceDefinitionError",
    "UnknownServiceError",
    "ForgeLogger",
    "LoggerWarningSink",
    "WarningSink",
    "forge_logger",
    "MockingToggle",
    "is_mocking",
    "mock",
    "mocking",
    "unmock",
    "OptionResolver",
    "is_config_object",
    "resolve_options",
    "OptionKey",
    "OptionSchema",
    "SchemaBuilder",
    "normalize_key",
    "OptionsMixin",
    "ServiceDefinition",
    "ServiceInstance",
]
