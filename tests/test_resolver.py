from unittest.mock import MagicMock
import enum
import pytest

from forge.base.credentials import StaticCredentials
from forge.base.exceptions import MissingRequiredOption
from forge.base.resolver import OptionResolver, is_config_object, resolve_options
from forge.base.schema import OptionSchema


class Key(enum.Enum):
    generic_api_key = "generic_api_key"


class ConfigObject:
    def config_service(self):
        return True


class ConfigAttribute:
    config_service = True


@pytest.fixture
def schema():
    return OptionSchema.builder().requires("generic_api_key").recognizes("generic_user").build()


@pytest.fixture
def sink():
    return MagicMock()


@pytest.fixture
def resolver(sink):
    return OptionResolver(sink)


# --- config objects ---


class TestConfigObject:
    def test_detects_method(self):
        assert is_config_object(ConfigObject())

    def test_detects_attribute(self):
        assert is_config_object(ConfigAttribute())

    def test_plain_mapping_is_not_config(self):
        assert not is_config_object({"config_service": True})
        assert not is_config_object(None)

    def test_falsy_flag(self):
        obj = MagicMock()
        obj.config_service.return_value = False
        assert not is_config_object(obj)

    def test_returned_unchanged_without_reading_globals(self, resolver, schema, sink):
        config = ConfigObject()
        credentials = MagicMock()
        credentials.current_credentials.side_effect = AssertionError("Accessing global!")

        assert resolver.resolve(config, schema, credentials) is config
        credentials.current_credentials.assert_not_called()
        sink.warn.assert_not_called()


# --- normalization and pruning ---


class TestNormalization:
    def test_string_and_enum_keys_equivalent(self, resolver, schema):
        a = resolver.resolve({"generic_api_key": "abc"}, schema)
        b = resolver.resolve({Key.generic_api_key: "abc"}, schema)
        assert a == b == {"generic_api_key": "abc"}

    def test_removes_none_values(self, resolver, schema):
        result = resolver.resolve({"generic_api_key": "abc", "generic_user": None}, schema)
        assert "generic_user" not in result

    def test_none_suppresses_global(self, resolver, schema):
        result = resolver.resolve(
            {"generic_api_key": "abc", "generic_user": None},
            schema,
            {"generic_user": "alice"},
        )
        assert result == {"generic_api_key": "abc"}

    def test_none_global_values_dropped(self, resolver, schema):
        result = resolver.resolve({"generic_api_key": "abc"}, schema, {"generic_user": None})
        assert result == {"generic_api_key": "abc"}

    def test_raw_not_mutated(self, resolver, schema):
        raw = {"generic_api_key": "3421", "generic_user": None}
        resolver.resolve(raw, schema)
        assert raw == {"generic_api_key": "3421", "generic_user": None}

    def test_rejects_non_mapping(self, resolver, schema):
        with pytest.raises(TypeError, match="mapping or a config object"):
            resolver.resolve(["generic_api_key"], schema)


# --- coercion ---


class TestCoercion:
    def test_integer(self, resolver, schema):
        assert resolver.resolve({"generic_api_key": "3421"}, schema)["generic_api_key"] == 3421

    def test_true(self, resolver, schema):
        assert resolver.resolve({"generic_api_key": "true"}, schema)["generic_api_key"] is True

    def test_false(self, resolver, schema):
        assert resolver.resolve({"generic_api_key": "false"}, schema)["generic_api_key"] is False

    def test_connection_options_preserved(self, resolver, sink):
        schema = OptionSchema(required=["generic_api_key"], recognized=["connection_options"])
        headers = {"User-Agent": "Generic Client", "X-Count": "3"}
        result = resolver.resolve(
            {"generic_api_key": "1234", "connection_options": {"headers": headers}},
            schema,
        )
        assert result["connection_options"]["headers"] is headers
        sink.warn.assert_not_called()

    def test_global_values_coerced(self, resolver, schema):
        result = resolver.resolve({}, schema, {"generic_api_key": "12"})
        assert result["generic_api_key"] == 12


# --- merging with global credentials ---


class TestGlobalMerge:
    def test_uses_globals_when_no_options(self, resolver, schema):
        globals_ = {"generic_user": "alice", "generic_api_key": "alice"}
        assert resolver.resolve(None, schema, globals_) == globals_
        assert resolver.resolve({}, schema, globals_) == globals_

    def test_caller_wins(self, resolver, schema):
        result = resolver.resolve(
            {"generic_user": "alice"},
            schema,
            {"generic_user": "bob", "generic_api_key": "alice"},
        )
        assert result == {"generic_user": "alice", "generic_api_key": "alice"}

    def test_provider_read_once(self, resolver, schema):
        credentials = MagicMock()
        credentials.current_credentials.return_value = {"generic_api_key": "k"}
        resolver.resolve({"generic_user": "u"}, schema, credentials)
        credentials.current_credentials.assert_called_once_with()

    def test_static_provider(self, resolver, schema):
        result = resolver.resolve({}, schema, StaticCredentials({"generic_api_key": "k"}))
        assert result == {"generic_api_key": "k"}

    def test_shared_profile_keys_kept_and_reported(self, resolver, schema, sink):
        shared = StaticCredentials({"generic_api_key": "k", "other_service_token": "t"})
        result = resolver.resolve({}, schema, shared)
        assert result == {"generic_api_key": "k", "other_service_token": "t"}
        sink.warn.assert_called_once_with("Unrecognized arguments: other_service_token")

    def test_globals_not_mutated(self, resolver, schema):
        globals_ = {"generic_api_key": "alice", "generic_user": "bob"}
        resolver.resolve({"generic_user": None}, schema, globals_)
        assert globals_ == {"generic_api_key": "alice", "generic_user": "bob"}


# --- validation and warnings ---


class TestValidation:
    def test_missing_required(self, resolver, schema):
        with pytest.raises(MissingRequiredOption, match="generic_api_key") as exc:
            resolver.resolve({}, schema)
        assert exc.value.missing == ("generic_api_key",)

    def test_missing_is_value_error(self, resolver, schema):
        with pytest.raises(ValueError):
            resolver.resolve({"generic_user": "bob"}, schema)

    def test_none_required_counts_as_missing(self, resolver, schema):
        with pytest.raises(MissingRequiredOption):
            resolver.resolve({"generic_api_key": None}, schema, {"generic_api_key": "alice"})

    def test_lists_all_missing_in_declaration_order(self, resolver):
        schema = OptionSchema(required=["zeta", "alpha"])
        with pytest.raises(MissingRequiredOption, match="Missing required arguments: zeta, alpha"):
            resolver.resolve({}, schema)

    def test_warns_for_unrecognized(self, resolver, schema, sink):
        result = resolver.resolve(
            {"generic_api_key": "abc", "bad_option": "bad value", "another": 1},
            schema,
        )
        assert result["bad_option"] == "bad value"
        sink.warn.assert_called_once_with("Unrecognized arguments: another, bad_option")

    def test_no_warning_for_known(self, resolver, schema, sink):
        resolver.resolve({"generic_api_key": "abc", "generic_user": "bob"}, schema)
        sink.warn.assert_not_called()

    def test_warning_precedes_missing_error(self, resolver, schema, sink):
        with pytest.raises(MissingRequiredOption):
            resolver.resolve({"bad_option": 1}, schema)
        sink.warn.assert_called_once_with("Unrecognized arguments: bad_option")

    def test_failing_sink_does_not_abort(self, schema):
        sink = MagicMock()
        sink.warn.side_effect = RuntimeError("sink down")
        result = OptionResolver(sink).resolve({"generic_api_key": "abc", "bad": 1}, schema)
        assert result == {"generic_api_key": "abc", "bad": 1}


class TestResolveOptions:
    def test_shortcut(self, schema, sink):
        result = resolve_options({"generic_api_key": "7"}, schema, {"generic_user": "u"}, sink)
        assert result == {"generic_api_key": 7, "generic_user": "u"}
