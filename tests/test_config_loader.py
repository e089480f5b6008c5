"""
Unit tests for the JSON config loader

Tests:
- load_registry: file handling, record checks, type resolution
- resolve_type: import strings
"""

import json
from dataclasses import dataclass

import pytest

from shapemap.loader.config_loader import build_mapping, load_registry, resolve_type
from shapemap.validator import MappingValidator, IgnoredMemberStillPresentError


@dataclass
class Account:
    id: int = 0
    password: str = ""


@dataclass
class AccountDto:
    id: int = 0


class Namespace:
    @dataclass
    class Nested:
        id: int = 0


NOT_CALLABLE = 42


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def account_config():
    """Config with one mapping ignoring the password"""
    return {
        "mappings": [
            {
                "source_key": "Account",
                "destination_key": "AccountDto",
                "source_type": f"{__name__}:Account",
                "destination_type": f"{__name__}:AccountDto",
                "properties": [
                    {
                        "name": "password",
                        "destination": {
                            "name": "password",
                            "ignore": True,
                            "source_mapping": True,
                        },
                    }
                ],
            },
            {
                "source_key": "Legacy",
                "destination_key": "LegacyDto",
            },
        ]
    }


@pytest.fixture
def write_config(tmp_path):
    """Write a config dict to a JSON file"""

    def _write(data, name="mappings.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


# ============================================================================
# TEST: load_registry
# ============================================================================


class TestLoadRegistry:
    """Tests for load_registry"""

    def test_load(self, account_config, write_config):
        """Test mappings and type references are loaded"""
        registry = load_registry(write_config(account_config))

        assert registry.keys() == ["Account=>AccountDto", "Legacy=>LegacyDto"]

        account = registry.get("Account", "AccountDto")
        assert account.source_type is Account
        assert account.destination_type is AccountDto
        assert account.properties[0].destination.ignore is True

        legacy = registry.get("Legacy", "LegacyDto")
        assert legacy.source_type is None
        assert legacy.properties == []

    def test_loaded_registry_validates(self, account_config, write_config):
        """Test a loaded registry runs through the validator"""
        registry = load_registry(write_config(account_config))

        MappingValidator.assert_configuration_is_valid(registry, strict_mode=False)

    def test_loaded_registry_detects_violation(self, account_config, write_config):
        """Test violations surface from a loaded registry"""
        account_config["mappings"][0]["destination_type"] = f"{__name__}:Account"
        registry = load_registry(write_config(account_config))

        with pytest.raises(IgnoredMemberStillPresentError):
            MappingValidator.assert_configuration_is_valid(registry, strict_mode=False)

    def test_unsupported_extension(self, tmp_path):
        """Test only JSON files are accepted"""
        path = tmp_path / "mappings.yaml"
        path.write_text("mappings: []\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported config file extension"):
            load_registry(path)

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON"""
        path = tmp_path / "mappings.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_registry(path)

    def test_root_must_be_object(self, write_config):
        """Test non-object root"""
        with pytest.raises(ValueError, match="Config root must be a JSON object"):
            load_registry(write_config([1, 2, 3]))

    def test_mappings_must_be_list(self, write_config):
        """Test mappings type"""
        with pytest.raises(ValueError, match="config.mappings must be a list"):
            load_registry(write_config({"mappings": {}}))

    def test_unknown_root_key(self, write_config):
        """Test unknown keys are rejected"""
        with pytest.raises(ValueError, match=r"config has unknown keys: \['extra'\]"):
            load_registry(write_config({"mappings": [], "extra": 1}))

    def test_missing_required_key(self, write_config):
        """Test required mapping keys"""
        data = {"mappings": [{"source_key": "a"}]}

        with pytest.raises(ValueError, match=r"mappings\[0\] is missing required keys: \['destination_key'\]"):
            load_registry(write_config(data))

    def test_unknown_destination_key(self, account_config, write_config):
        """Test nested records are checked"""
        account_config["mappings"][0]["properties"][0]["destination"]["mapFrom"] = "x"

        with pytest.raises(
            ValueError,
            match=r"mappings\[0\]\.properties\[0\]\.destination has unknown keys: \['mapFrom'\]",
        ):
            load_registry(write_config(account_config))

    def test_ignore_must_be_boolean(self, account_config, write_config):
        """Test a quoted boolean is rejected instead of read as true"""
        account_config["mappings"][0]["properties"][0]["destination"]["ignore"] = "false"

        with pytest.raises(
            ValueError,
            match=r"mappings\[0\]\.properties\[0\]\.destination\.ignore must be a boolean",
        ):
            load_registry(write_config(account_config))

    def test_source_mapping_must_be_boolean(self, account_config, write_config):
        """Test source_mapping accepts JSON booleans only"""
        account_config["mappings"][0]["properties"][0]["destination"]["source_mapping"] = 1

        with pytest.raises(ValueError, match=r"destination\.source_mapping must be a boolean"):
            load_registry(write_config(account_config))

    def test_property_name_must_be_string(self, account_config, write_config):
        """Test non-string member names"""
        account_config["mappings"][0]["properties"][0]["name"] = 42

        with pytest.raises(ValueError, match=r"properties\[0\]\.name must be a string, got 42"):
            load_registry(write_config(account_config))

    def test_destination_name_must_be_string(self, account_config, write_config):
        """Test non-string destination names"""
        account_config["mappings"][0]["properties"][0]["destination"]["name"] = ["secret"]

        with pytest.raises(ValueError, match=r"destination\.name must be a string"):
            load_registry(write_config(account_config))

    def test_display_name_may_be_null(self, account_config, write_config):
        """Test destination_property_name accepts null"""
        account_config["mappings"][0]["properties"][0]["destination"]["destination_property_name"] = None

        registry = load_registry(write_config(account_config))

        assert len(registry) == 2

    def test_duplicate_conflicting_mapping(self, account_config, write_config):
        """Test conflicting definitions under one key"""
        account_config["mappings"].append(
            {"source_key": "Account", "destination_key": "AccountDto"}
        )

        with pytest.raises(ValueError, match="Mapping conflict"):
            load_registry(write_config(account_config))


# ============================================================================
# TEST: build_mapping / resolve_type
# ============================================================================


class TestBuildMapping:
    """Tests for build_mapping"""

    def test_children(self):
        """Test nested children are built"""
        mapping = build_mapping(
            {
                "source_key": "a",
                "destination_key": "b",
                "properties": [
                    {
                        "name": "address",
                        "children": [
                            {"name": "street", "destination": {"name": "street"}},
                        ],
                    }
                ],
            }
        )

        child = mapping.properties[0].children[0]
        assert child.destination.name == "street"
        assert child.destination.source_mapping is False

    def test_children_must_be_objects(self):
        """Test malformed child record"""
        data = {
            "source_key": "a",
            "destination_key": "b",
            "properties": [{"name": "address", "children": ["street"]}],
        }

        with pytest.raises(ValueError, match=r"mapping\.properties\[0\]\.children\[0\] must be an object"):
            build_mapping(data)


class TestResolveType:
    """Tests for resolve_type"""

    def test_none(self):
        assert resolve_type(None) is None

    def test_class(self):
        assert resolve_type(f"{__name__}:Account") is Account

    def test_nested_qualname(self):
        assert resolve_type(f"{__name__}:Namespace.Nested") is Namespace.Nested

    def test_missing_separator(self):
        with pytest.raises(ValueError, match="must be an import string"):
            resolve_type("Account")

    def test_unknown_module(self):
        with pytest.raises(ValueError, match="cannot import module"):
            resolve_type("no_such_module_for_shapemap:Account")

    def test_unknown_attribute(self):
        with pytest.raises(ValueError, match="not found"):
            resolve_type(f"{__name__}:Missing")

    def test_not_callable(self):
        with pytest.raises(ValueError, match="is not callable"):
            resolve_type(f"{__name__}:NOT_CALLABLE")
