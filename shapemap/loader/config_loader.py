"""
Config Loader - Reads mapping registries from JSON files.

Type references are import strings (``package.module:Qualified.Name``)
resolved with importlib. Records are checked strictly: unknown or missing
keys are rejected.
"""
import importlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from shapemap.mapper.mapping import MappingDefinition, TypeReference
from shapemap.mapper.registry import MappingRegistry

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json",)

MAPPING_KEYS = ("source_key", "destination_key", "source_type", "destination_type", "properties")
SOURCE_PROPERTY_KEYS = ("name", "destination", "children")
DESTINATION_PROPERTY_KEYS = ("name", "destination_property_name", "ignore", "source_mapping")

MAPPING_VALUE_TYPES = {"source_key": (str,), "destination_key": (str,)}
TYPE_NAMES = {str: "a string", bool: "a boolean"}
SOURCE_PROPERTY_VALUE_TYPES = {"name": (str,)}
DESTINATION_PROPERTY_VALUE_TYPES = {
    "name": (str,),
    "destination_property_name": (str, type(None)),
    "ignore": (bool,),
    "source_mapping": (bool,),
}


def load_registry(path) -> MappingRegistry:
    """
    Load a mapping registry from a JSON file.

    Args:
        path: Path to JSON config file

    Returns:
        MappingRegistry: Registry with every declared mapping

    Raises:
        ValueError: If the file or any record in it is malformed
    """
    config_path = Path(path)
    suffix = config_path.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported config file extension {suffix!r}; expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError("Config root must be a JSON object")

    _check_keys(raw, "config", allowed=("mappings",), required=("mappings",))

    entries = raw["mappings"]
    if not isinstance(entries, list):
        raise ValueError("config.mappings must be a list")

    registry = MappingRegistry()
    for i, entry in enumerate(entries):
        registry.register(build_mapping(entry, f"mappings[{i}]"))

    logger.info(f"Loaded {len(registry)} mappings from {config_path}")
    return registry


def build_mapping(data: Any, field_name: str = "mapping") -> MappingDefinition:
    """Build a mapping definition from a config record."""
    if not isinstance(data, dict):
        raise ValueError(f"{field_name} must be an object")

    _check_keys(
        data,
        field_name,
        allowed=MAPPING_KEYS,
        required=("source_key", "destination_key"),
    )
    _check_value_types(data, field_name, MAPPING_VALUE_TYPES)

    properties = data.get("properties") or []
    if not isinstance(properties, list):
        raise ValueError(f"{field_name}.properties must be a list")

    for i, prop in enumerate(properties):
        _check_source_property(prop, f"{field_name}.properties[{i}]")

    return MappingDefinition.from_dict(
        data,
        source_type=resolve_type(data.get("source_type"), f"{field_name}.source_type"),
        destination_type=resolve_type(data.get("destination_type"), f"{field_name}.destination_type"),
    )


def resolve_type(reference: Optional[str], field_name: str = "type") -> Optional[TypeReference]:
    """
    Resolve an import string to a type reference.

    Args:
        reference: ``module:QualName`` string, or None
        field_name: Path used in error messages

    Returns:
        Optional[TypeReference]: Resolved callable, or None when unspecified
    """
    if reference is None:
        return None

    if not isinstance(reference, str) or ":" not in reference:
        raise ValueError(f"{field_name} must be an import string 'module:Name', got {reference!r}")

    module_name, _, qualname = reference.partition(":")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"{field_name}: cannot import module {module_name!r}: {e}") from e

    for attr in qualname.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError:
            raise ValueError(f"{field_name}: {reference!r} not found") from None

    if not callable(obj):
        raise ValueError(f"{field_name}: {reference!r} is not callable")

    logger.debug(f"Resolved {field_name} to {reference}")
    return obj


def _check_source_property(data: Any, field_name: str) -> None:
    """Check a source property record and its children."""
    if not isinstance(data, dict):
        raise ValueError(f"{field_name} must be an object")

    _check_keys(data, field_name, allowed=SOURCE_PROPERTY_KEYS, required=("name",))
    _check_value_types(data, field_name, SOURCE_PROPERTY_VALUE_TYPES)

    destination = data.get("destination")
    if destination is not None:
        if not isinstance(destination, dict):
            raise ValueError(f"{field_name}.destination must be an object")
        _check_keys(
            destination,
            f"{field_name}.destination",
            allowed=DESTINATION_PROPERTY_KEYS,
            required=("name",),
        )
        _check_value_types(destination, f"{field_name}.destination", DESTINATION_PROPERTY_VALUE_TYPES)

    children = data.get("children") or []
    if not isinstance(children, list):
        raise ValueError(f"{field_name}.children must be a list")

    for i, child in enumerate(children):
        _check_source_property(child, f"{field_name}.children[{i}]")


def _check_keys(
    data: Dict[str, Any],
    field_name: str,
    allowed: Iterable[str],
    required: Iterable[str],
) -> None:
    unknown = sorted(str(key) for key in data if key not in allowed)
    if unknown:
        raise ValueError(f"{field_name} has unknown keys: {unknown}")

    missing = sorted(key for key in required if key not in data)
    if missing:
        raise ValueError(f"{field_name} is missing required keys: {missing}")


def _check_value_types(
    data: Dict[str, Any],
    field_name: str,
    value_types: Dict[str, Tuple[type, ...]],
) -> None:
    for key, types in value_types.items():
        if key in data and not isinstance(data[key], types):
            expected = " or ".join("null" if t is type(None) else TYPE_NAMES[t] for t in types)
            raise ValueError(f"{field_name}.{key} must be {expected}, got {data[key]!r}")
