"""Mapping registry."""
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from config import app_config
from shapemap.mapper.mapping import MappingDefinition, TypeReference
from shapemap.validator.mapping_validator import MappingValidator

logger = logging.getLogger(__name__)


class MappingRegistry:
    """Registry of mapping definitions keyed by ``source=>destination``."""

    def __init__(self):
        """Initialize registry."""
        self.mappings: Dict[str, MappingDefinition] = {}

    def create_map(
        self,
        source_key: str,
        destination_key: str,
        source_type: Optional[TypeReference] = None,
        destination_type: Optional[TypeReference] = None,
    ) -> MappingDefinition:
        """Create and register a mapping, returning it for further configuration."""
        mapping = MappingDefinition(
            source_key=source_key,
            destination_key=destination_key,
            source_type=source_type,
            destination_type=destination_type,
        )
        self.register(mapping)
        return mapping

    def register(self, mapping: MappingDefinition) -> None:
        """
        Register a mapping definition.

        Args:
            mapping: Definition to store under its mapping key

        Raises:
            ValueError: If a different definition is already registered
                under the same key
        """
        key = mapping.mapping_key
        existing = self.mappings.get(key)

        if existing is None:
            self.mappings[key] = mapping
            logger.debug(f"Registered mapping {key}")
            return

        if existing != mapping:
            raise ValueError(f"Mapping conflict for {key}; already registered")

    def get(self, source_key: str, destination_key: str) -> MappingDefinition:
        """Get mapping by keys; raises KeyError when missing."""
        return self.mappings[f"{source_key}=>{destination_key}"]

    def keys(self) -> List[str]:
        """Registered mapping keys in insertion order."""
        return list(self.mappings.keys())

    def values(self) -> List[MappingDefinition]:
        """Registered mapping definitions in insertion order."""
        return list(self.mappings.values())

    def items(self) -> List[Tuple[str, MappingDefinition]]:
        """Key and definition pairs in insertion order."""
        return list(self.mappings.items())

    def __len__(self) -> int:
        """Number of registered mappings."""
        return len(self.mappings)

    def __iter__(self) -> Iterator[str]:
        """Iterate over mapping keys."""
        return iter(self.mappings)

    def __contains__(self, key: object) -> bool:
        """Check whether a mapping key is registered."""
        return key in self.mappings

    def assert_configuration_is_valid(self, strict_mode: Optional[bool] = None) -> None:
        """Validate all registered mappings, stopping at the first violation."""
        if strict_mode is None:
            strict_mode = app_config.validator.strict_mode

        MappingValidator.assert_configuration_is_valid(self, strict_mode)
