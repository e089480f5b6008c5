"""Mapping definition models."""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from shapemap.schema.members import get_type_path


TypeReference = Callable[[], Any]


@dataclass
class DestinationPropertyRule:
    """Resolved target of a configured property."""

    name: str
    destination_property_name: Optional[str] = None  # display name used in messages
    ignore: bool = False
    source_mapping: bool = False  # True when configured from the source side

    def __post_init__(self):
        if self.destination_property_name is None:
            self.destination_property_name = self.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "destination_property_name": self.destination_property_name,
            "ignore": self.ignore,
            "source_mapping": self.source_mapping,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DestinationPropertyRule":
        """Build from dictionary."""
        return cls(
            name=data["name"],
            destination_property_name=data.get("destination_property_name"),
            ignore=bool(data.get("ignore", False)),
            source_mapping=bool(data.get("source_mapping", False)),
        )


@dataclass
class SourcePropertyRule:
    """Explicit configuration for one source-side property.

    A rule either points straight at a ``destination`` or fans out into
    ``children`` (flattening a nested object into several targets).
    """

    name: str
    destination: Optional[DestinationPropertyRule] = None
    children: List["SourcePropertyRule"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "destination": self.destination.to_dict() if self.destination else None,
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SourcePropertyRule":
        """Build from dictionary."""
        destination = data.get("destination")
        return cls(
            name=data["name"],
            destination=DestinationPropertyRule.from_dict(destination) if destination else None,
            children=[cls.from_dict(child) for child in data.get("children") or []],
        )


@dataclass
class MappingDefinition:
    """A configured transformation from a source shape to a destination shape."""

    source_key: str
    destination_key: str
    source_type: Optional[TypeReference] = None
    destination_type: Optional[TypeReference] = None
    properties: List[SourcePropertyRule] = field(default_factory=list)

    @property
    def mapping_key(self) -> str:
        """Registry key, ``<source_key>=><destination_key>``."""
        return f"{self.source_key}=>{self.destination_key}"

    def for_source_member(self, name: str, ignore: bool = False) -> "MappingDefinition":
        """Configure a source member, optionally marking it as ignored."""
        self.properties.append(
            SourcePropertyRule(
                name=name,
                destination=DestinationPropertyRule(
                    name=name,
                    ignore=ignore,
                    source_mapping=True,
                ),
            )
        )
        return self

    def for_member(
        self,
        destination_name: str,
        source_name: Optional[str] = None,
        ignore: bool = False,
    ) -> "MappingDefinition":
        """
        Configure a destination member.

        Args:
            destination_name: Member on the destination type
            source_name: Member on the source type feeding it (defaults to
                destination_name)
            ignore: Exclude the destination member from mapping

        Returns:
            MappingDefinition: self, for chaining
        """
        self.properties.append(
            SourcePropertyRule(
                name=source_name or destination_name,
                destination=DestinationPropertyRule(
                    name=destination_name,
                    ignore=ignore,
                    source_mapping=False,
                ),
            )
        )
        return self

    def ignore_member(self, destination_name: str) -> "MappingDefinition":
        """Exclude a destination member from mapping."""
        return self.for_member(destination_name, ignore=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source_key": self.source_key,
            "destination_key": self.destination_key,
            "source_type": get_type_path(self.source_type),
            "destination_type": get_type_path(self.destination_type),
            "properties": [prop.to_dict() for prop in self.properties],
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        source_type: Optional[TypeReference] = None,
        destination_type: Optional[TypeReference] = None,
    ) -> "MappingDefinition":
        """Build from dictionary; type references are supplied already resolved."""
        return cls(
            source_key=data["source_key"],
            destination_key=data["destination_key"],
            source_type=source_type,
            destination_type=destination_type,
            properties=[SourcePropertyRule.from_dict(prop) for prop in data.get("properties") or []],
        )
