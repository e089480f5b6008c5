"""Mapping configuration validation errors."""
from typing import Any, Dict, Optional


class MappingValidationError(Exception):
    """Base error for an invalid mapping configuration."""

    def __init__(
        self,
        mapping_key: str,
        reason: str,
        source_name: Optional[str] = None,
        destination_name: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        self.mapping_key = mapping_key
        self.reason = reason
        self.source_name = source_name
        self.destination_name = destination_name
        self.error_code = error_code or self.__class__.__name__.upper()
        self.message = self._compose_message()
        super().__init__(self.message)

    def _compose_message(self) -> str:
        return (
            f"Mapping '{self.mapping_key}' is invalid: {self.reason} "
            f"(source: '{self.source_name}', destination: '{self.destination_name}')."
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary format."""
        return {
            "error_code": self.error_code,
            "mapping_key": self.mapping_key,
            "reason": self.reason,
            "source": self.source_name,
            "destination": self.destination_name,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"mapping_key='{self.mapping_key}', "
            f"reason='{self.reason}'"
            f")"
        )


class UnresolvedTypeReferenceError(MappingValidationError):
    """Mapping has no source or destination type reference in strict mode."""

    def __init__(
        self,
        mapping_key: str,
        source_name: Optional[str] = None,
        destination_name: Optional[str] = None,
    ):
        super().__init__(
            mapping_key,
            "source_type or destination_type are unspecified",
            source_name,
            destination_name,
            error_code="UNRESOLVED_TYPE_REFERENCE",
        )

    def _compose_message(self) -> str:
        return (
            f"Mapping '{self.mapping_key}' cannot be validated, "
            f"since source_type or destination_type are unspecified."
        )


class MissingSourceMemberError(MappingValidationError):
    """A configured or implicit member does not exist on the source type."""

    def __init__(self, mapping_key, reason, source_name=None, destination_name=None):
        super().__init__(
            mapping_key, reason, source_name, destination_name,
            error_code="MISSING_SOURCE_MEMBER",
        )


class MissingDestinationMemberError(MappingValidationError):
    """A configured or implicit member does not exist on the destination type."""

    def __init__(self, mapping_key, reason, source_name=None, destination_name=None):
        super().__init__(
            mapping_key, reason, source_name, destination_name,
            error_code="MISSING_DESTINATION_MEMBER",
        )


class IgnoredMemberStillPresentError(MappingValidationError):
    """A member ignored on one side exists on the other side."""

    def __init__(self, mapping_key, reason, source_name=None, destination_name=None):
        super().__init__(
            mapping_key, reason, source_name, destination_name,
            error_code="IGNORED_MEMBER_STILL_PRESENT",
        )


class UnmappedDestinationMemberError(MappingValidationError):
    """A destination member has no source counterpart and no rule."""

    def __init__(self, mapping_key, reason, source_name=None, destination_name=None):
        super().__init__(
            mapping_key, reason, source_name, destination_name,
            error_code="UNMAPPED_DESTINATION_MEMBER",
        )


class TypeConstructionError(MappingValidationError):
    """A type reference cannot build a sample instance with no arguments."""

    def __init__(
        self,
        mapping_key: str,
        type_name: Optional[str],
        cause: Exception,
        source_name: Optional[str] = None,
        destination_name: Optional[str] = None,
    ):
        super().__init__(
            mapping_key,
            f"Type '{type_name}' cannot be constructed without arguments: {cause}",
            source_name,
            destination_name,
            error_code="TYPE_CONSTRUCTION_FAILED",
        )
        self.__cause__ = cause
