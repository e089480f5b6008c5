"""
Mapping Validator Module

Dry-run validation of mapping configuration:
- Configured members must exist on the side they are configured for
- Ignored members must not exist on the opposite side
- Unconfigured members must exist on both sides
"""

from .errors import (
    IgnoredMemberStillPresentError,
    MappingValidationError,
    MissingDestinationMemberError,
    MissingSourceMemberError,
    TypeConstructionError,
    UnmappedDestinationMemberError,
    UnresolvedTypeReferenceError,
)
from .mapping_validator import (
    MappingValidator,
    MemberIssue,
    assert_configuration_is_valid,
    collect_configuration_errors,
)

__all__ = [
    "MappingValidator",
    "MemberIssue",
    "assert_configuration_is_valid",
    "collect_configuration_errors",
    "MappingValidationError",
    "UnresolvedTypeReferenceError",
    "MissingSourceMemberError",
    "MissingDestinationMemberError",
    "IgnoredMemberStillPresentError",
    "UnmappedDestinationMemberError",
    "TypeConstructionError",
]
