"""
Mapping configuration validator.

Validates mapping configuration by dry-running it: a sample source and
destination instance are built for every mapping and their members are
reconciled against the configured property rules. Only member existence
is checked, never value types.
"""
import logging
from dataclasses import dataclass
from typing import Collection, Iterator, List, Mapping, Optional, Set, Type

from shapemap.mapper.mapping import (
    DestinationPropertyRule,
    MappingDefinition,
    SourcePropertyRule,
)
from shapemap.schema.members import create_instance, get_class_name, get_own_members
from shapemap.validator.errors import (
    IgnoredMemberStillPresentError,
    MappingValidationError,
    MissingDestinationMemberError,
    MissingSourceMemberError,
    TypeConstructionError,
    UnmappedDestinationMemberError,
    UnresolvedTypeReferenceError,
)

logger = logging.getLogger(__name__)


@dataclass
class MemberIssue:
    """Violation found by a single member check."""

    error_class: Type[MappingValidationError]
    reason: str


class MappingValidator:
    """Validates registered mappings against their source and destination types."""

    @staticmethod
    def assert_configuration_is_valid(
        mappings: Mapping[str, MappingDefinition],
        strict_mode: bool,
    ) -> None:
        """
        Validate every registered mapping, stopping at the first violation.

        Args:
            mappings: Mapping definitions keyed by ``source=>destination``
            strict_mode: Fail on mappings without type references instead of
                skipping them

        Raises:
            MappingValidationError: First violation in registry order
        """
        for key, mapping in mappings.items():
            logger.debug(f"Validating mapping {key}")
            MappingValidator.assert_mapping_configuration(mapping, strict_mode)

        logger.info(f"Validated {len(mappings)} mappings")

    @staticmethod
    def collect_configuration_errors(
        mappings: Mapping[str, MappingDefinition],
        strict_mode: bool,
    ) -> List[MappingValidationError]:
        """
        Validate every registered mapping and collect all violations.

        Returns:
            List[MappingValidationError]: Violations in registry order, then
            member order. Empty when the configuration is valid.
        """
        errors: List[MappingValidationError] = []

        for key, mapping in mappings.items():
            logger.debug(f"Validating mapping {key}")
            errors.extend(MappingValidator.iter_mapping_errors(mapping, strict_mode))

        logger.info(f"Validated {len(mappings)} mappings, {len(errors)} errors found")
        return errors

    @staticmethod
    def assert_mapping_configuration(mapping: MappingDefinition, strict_mode: bool) -> None:
        """Validate one mapping, raising its first violation."""
        for error in MappingValidator.iter_mapping_errors(mapping, strict_mode):
            raise error

    @staticmethod
    def iter_mapping_errors(
        mapping: MappingDefinition,
        strict_mode: bool,
    ) -> Iterator[MappingValidationError]:
        """
        Yield the violations of one mapping in detection order.

        Members are reconciled in three passes: configured properties, then
        remaining source members, then remaining destination members. A name
        is validated once; later passes skip it.
        """
        mapping_key = mapping.mapping_key

        source_type = mapping.source_type
        destination_type = mapping.destination_type

        source_name = get_class_name(source_type)
        destination_name = get_class_name(destination_type)

        if source_type is None or destination_type is None:
            if not strict_mode:
                logger.info(f"Skipping mapping '{mapping_key}', type references unspecified")
                return

            yield UnresolvedTypeReferenceError(mapping_key, source_name, destination_name)
            return

        def to_error(issue: MemberIssue) -> MappingValidationError:
            return issue.error_class(mapping_key, issue.reason, source_name, destination_name)

        samples = []
        for type_ref, type_name in ((source_type, source_name), (destination_type, destination_name)):
            try:
                samples.append(create_instance(type_ref))
            except Exception as e:
                logger.debug(f"{mapping_key}: cannot build sample of {type_name}: {e!r}")
                yield TypeConstructionError(mapping_key, type_name, e, source_name, destination_name)
                return

        src_members = get_own_members(samples[0])
        dst_members = get_own_members(samples[1])
        src_lookup = set(src_members)
        dst_lookup = set(dst_members)

        validated_members: Set[str] = set()

        # walk member mappings
        for prop in mapping.properties:
            destination = MappingValidator.resolve_destination(prop)

            issue = MappingValidator._validate_property_mapping(
                destination, prop.name, src_lookup, dst_lookup
            )
            if issue:
                yield to_error(issue)

            validated_members.add(prop.name)

        logger.debug(f"{mapping_key}: {len(mapping.properties)} configured properties checked")

        # walk source members
        for src_member in src_members:
            if src_member in validated_members:
                continue

            issue = MappingValidator._validate_property(src_member, dst_lookup)
            if issue:
                yield to_error(issue)

            validated_members.add(src_member)

        # walk destination members
        for dst_member in dst_members:
            if dst_member in validated_members:
                continue

            yield UnmappedDestinationMemberError(
                mapping_key,
                f"Destination member '{dst_member}' does not exist on source type",
                source_name,
                destination_name,
            )
            validated_members.add(dst_member)

    @staticmethod
    def resolve_destination(
        rule: SourcePropertyRule,
        _path: Optional[Set[int]] = None,
    ) -> Optional[DestinationPropertyRule]:
        """
        Locate the destination rule of a source property rule.

        A direct ``destination`` wins. Otherwise children are searched depth
        first, in order, and the first destination found is returned.

        Returns:
            Optional[DestinationPropertyRule]: None when no branch holds one
        """
        if rule.destination is not None:
            return rule.destination

        path = _path if _path is not None else set()

        # Prevent circular children
        if id(rule) in path:
            logger.warning(f"Circular property rule detected: {rule.name}")
            return None

        path.add(id(rule))
        try:
            for child in rule.children:
                destination = MappingValidator.resolve_destination(child, path)
                if destination is not None:
                    return destination
        finally:
            path.discard(id(rule))

        return None

    @staticmethod
    def _validate_property_mapping(
        destination: Optional[DestinationPropertyRule],
        member: str,
        src_members: Collection[str],
        dst_members: Collection[str],
    ) -> Optional[MemberIssue]:
        if destination is None:
            return MemberIssue(
                MissingDestinationMemberError,
                f"Source member '{member}' is configured, but has no destination rule",
            )

        if destination.source_mapping:
            return MappingValidator._validate_source_property_mapping(
                destination, member, src_members, dst_members
            )

        return MappingValidator._validate_destination_property_mapping(
            destination, member, src_members, dst_members
        )

    @staticmethod
    def _validate_source_property_mapping(
        destination: DestinationPropertyRule,
        member: str,
        src_members: Collection[str],
        dst_members: Collection[str],
    ) -> Optional[MemberIssue]:
        # a configured member should exist
        if member not in src_members:
            return MemberIssue(
                MissingSourceMemberError,
                f"Source member '{member}' is configured, but does not exist on source type",
            )

        # an ignored source member should not exist on the destination type
        if destination.ignore:
            if member in dst_members:
                return MemberIssue(
                    IgnoredMemberStillPresentError,
                    f"Source member '{member}' is ignored, but does exist on destination type",
                )
            return None

        if member not in dst_members:
            return MemberIssue(
                MissingDestinationMemberError,
                f"Source member '{member}' is configured to be mapped, "
                f"but does not exist on destination type",
            )

        return None

    @staticmethod
    def _validate_destination_property_mapping(
        destination: DestinationPropertyRule,
        member: str,
        src_members: Collection[str],
        dst_members: Collection[str],
    ) -> Optional[MemberIssue]:
        # a configured member should exist
        if destination.name not in dst_members:
            return MemberIssue(
                MissingDestinationMemberError,
                f"Destination member '{destination.destination_property_name}' is configured, "
                f"but does not exist on destination type",
            )

        # an ignored destination member should not exist on the source type
        if destination.ignore:
            if member in src_members:
                return MemberIssue(
                    IgnoredMemberStillPresentError,
                    f"Destination member '{member}' is ignored, but does exist on source type",
                )
            return None

        if member not in src_members:
            return MemberIssue(
                MissingSourceMemberError,
                f"Destination member '{member}' is configured to be mapped, "
                f"but does not exist on source type",
            )

        return None

    @staticmethod
    def _validate_property(src_member: str, dst_members: Collection[str]) -> Optional[MemberIssue]:
        if src_member not in dst_members:
            return MemberIssue(
                MissingDestinationMemberError,
                f"Source member '{src_member}' is configured to be mapped, "
                f"but does not exist on destination type",
            )
        return None


def assert_configuration_is_valid(
    mappings: Mapping[str, MappingDefinition],
    strict_mode: bool = True,
) -> None:
    """Validate all mappings, raising the first violation."""
    MappingValidator.assert_configuration_is_valid(mappings, strict_mode)


def collect_configuration_errors(
    mappings: Mapping[str, MappingDefinition],
    strict_mode: bool = True,
) -> List[MappingValidationError]:
    """Validate all mappings, returning every violation."""
    return MappingValidator.collect_configuration_errors(mappings, strict_mode)
