"""Console output for the validation CLI."""
from typing import List, Mapping

import click
from colorama import Fore, Style

from shapemap.mapper.mapping import MappingDefinition
from shapemap.schema.members import get_class_name
from shapemap.validator.errors import MappingValidationError


class ValidationConsole:
    """Prints mappings and validation results."""

    def print_header(self, title: str):
        """Print a section header."""
        click.echo(f"\n{Fore.CYAN}{'━' * 45}")
        click.echo(f"{Fore.CYAN}{title}")
        click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")

    def print_mappings(self, mappings: Mapping[str, MappingDefinition]):
        """List registered mappings."""
        self.print_header("Registered Mappings")

        if not mappings:
            click.echo(f"{Fore.YELLOW}No mappings registered")
            return

        for i, (key, mapping) in enumerate(mappings.items(), 1):
            source = get_class_name(mapping.source_type) or "-"
            destination = get_class_name(mapping.destination_type) or "-"
            click.echo(
                f"{i:2d}. {key:40s} {source} -> {destination} "
                f"({len(mapping.properties)} configured)"
            )

    def print_result(self, total_mappings: int, errors: List[MappingValidationError]):
        """Print validation summary."""
        self.print_header("Validation Result")

        if not errors:
            click.echo(f"{Fore.GREEN}✅ {total_mappings} mappings valid")
            return

        for error in errors:
            click.echo(f"{Fore.RED}❌ [{error.error_code}] {error}")

        click.echo(f"\n{Fore.RED}{len(errors)} error(s) in {total_mappings} mappings")

    def print_error(self, message: str):
        """Print a fatal error."""
        click.echo(f"{Fore.RED}Error: {message}", err=True)
