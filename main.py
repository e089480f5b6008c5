#!/usr/bin/env python3
"""shapemap - Mapping configuration validator entry point."""
import logging
import sys
from pathlib import Path

import click
from colorama import Fore, Style, init

from config import app_config
from shapemap.cli.console import ValidationConsole
from shapemap.exporter.json_exporter import JsonExporter
from shapemap.loader.config_loader import load_registry
from shapemap.validator import MappingValidationError, MappingValidator, TypeConstructionError

# Initialize colorama
init(autoreset=True)

EXIT_INVALID = 1
EXIT_CONFIG_ERROR = 2
REPORT_FILE_NAME = "validation_report.json"


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}shapemap{Fore.CYAN}                             ║")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}Mapping Configuration Validator{Fore.CYAN}      ║")
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    click.echo()


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """shapemap - Validate object mapping configuration before it runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else app_config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--strict/--no-strict",
    default=app_config.validator.strict_mode,
    show_default=True,
    help="Fail on mappings without type references",
)
@click.option(
    "--collect-all/--first-error",
    default=app_config.validator.collect_all,
    show_default=True,
    help="Report every violation instead of stopping at the first",
)
@click.option(
    "--report",
    type=click.Path(dir_okay=False),
    help="Write a JSON report to this path",
)
@click.option(
    "--save-report",
    is_flag=True,
    help="Write a JSON report into the configured report directory",
)
def validate(config_file, strict, collect_all, report, save_report):
    """Validate the mappings declared in CONFIG_FILE."""
    print_banner()
    console = ValidationConsole()

    try:
        registry = load_registry(config_file)
    except (ValueError, OSError) as e:
        console.print_error(str(e))
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(f"{Fore.CYAN}Validating {len(registry)} mappings (strict mode: {strict})...")

    if collect_all:
        errors = MappingValidator.collect_configuration_errors(registry, strict)
    else:
        try:
            MappingValidator.assert_configuration_is_valid(registry, strict)
            errors = []
        except MappingValidationError as e:
            errors = [e]

    console.print_result(len(registry), errors)

    if save_report and not report:
        report = Path(app_config.report_dir) / REPORT_FILE_NAME

    if report:
        JsonExporter().export(report, registry, errors, strict)
        click.echo(f"{Fore.GREEN}Report saved to {report}")

    if any(isinstance(e, TypeConstructionError) for e in errors):
        sys.exit(EXIT_CONFIG_ERROR)

    sys.exit(EXIT_INVALID if errors else 0)


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def list_mappings(config_file):
    """List the mappings declared in CONFIG_FILE."""
    print_banner()
    console = ValidationConsole()

    try:
        registry = load_registry(config_file)
    except (ValueError, OSError) as e:
        console.print_error(str(e))
        sys.exit(EXIT_CONFIG_ERROR)

    console.print_mappings(registry)


if __name__ == "__main__":
    cli()
