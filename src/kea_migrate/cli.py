"""``kea-migrate`` command: ISC DHCP static mappings to Kea reservations."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer

from kea_migrate.errors import ConfigParseError, KeaMigrateError, MigrationValidationError
from kea_migrate.migrator import DHCPMigrator
from kea_migrate.model.config import DEFAULT_OUTPUT_FILE, MigrationConfig
from kea_migrate.parser.config import parse_config, read_config, validate_xml
from kea_migrate.utils.render import render_result
from kea_migrate.writer import inject_reservations, write_config

app = typer.Typer(
    help="Migrate ISC DHCP static mappings to Kea DHCP reservations in an OPNsense config.xml.",
    add_completion=False,
)

log = logging.getLogger(__name__)

_BANNER: str = "=" * 63


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def run(config: MigrationConfig, *, as_json: bool = False) -> int:
    """Execute one migration described by *config* and return the exit code.

    Raises:
        KeaMigrateError: If the input cannot be read or parsed, or the
            pre-flight check fails.
    """
    log.info("Reading input file: %s", config.input_file)
    xml = read_config(config.input_file)

    validation = validate_xml(xml)
    if not validation.valid:
        raise ConfigParseError(f"Invalid XML: {validation.error}")
    log.info("XML validation passed")

    parsed = parse_config(xml)
    log.info("Found %d ISC DHCP static mappings", len(parsed.static_mappings))
    log.info("Found %d Kea DHCP subnets", len(parsed.subnets))

    migrator = DHCPMigrator(parsed.subnets)
    if config.verbose:
        summary = migrator.subnet_matcher.subnet_summary()
        log.debug("Configured subnets (%d):\n%s", len(summary), "\n".join(summary))

    preflight = migrator.validate_migration(parsed.static_mappings)
    if not preflight.valid:
        raise MigrationValidationError(issues=preflight.issues)
    log.info("Migration validation passed")

    result = migrator.migrate(parsed.static_mappings)
    if as_json:
        stats = migrator.get_stats(parsed.static_mappings, result)
        typer.echo(json.dumps(render_result(stats, result, migrator.subnet_matcher), indent=2))
    else:
        typer.echo(migrator.generate_report(parsed.static_mappings, result))

    if result.reservations_created == 0:
        typer.echo("No reservations were created. Migration failed.", err=True)
        return 1

    if config.dry_run:
        typer.echo("DRY RUN MODE - No files were modified", err=True)
        typer.echo("Run without --dry-run to write changes to output file.", err=True)
    else:
        output = inject_reservations(
            xml, result.reservations, keep_existing=config.keep_existing
        )
        write_config(config.output_file, output)
        typer.echo(
            f"Successfully wrote {result.reservations_created} reservations "
            f"to {config.output_file}",
            err=True,
        )

    if result.warnings or result.errors:
        typer.echo("Please review warnings and errors above.", err=True)
        if result.unmatched_ips:
            typer.echo(
                f"{len(result.unmatched_ips)} IP(s) could not be matched to any subnet.",
                err=True,
            )

    return 1 if result.errors else 0


@app.command()
def migrate(
        input_file: Path = typer.Argument(
            ...,
            metavar="INPUT",
            help="OPNsense XML configuration file to read.",
        ),
        output_file: Path = typer.Argument(
            Path(DEFAULT_OUTPUT_FILE),
            metavar="[OUTPUT]",
            envvar="KEA_MIGRATE_OUTPUT",
            help="Where to write the updated configuration.",
        ),
        dry_run: bool = typer.Option(
            False,
            "--dry-run",
            "-d",
            envvar="KEA_MIGRATE_DRY_RUN",
            help="Preview changes without writing the output file.",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            envvar="KEA_MIGRATE_VERBOSE",
            help="Show detailed migration progress.",
        ),
        keep_existing: bool = typer.Option(
            False,
            "--keep-existing",
            help="Append to existing Kea reservations instead of replacing them.",
        ),
        as_json: bool = typer.Option(
            False,
            "--json",
            help="Print the report as JSON instead of text.",
        ),
):
    """
    Convert ISC DHCP static mappings into Kea reservations.

    Example:

        kea-migrate config.xml
        kea-migrate config.xml output.xml --verbose
        kea-migrate config.xml --dry-run
    """
    _configure_logging(verbose)
    config = MigrationConfig(
        input_file=input_file,
        output_file=output_file,
        dry_run=dry_run,
        verbose=verbose,
        keep_existing=keep_existing,
    )

    if not as_json:
        typer.echo(_BANNER)
        typer.echo("          ISC DHCP to Kea DHCP Migration Tool")
        typer.echo(_BANNER)

    try:
        code = run(config, as_json=as_json)
    except MigrationValidationError as exc:
        typer.echo("Migration validation failed:", err=True)
        for issue in exc.issues:
            typer.echo(f"   • {issue}", err=True)
        raise typer.Exit(code=1) from exc
    except KeaMigrateError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    raise typer.Exit(code=code)


def main() -> None:
    """Entry point for console_scripts."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Interrupted by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
