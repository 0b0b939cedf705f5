#!/usr/bin/env python3
"""Example: preview which ISC static mappings would become Kea reservations.

Reads an OPNsense ``config.xml``, runs the migration in memory and prints the
JSON summary.  Nothing is written unless ``APPLY=1`` is set, in which case the
updated configuration is saved next to the input as ``<name>.kea.xml``.

Usage (dry run, default):

    KEA_CONFIG=/conf/config.xml python examples/preview_migration.py

Usage (write output):

    APPLY=1 KEA_CONFIG=/conf/config.xml python examples/preview_migration.py

Environment variables:
    KEA_CONFIG    Path to the OPNsense configuration (required).
    APPLY         Set to "1" to write the updated configuration (default: dry-run).

Exit codes:
    0: migration previewed (and written) without errors.
    1: missing environment variable, unreadable input, or errors in the result.
"""

from __future__ import annotations

import json
import os
import pathlib
import sys

from kea_migrate.errors import KeaMigrateError
from kea_migrate.migrator import DHCPMigrator
from kea_migrate.parser.config import parse_config, read_config
from kea_migrate.utils.render import render_result
from kea_migrate.writer import inject_reservations, write_config


def main() -> None:
    config_path = os.environ.get("KEA_CONFIG", "")
    if not config_path:
        print("ERROR: KEA_CONFIG environment variable is required.", file=sys.stderr)
        sys.exit(1)
    apply_changes = os.environ.get("APPLY", "0") == "1"

    try:
        xml = read_config(config_path)
        parsed = parse_config(xml)
    except KeaMigrateError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    migrator = DHCPMigrator(parsed.subnets)
    for warning in migrator.subnet_matcher.warnings:
        print(f"subnet skipped: {warning}", file=sys.stderr)

    result = migrator.migrate(parsed.static_mappings)
    stats = migrator.get_stats(parsed.static_mappings, result)
    print(json.dumps(render_result(stats, result, migrator.subnet_matcher), indent=2))

    if apply_changes and result.reservations:
        output = pathlib.Path(config_path).with_suffix(".kea.xml")
        write_config(output, inject_reservations(xml, result.reservations))
        print(f"Wrote {output}", file=sys.stderr)

    sys.exit(1 if result.errors else 0)


if __name__ == "__main__":
    main()
