"""Report renderers for migration results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kea_migrate.model.reservation import MigrationResult, MigrationStats

if TYPE_CHECKING:
    from kea_migrate.matcher import SubnetMatcher

_RULE: str = "=" * 60


def generate_report(
    stats: MigrationStats,
    result: MigrationResult,
    matcher: SubnetMatcher,
) -> str:
    """Render a human-readable migration report.

    Sections appear in a fixed order: statistics, created reservations,
    unmatched IPs, subnets dropped by *matcher*, warnings, errors.  Empty
    sections (other than the statistics) are omitted.
    """
    lines: list[str] = ["", _RULE, "MIGRATION REPORT", _RULE, ""]

    lines += [
        "Statistics:",
        f"  • Total ISC static mappings: {stats.total_static_mappings}",
        f"  • Total Kea subnets: {stats.total_subnets}",
        f"  • Successful migrations: {stats.successful_migrations}",
        f"  • Failed migrations: {stats.failed_migrations}",
        f"  • Unmatched IPs: {stats.unmatched_ips}",
        f"  • Warnings: {stats.warnings}",
        f"  • Errors: {stats.errors}",
        "",
    ]

    if result.reservations:
        lines.append("Created Reservations:")
        for n, r in enumerate(result.reservations, start=1):
            subnet = matcher.get_subnet_info(r.subnet)
            line = f"  {n}. {r.ip_address} ({r.hw_address})"
            if r.hostname:
                line += f" - {r.hostname}"
            line += f" → Subnet: {subnet.cidr if subnet else r.subnet}"
            lines.append(line)
        lines.append("")

    for title, entries in (
        ("Unmatched IPs (no subnet found):", result.unmatched_ips),
        ("Subnet Warnings:", matcher.warnings),
        ("Warnings:", result.warnings),
        ("Errors:", result.errors),
    ):
        if entries:
            lines.append(title)
            lines += [f"  • {entry}" for entry in entries]
            lines.append("")

    lines.append(_RULE)
    return "\n".join(lines) + "\n"


def render_result(
    stats: MigrationStats,
    result: MigrationResult,
    matcher: SubnetMatcher | None = None,
) -> dict[str, Any]:
    """Serialize *stats* and *result* to a JSON-serializable dict.

    Returns:
        A dict with keys:

        - ``"stats"``: the summary counts.
        - ``"reservations"``: reservation dicts, absent optional fields omitted.
        - ``"unmatched_ips"``, ``"warnings"``, ``"errors"``: diagnostic lists.
        - ``"subnet_warnings"``: subnets *matcher* dropped at construction.
    """
    return {
        "stats": stats.as_dict(),
        "reservations": [r.to_dict() for r in result.reservations],
        "unmatched_ips": list(result.unmatched_ips),
        "warnings": list(result.warnings),
        "errors": list(result.errors),
        "subnet_warnings": list(matcher.warnings) if matcher is not None else [],
    }
