"""Migration engine: ISC DHCP static mappings to Kea reservations.

Each mapping passes through the same checks, in order; the first failing
check decides its outcome and the engine moves on to the next mapping:

1. missing MAC or IP                      -> warning
2. malformed MAC                          -> warning
3. malformed IP                           -> error
4. no configured subnet contains the IP   -> unmatched + warning
5. otherwise                              -> reservation
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Callable, Iterable, Sequence

from kea_migrate.matcher import SubnetMatcher
from kea_migrate.model.mapping import MappingRecord
from kea_migrate.model.reservation import (
    MigrationResult,
    MigrationStats,
    ReservationRecord,
    ValidationResult,
)
from kea_migrate.model.subnet import SubnetRecord
from kea_migrate.utils.render import generate_report

logger = logging.getLogger(__name__)

# XX:XX:XX:XX:XX:XX, XX-XX-XX-XX-XX-XX or XXXXXXXXXXXX
_MAC_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^([0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}$"),
    re.compile(r"^[0-9A-Fa-f]{12}$"),
)


def is_valid_mac(mac: str) -> bool:
    """Return ``True`` if *mac* is a colon/dash separated or bare 48-bit address."""
    return any(pattern.fullmatch(mac) for pattern in _MAC_PATTERNS)


def _new_uuid() -> str:
    return str(uuid.uuid4())


class DHCPMigrator:
    """Convert static mappings into reservations for a fixed set of subnets.

    Args:
        subnets: Kea subnet definitions in document order.
        id_factory: Callable returning a fresh reservation id; defaults to
            a random UUID4 string.
    """

    def __init__(
        self,
        subnets: Iterable[SubnetRecord],
        *,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.subnet_matcher = SubnetMatcher(subnets)
        self._id_factory = id_factory or _new_uuid

    def migrate(self, static_mappings: Sequence[MappingRecord]) -> MigrationResult:
        """Run every mapping through validation and subnet resolution.

        Never raises for per-mapping problems; all of them are collected in
        the returned :class:`MigrationResult`.
        """
        result = MigrationResult()
        logger.debug("Processing %d static mappings", len(static_mappings))

        for index, mapping in enumerate(static_mappings, start=1):
            mac = mapping.mac or ""
            ip = mapping.ipaddr or ""

            if not mac or not ip:
                result.warnings.append(
                    f"Skipping mapping #{index}: Missing required fields "
                    f"(mac: {mac}, ip: {ip})"
                )
                continue

            if not is_valid_mac(mac):
                result.warnings.append(f"Invalid MAC address format: {mac} (IP: {ip})")
                continue

            if not SubnetMatcher.is_valid_ipv4(ip):
                result.errors.append(f"Invalid IP address: {ip} (MAC: {mac})")
                continue

            subnet_id = self.subnet_matcher.find_containing_subnet(ip)
            if subnet_id is None:
                result.unmatched_ips.append(ip)
                hostname = f", hostname: {mapping.hostname}" if mapping.hostname else ""
                result.warnings.append(f"No subnet found for IP: {ip} (MAC: {mac}{hostname})")
                continue

            result.reservations.append(
                ReservationRecord(
                    uuid=self._id_factory(),
                    subnet=subnet_id,
                    hw_address=mac,
                    ip_address=ip,
                    hostname=mapping.hostname or None,
                    description=mapping.description or None,
                )
            )
            subnet = self.subnet_matcher.get_subnet_info(subnet_id)
            logger.debug("Matched %s (%s) to subnet %s", ip, mac, subnet.cidr if subnet else "?")

        logger.debug(
            "Migration finished: %d reservations, %d warnings, %d errors",
            result.reservations_created,
            len(result.warnings),
            len(result.errors),
        )
        return result

    def get_stats(
        self,
        static_mappings: Sequence[MappingRecord],
        result: MigrationResult,
    ) -> MigrationStats:
        total = len(static_mappings)
        return MigrationStats(
            total_static_mappings=total,
            total_subnets=len(self.subnet_matcher),
            successful_migrations=result.reservations_created,
            failed_migrations=total - result.reservations_created,
            unmatched_ips=len(result.unmatched_ips),
            warnings=len(result.warnings),
            errors=len(result.errors),
        )

    def validate_migration(self, static_mappings: Sequence[MappingRecord]) -> ValidationResult:
        """Pre-flight check; advisory only, callers decide whether to abort."""
        issues: list[str] = []

        if len(self.subnet_matcher) == 0:
            issues.append("No Kea subnets found in configuration")

        if not static_mappings:
            issues.append("No ISC DHCP static mappings found in configuration")
        elif not any(m.mac and m.ipaddr for m in static_mappings):
            issues.append("No valid static mappings found (missing MAC or IP addresses)")

        return ValidationResult(valid=not issues, issues=issues)

    def generate_report(
        self,
        static_mappings: Sequence[MappingRecord],
        result: MigrationResult,
    ) -> str:
        return generate_report(
            self.get_stats(static_mappings, result), result, self.subnet_matcher
        )
