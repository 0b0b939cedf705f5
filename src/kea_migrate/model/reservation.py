"""Typed models for Kea reservations and migration outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ReservationRecord:
    """A Kea DHCPv4 reservation created by the migration engine.

    Attributes:
        uuid: Freshly generated unique identifier.
        subnet: Id of the :class:`~kea_migrate.model.subnet.SubnetRecord`
            whose range contains ``ip_address``.
        hw_address: Hardware address copied from the static mapping.
        ip_address: IPv4 address copied from the static mapping.
        hostname: Optional hostname; ``None`` when the mapping had none.
        description: Optional description; ``None`` when the mapping had none.
    """

    uuid: str
    subnet: str
    hw_address: str
    ip_address: str
    hostname: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Serialize to a dict, omitting absent optional fields."""
        data = {
            "uuid": self.uuid,
            "subnet": self.subnet,
            "hw_address": self.hw_address,
            "ip_address": self.ip_address,
        }
        if self.hostname:
            data["hostname"] = self.hostname
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class MigrationResult:
    """Output of one :meth:`~kea_migrate.migrator.DHCPMigrator.migrate` run.

    All lists follow input mapping order and are never deduplicated.

    Attributes:
        reservations: Reservations created for matched, valid mappings.
        unmatched_ips: Valid addresses for which no subnet was found.
        warnings: Recoverable problems; the mapping was skipped.
        errors: Invalid data (bad IP syntax); the mapping was skipped.
    """

    reservations: list[ReservationRecord] = field(default_factory=list)
    unmatched_ips: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def reservations_created(self) -> int:
        return len(self.reservations)


@dataclass
class MigrationStats:
    """Summary counts derived from a mapping list and its result."""

    total_static_mappings: int
    total_subnets: int
    successful_migrations: int
    failed_migrations: int
    unmatched_ips: int
    warnings: int
    errors: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_static_mappings": self.total_static_mappings,
            "total_subnets": self.total_subnets,
            "successful_migrations": self.successful_migrations,
            "failed_migrations": self.failed_migrations,
            "unmatched_ips": self.unmatched_ips,
            "warnings": self.warnings,
            "errors": self.errors,
        }


@dataclass
class ValidationResult:
    """Advisory pre-flight check outcome.

    Attributes:
        valid: ``True`` when ``issues`` is empty.
        issues: Human-readable problems found before migrating.
    """

    valid: bool
    issues: list[str] = field(default_factory=list)
