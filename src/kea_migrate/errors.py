"""Custom exceptions for kea-migrate."""

from __future__ import annotations

from dataclasses import dataclass, field


class KeaMigrateError(Exception):
    """Base exception for all kea-migrate errors."""


class ConfigFileError(KeaMigrateError):
    """Raised when a configuration file cannot be read or written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class ConfigParseError(KeaMigrateError):
    """Raised when XML parsing fails or the document cannot be processed."""


@dataclass
class MigrationValidationError(KeaMigrateError):
    """Raised when the pre-flight check reports blocking issues.

    Attributes:
        issues: Human-readable issue strings from
            :meth:`~kea_migrate.migrator.DHCPMigrator.validate_migration`.
    """

    issues: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(
            f"Migration validation failed: {len(self.issues)} issue(s): "
            + "; ".join(self.issues)
        )
