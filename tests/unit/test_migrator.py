"""Unit tests for kea_migrate.migrator.DHCPMigrator."""

from __future__ import annotations

import itertools

import pytest

from kea_migrate.migrator import DHCPMigrator, is_valid_mac
from kea_migrate.model.mapping import MappingRecord
from kea_migrate.model.reservation import MigrationResult
from kea_migrate.model.subnet import SubnetRecord

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _migrator(*subnets: SubnetRecord) -> DHCPMigrator:
    counter = itertools.count(1)
    return DHCPMigrator(subnets, id_factory=lambda: f"res-{next(counter)}")


def _map(mac: str = "", ip: str = "", **kwargs: str) -> MappingRecord:
    return MappingRecord(mac=mac, ipaddr=ip, **kwargs)


S1 = SubnetRecord(id="s1", base="10.0.0.0", mask="8")
LAN = SubnetRecord(id="lan", base="192.168.1.0", mask="24")


# ---------------------------------------------------------------------------
# MAC syntax
# ---------------------------------------------------------------------------


class TestIsValidMac:
    @pytest.mark.parametrize(
        "mac",
        ["00:11:22:33:44:55", "00-11-22-33-44-55", "001122334455", "aA:bB:cC:dD:eE:fF"],
    )
    def test_accepted(self, mac: str) -> None:
        assert is_valid_mac(mac) is True

    @pytest.mark.parametrize(
        "mac",
        [
            "00:11:22:33:44",
            "ZZ:11:22:33:44:55",
            "00112233445",
            "0011223344556",
            "00:11:22:33:44:55:66",
            "00.11.22.33.44.55",
            "00:11:22:33:44:55\n",
        ],
    )
    def test_rejected(self, mac: str) -> None:
        assert is_valid_mac(mac) is False


# ---------------------------------------------------------------------------
# migrate() outcomes
# ---------------------------------------------------------------------------


class TestMigrateSuccess:
    def test_single_mapping_becomes_reservation(self) -> None:
        result = _migrator(S1).migrate([_map("AA:BB:CC:DD:EE:FF", "10.0.0.5")])
        assert result.reservations_created == 1
        r = result.reservations[0]
        assert r.subnet == "s1"
        assert r.hw_address == "AA:BB:CC:DD:EE:FF"
        assert r.ip_address == "10.0.0.5"
        assert r.uuid == "res-1"
        assert result.warnings == []
        assert result.errors == []
        assert result.unmatched_ips == []

    def test_optional_fields_carried_when_present(self) -> None:
        result = _migrator(S1).migrate(
            [_map("001122334455", "10.0.0.5", hostname="srv", description="Server")]
        )
        r = result.reservations[0]
        assert r.hostname == "srv"
        assert r.description == "Server"

    def test_absent_or_empty_optional_fields_stay_absent(self) -> None:
        result = _migrator(S1).migrate([_map("001122334455", "10.0.0.5", hostname="")])
        r = result.reservations[0]
        assert r.hostname is None
        assert r.description is None
        assert "hostname" not in r.to_dict()
        assert "description" not in r.to_dict()

    def test_client_id_is_not_carried(self) -> None:
        result = _migrator(S1).migrate([_map("001122334455", "10.0.0.5", cid="abc")])
        assert "abc" not in result.reservations[0].to_dict().values()

    def test_default_ids_are_unique(self) -> None:
        migrator = DHCPMigrator([S1])
        result = migrator.migrate(
            [_map("001122334455", "10.0.0.5"), _map("001122334456", "10.0.0.6")]
        )
        ids = [r.uuid for r in result.reservations]
        assert len(set(ids)) == 2
        assert all(len(i) == 36 for i in ids)

    def test_output_preserves_input_order(self) -> None:
        mappings = [
            _map("00:00:00:00:00:01", "192.168.1.10"),
            _map("00:00:00:00:00:02", "172.16.0.1"),
            _map("00:00:00:00:00:03", "10.1.1.1"),
            _map("00:00:00:00:00:04", "192.168.1.5"),
        ]
        result = _migrator(LAN, S1).migrate(mappings)
        assert [r.ip_address for r in result.reservations] == [
            "192.168.1.10",
            "10.1.1.1",
            "192.168.1.5",
        ]
        assert [r.subnet for r in result.reservations] == ["lan", "s1", "lan"]

    def test_reservation_subnet_is_always_a_known_id(self) -> None:
        migrator = _migrator(LAN, S1, SubnetRecord(id="bad", base="10.0.0.0", mask="99"))
        result = migrator.migrate([_map("001122334455", "10.0.0.1")])
        known = {s.id for s in migrator.subnet_matcher.list_all_subnets()}
        assert {r.subnet for r in result.reservations} <= known


class TestMigrateFailures:
    def test_unmatched_ip(self) -> None:
        result = _migrator(LAN).migrate([_map("AA:BB:CC:DD:EE:FF", "172.16.0.1")])
        assert result.reservations == []
        assert result.unmatched_ips == ["172.16.0.1"]
        assert len(result.warnings) == 1
        assert "No subnet found for IP: 172.16.0.1" in result.warnings[0]
        assert result.errors == []

    def test_unmatched_warning_mentions_hostname(self) -> None:
        result = _migrator(LAN).migrate(
            [_map("AA:BB:CC:DD:EE:FF", "172.16.0.1", hostname="nas")]
        )
        assert result.warnings == [
            "No subnet found for IP: 172.16.0.1 (MAC: AA:BB:CC:DD:EE:FF, hostname: nas)"
        ]

    def test_missing_mac(self) -> None:
        result = _migrator(S1).migrate([_map(ip="10.0.0.5")])
        assert result.reservations == []
        assert result.unmatched_ips == []
        assert result.errors == []
        assert result.warnings == [
            "Skipping mapping #1: Missing required fields (mac: , ip: 10.0.0.5)"
        ]

    def test_missing_ip(self) -> None:
        result = _migrator(S1).migrate([_map("001122334455")])
        assert len(result.warnings) == 1
        assert "Missing required fields" in result.warnings[0]

    def test_invalid_mac_is_warning(self) -> None:
        result = _migrator(S1).migrate([_map("ZZ:11:22:33:44:55", "10.0.0.5")])
        assert result.warnings == ["Invalid MAC address format: ZZ:11:22:33:44:55 (IP: 10.0.0.5)"]
        assert result.errors == []

    def test_invalid_ip_is_error(self) -> None:
        result = _migrator(S1).migrate([_map("001122334455", "10.0.0.256")])
        assert result.errors == ["Invalid IP address: 10.0.0.256 (MAC: 001122334455)"]
        assert result.warnings == []
        assert result.unmatched_ips == []

    def test_mac_checked_before_ip(self) -> None:
        result = _migrator(S1).migrate([_map("bogus", "not-an-ip")])
        assert len(result.warnings) == 1
        assert result.errors == []

    def test_bad_records_do_not_abort_batch(self) -> None:
        mappings = [
            _map(ip="10.0.0.1"),
            _map("bogus", "10.0.0.2"),
            _map("001122334455", "10.0.0"),
            _map("001122334455", "172.16.0.1"),
            _map("001122334455", "10.0.0.9"),
        ]
        result = _migrator(S1).migrate(mappings)
        assert [r.ip_address for r in result.reservations] == ["10.0.0.9"]
        assert len(result.warnings) == 3
        assert len(result.errors) == 1
        assert result.unmatched_ips == ["172.16.0.1"]

    def test_diagnostics_are_not_deduplicated(self) -> None:
        mappings = [_map("001122334455", "172.16.0.1")] * 2
        result = _migrator(S1).migrate(mappings)
        assert result.unmatched_ips == ["172.16.0.1", "172.16.0.1"]
        assert len(result.warnings) == 2


# ---------------------------------------------------------------------------
# Stats / validation / report
# ---------------------------------------------------------------------------


class TestGetStats:
    def test_counts(self) -> None:
        migrator = _migrator(LAN, S1)
        mappings = [
            _map("001122334455", "10.0.0.1"),
            _map("001122334455", "172.16.0.1"),
            _map("001122334455", "bad-ip"),
            _map(ip="10.0.0.1"),
        ]
        result = migrator.migrate(mappings)
        stats = migrator.get_stats(mappings, result)
        assert stats.total_static_mappings == 4
        assert stats.total_subnets == 2
        assert stats.successful_migrations == 1
        assert stats.failed_migrations == 3
        assert stats.unmatched_ips == 1
        assert stats.warnings == 2
        assert stats.errors == 1

    def test_pure_function_of_inputs(self) -> None:
        migrator = _migrator(S1)
        result = MigrationResult(unmatched_ips=["1.1.1.1"], warnings=["w"], errors=["e", "e"])
        stats = migrator.get_stats([_map(), _map()], result)
        assert stats.failed_migrations == 2
        assert stats.errors == 2
        assert migrator.get_stats([_map(), _map()], result) == stats


class TestValidateMigration:
    def test_valid(self) -> None:
        v = _migrator(S1).validate_migration([_map("001122334455", "10.0.0.1")])
        assert v.valid is True
        assert v.issues == []

    def test_no_subnets(self) -> None:
        v = _migrator().validate_migration([_map("001122334455", "10.0.0.1")])
        assert v.valid is False
        assert v.issues == ["No Kea subnets found in configuration"]

    def test_only_invalid_subnets_counts_as_none(self) -> None:
        v = _migrator(SubnetRecord(id="x", base="10.0.0.0", mask="64")).validate_migration(
            [_map("001122334455", "10.0.0.1")]
        )
        assert "No Kea subnets found in configuration" in v.issues

    def test_no_mappings(self) -> None:
        v = _migrator(S1).validate_migration([])
        assert v.issues == ["No ISC DHCP static mappings found in configuration"]

    def test_no_valid_mappings(self) -> None:
        v = _migrator(S1).validate_migration([_map(ip="10.0.0.1"), _map("001122334455")])
        assert v.issues == ["No valid static mappings found (missing MAC or IP addresses)"]

    def test_all_issues_reported_together(self) -> None:
        v = _migrator().validate_migration([])
        assert v.issues == [
            "No Kea subnets found in configuration",
            "No ISC DHCP static mappings found in configuration",
        ]


class TestGenerateReport:
    def test_report_contains_all_sections(self) -> None:
        migrator = _migrator(LAN)
        mappings = [
            _map("001122334455", "192.168.1.10", hostname="srv"),
            _map("001122334456", "172.16.0.1"),
            _map("001122334457", "1.2.3"),
        ]
        result = migrator.migrate(mappings)
        report = migrator.generate_report(mappings, result)
        assert "MIGRATION REPORT" in report
        assert "1. 192.168.1.10 (001122334455) - srv → Subnet: 192.168.1.0/24" in report
        assert "  • 172.16.0.1" in report
        assert "Invalid IP address: 1.2.3" in report
