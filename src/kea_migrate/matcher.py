"""Subnet matcher: which configured Kea subnet contains a given IPv4 address.

Ranges are built once from :class:`~kea_migrate.model.subnet.SubnetRecord`
objects and are read-only afterwards.  Overlapping ranges are allowed; the
first range in construction order that contains an address wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from kea_migrate.model.subnet import SubnetRange, SubnetRecord
from kea_migrate.utils.ipv4 import (
    ADDRESS_BITS,
    ip_to_int,
    is_dotted_quad,
    is_prefix_literal,
    is_valid_ipv4,
    netmask_to_prefix,
    network_bounds,
)

logger = logging.getLogger(__name__)


class SubnetMatcher:
    """Answer containment queries over a fixed, ordered set of subnets.

    Invalid subnet definitions never make construction fail: they are dropped
    and described in :attr:`warnings`.

    Args:
        subnets: Subnet definitions in source document order.

    Attributes:
        warnings: One message per subnet that was dropped during construction.
    """

    def __init__(self, subnets: Iterable[SubnetRecord]) -> None:
        self._ranges: dict[str, SubnetRange] = {}
        self._records: dict[str, SubnetRecord] = {}
        self.warnings: list[str] = []
        for subnet in subnets:
            self._add(subnet)

    def __len__(self) -> int:
        return len(self._ranges)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _add(self, subnet: SubnetRecord) -> None:
        if subnet.id in self._records:
            self._warn(
                f"Duplicate subnet id {subnet.id!r} for {subnet.cidr}; "
                "keeping the first definition"
            )
            return
        if not is_valid_ipv4(subnet.base):
            self._warn(f"Invalid subnet: {subnet.cidr} (bad base address)")
            return
        prefix = self._parse_mask(subnet.mask)
        if prefix is None:
            return
        first, last = network_bounds(ip_to_int(subnet.base), prefix)
        subnet_range = SubnetRange(subnet_id=subnet.id, first=first, last=last, prefix=prefix)
        self._ranges[subnet.id] = subnet_range
        self._records[subnet.id] = subnet
        logger.debug(
            "Added subnet %s as %s-%s",
            subnet.cidr,
            subnet_range.first_address,
            subnet_range.last_address,
        )

    def _parse_mask(self, mask: str) -> int | None:
        """Reduce a prefix literal or dotted netmask to a prefix length."""
        if is_prefix_literal(mask):
            # length check first: int() refuses very long digit strings
            digits = mask.lstrip("0") or "0"
            if len(digits) > 2 or int(digits) > ADDRESS_BITS:
                self._warn(f"Invalid CIDR prefix: {mask} (must be 0-32)")
                return None
            return int(digits)
        if is_dotted_quad(mask):
            prefix = netmask_to_prefix(mask)
            if prefix is None:
                self._warn(f"Invalid netmask (not contiguous or out of range): {mask}")
            return prefix
        self._warn(f"Invalid netmask format: {mask}")
        return None

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning("%s", message)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_containing_subnet(self, ip_address: str) -> str | None:
        """Return the id of the first subnet containing *ip_address*.

        An address with invalid syntax yields ``None``; callers that need to
        tell "invalid" from "unmatched" must check :meth:`is_valid_ipv4`
        first.
        """
        if not is_valid_ipv4(ip_address):
            return None
        address = ip_to_int(ip_address)
        for subnet_id, subnet_range in self._ranges.items():
            if subnet_range.contains(address):
                return subnet_id
        return None

    def get_subnet_info(self, subnet_id: str) -> SubnetRecord | None:
        return self._records.get(subnet_id)

    def list_all_subnets(self) -> list[SubnetRecord]:
        """Return retained subnets in construction order."""
        return list(self._records.values())

    def get_range(self, subnet_id: str) -> SubnetRange | None:
        return self._ranges.get(subnet_id)

    def subnet_summary(self) -> list[str]:
        """Describe every retained subnet: configured range, bounds and size."""
        summary: list[str] = []
        for subnet_id, subnet_range in self._ranges.items():
            record = self._records[subnet_id]
            summary.append(
                f"UUID: {subnet_id}\n"
                f"  Range: {record.cidr}\n"
                f"  First IP: {subnet_range.first_address}\n"
                f"  Last IP: {subnet_range.last_address}\n"
                f"  Size: {subnet_range.size} addresses"
            )
        return summary

    @staticmethod
    def is_valid_ipv4(ip_address: str) -> bool:
        return is_valid_ipv4(ip_address)
