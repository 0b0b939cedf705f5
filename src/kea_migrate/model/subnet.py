"""Typed models for Kea subnet definitions."""

from __future__ import annotations

from dataclasses import dataclass

from kea_migrate.utils.ipv4 import int_to_ip


@dataclass(frozen=True)
class SubnetRecord:
    """A Kea DHCPv4 subnet as extracted from the source configuration.

    Attributes:
        id: Opaque, unique subnet identifier (the Kea ``subnet4`` uuid).
        base: Network base address in dotted-quad form.
        mask: Either a prefix length literal (``"24"``) or a dotted
            netmask (``"255.255.255.0"``).  Validity is decided by
            :class:`~kea_migrate.matcher.SubnetMatcher`.
    """

    id: str
    base: str
    mask: str

    @property
    def cidr(self) -> str:
        """``base/mask`` exactly as configured."""
        return f"{self.base}/{self.mask}"


@dataclass(frozen=True)
class SubnetRange:
    """Closed 32-bit address interval computed for one retained subnet.

    Attributes:
        subnet_id: Id of the :class:`SubnetRecord` this range belongs to.
        first: Network address as an unsigned 32-bit integer.
        last: Broadcast address as an unsigned 32-bit integer.
        prefix: Prefix length (0-32).
    """

    subnet_id: str
    first: int
    last: int
    prefix: int

    @property
    def size(self) -> int:
        return 1 << (32 - self.prefix)

    @property
    def first_address(self) -> str:
        return int_to_ip(self.first)

    @property
    def last_address(self) -> str:
        return int_to_ip(self.last)

    def contains(self, address: int) -> bool:
        """Return ``True`` if *address* lies within ``[first, last]``."""
        return self.first <= address <= self.last
