"""Typed model for ISC DHCP static mappings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MappingRecord:
    """One ISC DHCP ``staticmap`` entry.

    Attributes:
        mac: Hardware address as written in the source; ``""`` when absent.
        ipaddr: IPv4 address as written in the source; ``""`` when absent.
        hostname: Optional client hostname.
        description: Optional free-text description (``descr`` in OPNsense).
        cid: Optional DHCP client identifier.  Carried for completeness; Kea
            reservations produced by this tool are keyed on ``hw_address``.
    """

    mac: str = ""
    ipaddr: str = ""
    hostname: str | None = None
    description: str | None = None
    cid: str | None = None
