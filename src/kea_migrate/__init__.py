"""Migrate ISC DHCP static mappings to Kea DHCPv4 reservations."""

from __future__ import annotations

__version__ = "0.1.0"
