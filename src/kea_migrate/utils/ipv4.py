"""IPv4 address arithmetic on plain unsigned 32-bit integers.

Addresses are converted to ``int`` so that range membership is a pair of
integer comparisons.  Only strict dotted-quad syntax is accepted: four ASCII
decimal octets in 0-255 separated by single dots.
"""

from __future__ import annotations

import re

ADDRESS_BITS: int = 32
ALL_ONES: int = 0xFFFFFFFF

_DOTTED_QUAD_RE: re.Pattern[str] = re.compile(r"^[0-9]{1,3}(?:\.[0-9]{1,3}){3}$")
_PREFIX_RE: re.Pattern[str] = re.compile(r"^[0-9]+$")


def is_valid_ipv4(value: str) -> bool:
    """Return ``True`` if *value* is exactly four decimal octets, each 0-255."""
    if not isinstance(value, str) or not _DOTTED_QUAD_RE.fullmatch(value):
        return False
    return all(int(octet) <= 255 for octet in value.split("."))


def is_dotted_quad(value: str) -> bool:
    """Return ``True`` if *value* has dotted-quad shape (octet range unchecked)."""
    return bool(_DOTTED_QUAD_RE.fullmatch(value))


def is_prefix_literal(value: str) -> bool:
    """Return ``True`` if *value* consists of ASCII digits only."""
    return bool(_PREFIX_RE.fullmatch(value))


def ip_to_int(ip: str) -> int:
    """Convert a dotted-quad string to an unsigned 32-bit integer.

    Raises:
        ValueError: If *ip* is not a valid IPv4 address.
    """
    if not is_valid_ipv4(ip):
        raise ValueError(f"Invalid IPv4 address: {ip!r}")
    value = 0
    for octet in ip.split("."):
        value = (value << 8) | int(octet)
    return value


def int_to_ip(value: int) -> str:
    """Convert an unsigned 32-bit integer to dotted-quad form."""
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def prefix_to_mask(prefix: int) -> int:
    """Return the 32-bit netmask for a prefix length (``24`` -> ``0xFFFFFF00``)."""
    if not 0 <= prefix <= ADDRESS_BITS:
        raise ValueError(f"Invalid CIDR prefix: {prefix} (must be 0-32)")
    return (ALL_ONES << (ADDRESS_BITS - prefix)) & ALL_ONES


def netmask_to_prefix(netmask: str) -> int | None:
    """Convert a dotted netmask to its prefix length.

    The binary form must be a left-aligned contiguous run of 1-bits
    followed only by 0-bits (``255.255.255.0`` -> ``24``).

    Returns:
        The prefix length, or ``None`` if *netmask* is malformed or
        non-contiguous (e.g. ``255.0.255.0``).
    """
    if not is_valid_ipv4(netmask):
        return None
    mask = ip_to_int(netmask)
    ones = ADDRESS_BITS - (~mask & ALL_ONES).bit_length()
    if prefix_to_mask(ones) != mask:
        return None
    return ones


def network_bounds(base: int, prefix: int) -> tuple[int, int]:
    """Return ``(first, last)`` of the range *base*/*prefix*.

    Host bits set in *base* are cleared, so ``192.168.1.77/24`` spans
    ``192.168.1.0`` through ``192.168.1.255``.
    """
    mask = prefix_to_mask(prefix)
    first = base & mask
    last = first | (~mask & ALL_ONES)
    return first, last
