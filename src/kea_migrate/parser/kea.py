"""Parser for Kea DHCPv4 subnets in an OPNsense configuration."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from kea_migrate.model.subnet import SubnetRecord
from kea_migrate.parser.xml import child_text, find_child, find_children, parse_xml
from kea_migrate.vendor.opnsense import paths

logger = logging.getLogger(__name__)


def find_kea_dhcp4(soup: BeautifulSoup) -> Tag | None:
    """Locate the Kea ``dhcp4`` element, tolerating known case variants.

    Resolution order: ``opnsense`` root (or the document itself), then an
    optional ``OPNsense``/``opnsense`` model section, then ``Kea``, then
    ``dhcp4``.  Logs a warning naming the first missing level.
    """
    root = find_child(soup, paths.ROOT) or soup
    model = find_child(root, paths.MODEL_SECTION) or root
    kea = find_child(model, paths.KEA)
    if kea is None:
        logger.warning("No <Kea> section found in XML")
        return None
    dhcp4 = find_child(kea, paths.KEA_DHCP4)
    if dhcp4 is None:
        logger.warning("No <dhcp4> section found in Kea config")
    return dhcp4


def parse_subnets(xml: str | BeautifulSoup) -> list[SubnetRecord]:
    """Extract every ``subnet4`` definition from the Kea ``subnets`` section.

    Each entry carries its id in a ``uuid`` attribute (or a ``uuid`` child
    element) and its range as ``a.b.c.d/len`` or ``a.b.c.d/netmask``::

        <subnets>
          <subnet4 uuid="...">
            <subnet>192.168.1.0/24</subnet>
          </subnet4>
        </subnets>

    Entries without a ``subnet`` value are ignored; entries without an id
    or whose value does not split into exactly two ``/``-separated parts are
    skipped with a warning.  The base address and mask are not validated
    here.

    Args:
        xml: Raw XML, or a document already parsed with
            :func:`~kea_migrate.parser.xml.parse_xml`.

    Returns:
        Subnets in document order.
    """
    soup = parse_xml(xml) if isinstance(xml, str) else xml

    dhcp4 = find_kea_dhcp4(soup)
    if dhcp4 is None:
        return []
    section = find_child(dhcp4, paths.KEA_SUBNETS)
    if section is None:
        logger.warning("No <subnets> section found in dhcp4 config")
        return []

    subnets: list[SubnetRecord] = []
    for entry in find_children(section, paths.KEA_SUBNET4):
        cidr = child_text(entry, paths.KEA_SUBNET_CIDR)
        if not cidr:
            continue

        subnet_id = (entry.get(paths.UUID) or "").strip() or child_text(entry, paths.UUID)
        if not subnet_id:
            logger.warning("Subnet %s missing UUID", cidr)
            continue

        parts = cidr.split("/")
        if len(parts) != 2:
            logger.warning("Invalid subnet format: %s", cidr)
            continue

        subnets.append(SubnetRecord(id=subnet_id, base=parts[0].strip(), mask=parts[1].strip()))

    return subnets
