"""Parser for ISC DHCP static mappings in an OPNsense configuration."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from kea_migrate.model.mapping import MappingRecord
from kea_migrate.parser.xml import child_text, find_child, find_children, parse_xml
from kea_migrate.vendor.opnsense import paths

logger = logging.getLogger(__name__)


def parse_static_mappings(xml: str | BeautifulSoup) -> list[MappingRecord]:
    """Extract every ``staticmap`` entry from the ``dhcpd`` section.

    The section is looked up under the ``opnsense`` root element, falling
    back to a ``dhcpd`` element at document level.  Each child of ``dhcpd``
    is an interface (``lan``, ``opt1``, ...); interfaces without static
    mappings are skipped::

        <dhcpd>
          <lan>
            <staticmap>
              <mac>..</mac> <ipaddr>..</ipaddr> <hostname>..</hostname>
              <descr>..</descr> <cid>..</cid>
            </staticmap>
          </lan>
        </dhcpd>

    Args:
        xml: Raw XML, or a document already parsed with
            :func:`~kea_migrate.parser.xml.parse_xml`.

    Returns:
        Mappings in document order.  ``mac`` and ``ipaddr`` are ``""`` when
        missing; optional fields are ``None`` when missing or empty.
    """
    soup = parse_xml(xml) if isinstance(xml, str) else xml

    dhcpd = find_child(find_child(soup, paths.ROOT), paths.ISC_DHCPD) or find_child(
        soup, paths.ISC_DHCPD
    )
    if dhcpd is None:
        logger.warning("No <%s> section found in XML", paths.ISC_DHCPD)
        return []

    mappings: list[MappingRecord] = []
    for interface in dhcpd.find_all(recursive=False):
        if not isinstance(interface, Tag):
            continue
        for staticmap in find_children(interface, paths.ISC_STATICMAP):
            mappings.append(_parse_staticmap(staticmap))
        logger.debug("Interface %s: %d mappings so far", interface.name, len(mappings))

    return mappings


def _parse_staticmap(staticmap: Tag) -> MappingRecord:
    return MappingRecord(
        mac=child_text(staticmap, paths.ISC_MAC) or "",
        ipaddr=child_text(staticmap, paths.ISC_IPADDR) or "",
        hostname=child_text(staticmap, paths.ISC_HOSTNAME),
        description=child_text(staticmap, paths.ISC_DESCRIPTION),
        cid=child_text(staticmap, paths.ISC_CID),
    )
