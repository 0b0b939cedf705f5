"""Write Kea reservations back into an OPNsense configuration document."""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Iterable, Sequence

from lxml import etree

from kea_migrate.errors import ConfigFileError, ConfigParseError
from kea_migrate.model.reservation import ReservationRecord
from kea_migrate.vendor.opnsense import paths

logger = logging.getLogger(__name__)


def inject_reservations(
    xml: str,
    reservations: Sequence[ReservationRecord],
    *,
    keep_existing: bool = False,
) -> str:
    """Return *xml* with *reservations* written to the Kea ``reservations`` section.

    Missing sections on the path ``opnsense/OPNsense/Kea/dhcp4/reservations``
    are created; existing ones are reused whatever spelling they use.  Each
    record becomes::

        <reservation uuid="...">
          <subnet>..</subnet> <hw_address>..</hw_address> <ip_address>..</ip_address>
          <hostname>..</hostname> <description>..</description>
        </reservation>

    ``hostname`` and ``description`` are only written when present.

    Args:
        xml: Original configuration document.
        reservations: Records to write, in output order.
        keep_existing: If ``True``, existing ``reservation`` elements are kept
            and the new ones appended after them; otherwise they are replaced.

    Returns:
        The pretty-printed document, starting with an XML declaration.

    Raises:
        ConfigParseError: If *xml* is malformed or its root is not ``opnsense``.
    """
    parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False)
    try:
        root = etree.fromstring(xml.encode("utf-8"), parser)
    except etree.XMLSyntaxError as exc:
        raise ConfigParseError(f"Failed to inject reservations: {exc}") from exc
    if root.tag != paths.ROOT:
        raise ConfigParseError(
            f"Failed to inject reservations: root element is <{root.tag}>, "
            f"expected <{paths.ROOT}>"
        )

    # Kea may sit directly under the root when there is no model section.
    node = _find(root, paths.MODEL_SECTION)
    if node is None:
        node = root if _find(root, paths.KEA) is not None else _child(root, paths.MODEL_SECTION)
    for names in (paths.KEA, paths.KEA_DHCP4, paths.KEA_RESERVATIONS):
        node = _child(node, names)

    if not keep_existing:
        existing = node.findall(paths.KEA_RESERVATION)
        for element in existing:
            node.remove(element)
        if existing:
            logger.info("Replaced %d existing Kea reservation(s)", len(existing))

    for r in reservations:
        _append_reservation(node, r)

    return etree.tostring(
        root.getroottree(),
        pretty_print=True,
        xml_declaration=True,
        encoding="UTF-8",
    ).decode("utf-8")


def write_config(path: str | pathlib.Path, text: str) -> None:
    """Write *text* to *path* as UTF-8.

    Raises:
        ConfigFileError: If the file cannot be written.
    """
    path = pathlib.Path(path)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigFileError(str(path), f"Cannot write file ({exc.strerror})") from exc
    logger.info("Wrote %s (%d bytes)", path, len(text.encode("utf-8")))


def _find(parent: etree._Element, names: Iterable[str]) -> etree._Element | None:
    for name in names:
        found = parent.find(name)
        if found is not None:
            return found
    return None


def _child(parent: etree._Element, names: Sequence[str]) -> etree._Element:
    """Return the first existing child spelled as one of *names*, else create it."""
    found = _find(parent, names)
    if found is None:
        found = etree.SubElement(parent, names[0])
    return found


def _append_reservation(parent: etree._Element, r: ReservationRecord) -> None:
    element = etree.SubElement(parent, paths.KEA_RESERVATION, {paths.UUID: r.uuid})
    fields = [
        (paths.KEA_RESERVATION_SUBNET, r.subnet),
        (paths.KEA_RESERVATION_HW_ADDRESS, r.hw_address),
        (paths.KEA_RESERVATION_IP_ADDRESS, r.ip_address),
        (paths.KEA_RESERVATION_HOSTNAME, r.hostname),
        (paths.KEA_RESERVATION_DESCRIPTION, r.description),
    ]
    for tag, value in fields:
        if value:
            etree.SubElement(element, tag).text = value
