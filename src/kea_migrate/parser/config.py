"""Whole-document entry points: file reading, well-formedness check and extraction."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field

from lxml import etree

from kea_migrate.errors import ConfigFileError
from kea_migrate.model.mapping import MappingRecord
from kea_migrate.model.subnet import SubnetRecord
from kea_migrate.parser.isc import parse_static_mappings
from kea_migrate.parser.kea import parse_subnets
from kea_migrate.parser.xml import parse_xml


@dataclass
class ParsedConfig:
    """Records extracted from one OPNsense configuration document."""

    static_mappings: list[MappingRecord] = field(default_factory=list)
    subnets: list[SubnetRecord] = field(default_factory=list)


@dataclass
class XmlValidation:
    """Outcome of :func:`validate_xml`.

    Attributes:
        valid: ``True`` if the document is well-formed.
        error: Parser message when ``valid`` is ``False``.
    """

    valid: bool
    error: str | None = None


def validate_xml(xml: str) -> XmlValidation:
    """Check that *xml* is a well-formed XML document.

    Empty or whitespace-only input is reported as invalid.
    """
    if not xml or not xml.strip():
        return XmlValidation(valid=False, error="Document is empty")
    try:
        etree.fromstring(xml.encode("utf-8"), etree.XMLParser(resolve_entities=False))
    except etree.XMLSyntaxError as exc:
        return XmlValidation(valid=False, error=str(exc))
    return XmlValidation(valid=True)


def parse_config(xml: str) -> ParsedConfig:
    """Parse *xml* once and extract both static mappings and Kea subnets."""
    soup = parse_xml(xml)
    return ParsedConfig(
        static_mappings=parse_static_mappings(soup),
        subnets=parse_subnets(soup),
    )


def read_config(path: str | pathlib.Path) -> str:
    """Read a configuration file as UTF-8 text.

    Raises:
        ConfigFileError: If the file does not exist, cannot be read or
            decoded as UTF-8, or is empty.
    """
    path = pathlib.Path(path)
    if not path.is_file():
        raise ConfigFileError(str(path), "File not found")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigFileError(str(path), "File is not valid UTF-8") from exc
    except OSError as exc:
        raise ConfigFileError(str(path), f"Cannot read file ({exc.strerror})") from exc
    if not text.strip():
        raise ConfigFileError(str(path), "Input file is empty")
    return text
