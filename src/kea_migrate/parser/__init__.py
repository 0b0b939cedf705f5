"""OPNsense XML document parsers."""
