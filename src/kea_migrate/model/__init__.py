"""Typed records exchanged between the parser, the core and the writer."""
