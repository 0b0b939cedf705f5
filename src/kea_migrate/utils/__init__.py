"""Helpers: IPv4 arithmetic and report rendering."""
