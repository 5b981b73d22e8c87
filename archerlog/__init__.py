"""Archery training log: photos grouped into sessions and series in an XML database."""

__version__ = "0.1.0"