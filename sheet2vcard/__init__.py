"""Spreadsheet (name/phone rows) -> vCard 3.0 converter."""

__version__ = "0.1.0"
