"""Workbook access: grid store, header-keyed rows and multi-sheet records."""
