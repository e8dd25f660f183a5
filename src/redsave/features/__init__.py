"""Checksums, record extraction, validation and reports."""
