"""Byte buffer, layout table, lookup tables and codecs."""
