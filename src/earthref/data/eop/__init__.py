"""Seed IERS EOP product files."""
