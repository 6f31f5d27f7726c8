"""Seed ICGEM gravity field files."""
