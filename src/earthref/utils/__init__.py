"""Shared utility functions for earthref."""

from earthref.utils.caching import (
    file_age_seconds,
    get_cache_dir,
    get_eop_cache_dir,
    get_gravity_cache_dir,
    is_file_stale,
)

__all__ = [
    "file_age_seconds",
    "get_cache_dir",
    "get_eop_cache_dir",
    "get_gravity_cache_dir",
    "is_file_stale",
]
