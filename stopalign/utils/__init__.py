"""
Utility Modules
===============
Shared utilities for GTFS times and HTML generation.
"""

from .gtfs_time import parse_gtfs_time, format_gtfs_time, clean_time, is_missing
from .html_builder import build_table_page, get_base_styles

__all__ = [
    'parse_gtfs_time',
    'format_gtfs_time',
    'clean_time',
    'is_missing',
    'build_table_page',
    'get_base_styles'
]
