"""
Data Loading Modules
====================
GTFS table loading utilities.
"""

from .gtfs_loader import GTFSLoader

__all__ = ['GTFSLoader']
