"""
GTFS Data Loader
================
GTFS table loading with lazy loading and caching, plus the trip and stop-time
lookups the timetable processor needs.
"""

import pandas as pd
from pathlib import Path
from typing import Dict, Optional, Iterable
import logging

from ..config import DATA_DIR, GTFS_FILES, GTFS_DTYPES, REQUIRED_GTFS_FILES, DEFAULT_DIRECTION_ID

logger = logging.getLogger(__name__)


class GTFSLoader:
    """
    GTFS data loader with lazy loading and caching.

    Usage:
        loader = GTFSLoader('path/to/feed')

        # Access individual tables as properties (lazy loaded)
        stops = loader.stops
        trips = loader.trips

        # Stop times for a set of trips, each ordered by stop_sequence
        by_trip = loader.get_stop_times_by_trip(['T1', 'T2'])
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize the GTFS loader.

        Args:
            data_dir: Path to directory containing GTFS txt files.
                      Defaults to project's data/ directory.
        """
        self.data_dir = Path(data_dir) if data_dir else DATA_DIR
        self._cache: Dict[str, pd.DataFrame] = {}
        self._validate_data_dir()

    def _validate_data_dir(self) -> None:
        """Check if data directory exists and has required files."""
        if not self.data_dir.exists():
            raise FileNotFoundError(f"Data directory not found: {self.data_dir}")

        missing = [f for f in REQUIRED_GTFS_FILES if not (self.data_dir / f).exists()]
        if missing:
            logger.warning(f"Missing GTFS files: {missing}")

    def _load_table(self, table_name: str) -> pd.DataFrame:
        """
        Load a single GTFS table from disk.

        Args:
            table_name: Name of the table (e.g., 'stops', 'routes')

        Returns:
            DataFrame with the table data
        """
        if table_name in self._cache:
            return self._cache[table_name]

        filename = GTFS_FILES.get(table_name, f"{table_name}.txt")
        filepath = self.data_dir / filename

        if not filepath.exists():
            raise FileNotFoundError(f"GTFS file not found: {filepath}")

        logger.info(f"Loading {table_name} from {filepath}")

        df = pd.read_csv(filepath, dtype=dict(GTFS_DTYPES), low_memory=False)
        df.columns = [str(c).strip() for c in df.columns]
        logger.info(f"  Loaded {table_name}: {df.shape[0]:,} rows, {df.shape[1]} columns")

        self._cache[table_name] = df
        return df

    def clear_cache(self) -> None:
        """Clear the internal cache to free memory."""
        self._cache.clear()
        logger.info("Cache cleared")

    # ========================================================================
    # LAZY PROPERTIES - Access individual tables
    # ========================================================================

    @property
    def stops(self) -> pd.DataFrame:
        """Stops with ids and names."""
        return self._load_table('stops')

    @property
    def routes(self) -> pd.DataFrame:
        """Route definitions."""
        return self._load_table('routes')

    @property
    def trips(self) -> pd.DataFrame:
        """Individual trips for each route."""
        return self._load_table('trips')

    @property
    def stop_times(self) -> pd.DataFrame:
        """Stop arrival/departure times for each trip."""
        return self._load_table('stop_times')

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    def get_route(self, route_id: str) -> Optional[dict]:
        """Route row as a dict, or None if unknown."""
        routes = self.routes
        match = routes[routes['route_id'] == route_id]
        if match.empty:
            return None
        return match.iloc[0].to_dict()

    def get_route_name(self, route_id: str) -> str:
        """Get the display name for a route."""
        route = self.get_route(route_id)
        if route is None:
            return route_id
        for col in ('route_short_name', 'route_long_name'):
            value = route.get(col)
            if value is not None and not pd.isna(value) and str(value).strip():
                return str(value)
        return route_id

    def get_stop(self, stop_id: str) -> Optional[dict]:
        """Stop row as a dict, or None if unknown."""
        stops = self.stops
        match = stops[stops['stop_id'] == stop_id]
        if match.empty:
            return None
        return match.iloc[0].to_dict()

    def get_trips(
        self,
        route_id: str,
        service_id: Optional[str] = None,
        direction_id: Optional[str] = None
    ) -> pd.DataFrame:
        """
        Trips of a route, optionally filtered by service and direction.

        Trips without a direction_id are treated as direction '0'.
        File order is preserved.
        """
        trips = self.trips
        result = trips[trips['route_id'] == route_id].copy()

        if 'direction_id' not in result.columns:
            result['direction_id'] = DEFAULT_DIRECTION_ID
        result['direction_id'] = result['direction_id'].fillna(DEFAULT_DIRECTION_ID).astype(str)

        if service_id is not None:
            result = result[result['service_id'] == service_id]
        if direction_id is not None:
            result = result[result['direction_id'] == str(direction_id)]

        return result.reset_index(drop=True)

    def get_stop_times_by_trip(self, trip_ids: Iterable[str]) -> Dict[str, pd.DataFrame]:
        """
        Stop times for several trips, each sorted by numeric stop_sequence.

        Returns:
            Dictionary trip_id -> DataFrame. Trips with no stop times map to
            an empty DataFrame.
        """
        trip_ids = list(trip_ids)
        stop_times = self.stop_times

        subset = stop_times[stop_times['trip_id'].isin(set(trip_ids))].copy()
        subset['stop_sequence'] = pd.to_numeric(subset['stop_sequence'], errors='coerce')
        subset = subset.sort_values(['trip_id', 'stop_sequence'], kind='mergesort')

        grouped = {tid: group.reset_index(drop=True) for tid, group in subset.groupby('trip_id', sort=False)}
        empty = subset.iloc[0:0]
        return {tid: grouped.get(tid, empty) for tid in trip_ids}
