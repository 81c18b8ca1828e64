"""
Configuration and Constants
============================
Centralized configuration for the stop alignment toolkit.
"""

from pathlib import Path

# ============================================================================
# PATHS
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "outputs"

# ============================================================================
# GTFS FILE DEFINITIONS
# ============================================================================

GTFS_FILES = {
    'stops': 'stops.txt',
    'stop_times': 'stop_times.txt',
    'trips': 'trips.txt',
    'routes': 'routes.txt',
}

REQUIRED_GTFS_FILES = ['stops.txt', 'routes.txt', 'trips.txt', 'stop_times.txt']

# Column data types for consistent loading. stop_sequence stays a string here
# and is converted with pd.to_numeric where ordering matters.
GTFS_DTYPES = {
    'trip_id': str,
    'route_id': str,
    'stop_id': str,
    'service_id': str,
    'shape_id': str,
    'direction_id': str,
    'stop_sequence': str,
    'arrival_time': str,
    'departure_time': str,
}

# ============================================================================
# ALGORITHM PARAMETERS
# ============================================================================

# Upper bound on memoized cursor states explored by one SCS computation
MAX_SCS_STATES = 500_000

# Wall-clock budget for one SCS computation, in seconds
SCS_TIMEOUT_SECONDS = 30.0

# How often (in expanded states) the search checks the wall clock
SCS_CLOCK_CHECK_INTERVAL = 1024

# Fall back to a partial timetable instead of failing when the budget is hit
ALLOW_PARTIAL_TIMETABLE = True

# ============================================================================
# TIMETABLE DISPLAY
# ============================================================================

DEFAULT_DIRECTION_ID = '0'

DIRECTION_NAMES = {
    '0': 'Outbound',
    '1': 'Inbound',
}

# Marker for grid cells where a trip does not serve the stop
EMPTY_CELL = '-'
