"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from stopalign.data.gtfs_loader import GTFSLoader


STOPS = """stop_id,stop_name
A,Alpha
B,Bravo
C,Charlie
D,Delta
E,Echo
L1,Loop One
L2,Loop Two
L3,Loop Three
"""

ROUTES = """route_id,route_short_name,route_long_name
R1,10,Main Line
R2,,Loop Line
"""

TRIPS = """route_id,service_id,trip_id,trip_headsign,direction_id
R1,WK,T1,Central,0
R1,WK,T2,Central,0
R1,WK,T3,,0
R1,WK,T4,Airport,1
R1,SA,T5,Central,0
R2,WK,T6,Loop,
R2,WK,T7,Loop,
"""

# T1 rows are out of order and use stop_sequence 10 to check numeric sorting
STOP_TIMES = """trip_id,arrival_time,departure_time,stop_id,stop_sequence
T1,08:15:00,08:15:00,D,10
T1,08:00:00,08:00:00,A,1
T1,08:05:00,08:05:00,B,2
T1,08:10:00,08:10:00,C,3
T2,07:30:00,07:30:00,A,1
T2,07:40:00,07:40:00,C,2
T2,07:45:00,07:45:00,D,3
T3,09:00:00,09:00:00,A,1
T3,09:05:00,09:06:00,B,2
T3,09:10:00,09:10:00,C,3
T3,09:15:00,09:15:00,D,4
T4,08:00:00,08:00:00,D,1
T4,08:05:00,08:05:00,C,2
T4,08:10:00,08:10:00,B,3
T4,08:15:00,08:15:00,A,4
T5,10:00:00,10:00:00,A,1
T5,10:05:00,10:05:00,B,2
T6,06:00:00,06:00:00,L1,1
T6,06:10:00,06:10:00,L2,2
T6,06:20:00,06:20:00,L3,3
T6,06:30:00,06:30:00,L1,4
T7,07:00:00,07:00:00,L1,1
T7,07:10:00,07:10:00,L2,2
T7,07:20:00,07:20:00,L3,3
"""

FEED = {
    'stops.txt': STOPS,
    'routes.txt': ROUTES,
    'trips.txt': TRIPS,
    'stop_times.txt': STOP_TIMES,
}


@pytest.fixture
def make_feed(tmp_path):
    """Factory writing a GTFS feed; keyword overrides replace whole files."""
    def _make(**overrides) -> Path:
        feed_dir = tmp_path / 'feed'
        feed_dir.mkdir(exist_ok=True)
        files = dict(FEED)
        for name, content in overrides.items():
            files[f"{name}.txt"] = content
        for filename, content in files.items():
            if content is not None:
                (feed_dir / filename).write_text(content, encoding='utf-8')
        return feed_dir
    return _make


@pytest.fixture
def feed_dir(make_feed):
    """Default GTFS feed directory."""
    return make_feed()


@pytest.fixture
def loader(feed_dir):
    """GTFSLoader over the default feed."""
    return GTFSLoader(feed_dir)
