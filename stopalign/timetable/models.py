"""
Timetable Data Models
=====================
Structures produced by the timetable processor and consumed by renderers and
editors. Every per-trip map is keyed by supersequence position, never by
stop_id, so looped routes that visit a stop twice stay distinct.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from ..config import EMPTY_CELL
from ..scs import AlignmentResult, InvalidInput, PositionMapping
from ..utils.gtfs_time import clean_time, parse_gtfs_time


@dataclass
class DirectionInfo:
    """Direction of a route with its trip count."""
    id: str
    name: str
    trip_count: int


@dataclass
class EditableStopTime:
    """One editable timetable cell with its original values for change tracking."""
    stop_id: str
    local_position: int
    stop_sequence: Optional[int]
    arrival_time: Optional[str]
    departure_time: Optional[str]
    original_arrival_time: Optional[str] = None
    original_departure_time: Optional[str] = None

    @property
    def is_modified(self) -> bool:
        return (self.arrival_time != self.original_arrival_time
                or self.departure_time != self.original_departure_time)


@dataclass
class StopTimeEdit:
    """A pending change translated back to the trip's own stop order."""
    trip_id: str
    local_position: int
    stop_id: str
    stop_sequence: Optional[int]
    arrival_time: Optional[str]
    departure_time: Optional[str]


@dataclass
class AlignedTrip:
    """A trip with its times keyed by supersequence position."""
    trip_id: str
    headsign: str
    alignment_index: int
    mapping: PositionMapping
    stop_times: Dict[int, str] = field(default_factory=dict)
    arrival_times: Dict[int, str] = field(default_factory=dict)
    departure_times: Dict[int, str] = field(default_factory=dict)
    editable_stop_times: Dict[int, EditableStopTime] = field(default_factory=dict)
    attributes: Dict[str, object] = field(default_factory=dict)

    @property
    def first_departure(self) -> Optional[int]:
        """Seconds of the earliest-positioned time, or None."""
        for position in sorted(self.stop_times):
            return parse_gtfs_time(self.stop_times[position])
        return None


@dataclass
class TimetableData:
    """Everything needed to render and edit one route/service/direction timetable."""
    route: dict
    service_id: str
    stops: pd.DataFrame
    trips: List[AlignedTrip]
    alignment: Optional[AlignmentResult] = None
    direction_id: Optional[str] = None
    direction_name: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    unaligned_trip_ids: List[str] = field(default_factory=list)
    show_arrival_departure: bool = False

    @property
    def is_partial(self) -> bool:
        return bool(self.unaligned_trip_ids)

    @property
    def supersequence(self) -> List[str]:
        return self.stops['stop_id'].tolist()

    def get_trip(self, trip_id: str) -> AlignedTrip:
        for trip in self.trips:
            if trip.trip_id == trip_id:
                return trip
        raise InvalidInput(f"Trip {trip_id} is not part of this timetable")

    def to_grid(self, kind: str = 'display', fill: Optional[str] = None) -> pd.DataFrame:
        """
        Build the rendering grid.

        Args:
            kind: 'display', 'arrival' or 'departure'
            fill: Value for cells where a trip has no stop time. Missing
                  values are left as None when not given.

        Returns:
            DataFrame indexed by supersequence position with stop_id and
            stop_name columns followed by one column per trip.
        """
        attr = {
            'display': 'stop_times',
            'arrival': 'arrival_times',
            'departure': 'departure_times',
        }.get(kind)
        if attr is None:
            raise InvalidInput(f"Unknown grid kind: {kind!r}")

        grid = self.stops[['stop_id', 'stop_name']].copy()
        grid.index = self.stops['position'].tolist()
        grid.index.name = 'position'

        for trip in self.trips:
            times = getattr(trip, attr)
            grid[trip.trip_id] = [times.get(pos) for pos in grid.index]

        if fill is not None:
            trip_cols = [trip.trip_id for trip in self.trips]
            grid[trip_cols] = grid[trip_cols].fillna(fill)
        return grid

    def to_display_grid(self) -> pd.DataFrame:
        """Display grid with empty cells marked."""
        return self.to_grid('display', fill=EMPTY_CELL)

    def locate(self, trip_id: str, position: int) -> Optional[int]:
        """
        Translate a grid cell back to the trip's local stop position.

        Returns None when the trip does not serve that row.
        """
        return self.get_trip(trip_id).mapping.local_position(position)

    def edit_stop_time(
        self,
        trip_id: str,
        position: int,
        arrival_time: Optional[str] = None,
        departure_time: Optional[str] = None,
    ) -> EditableStopTime:
        """
        Change the times of one cell. Pass None to leave a value unchanged.

        Raises:
            InvalidInput: if the trip has no stop at that row or a time is
                malformed.
        """
        trip = self.get_trip(trip_id)
        local_pos = trip.mapping.local_position(position)
        if local_pos is None:
            raise InvalidInput(f"Trip {trip_id} has no stop at row {position}")

        cell = trip.editable_stop_times.get(position)
        if cell is None:
            raise InvalidInput(f"Trip {trip_id} has no editable stop time at row {position}")

        for value in (arrival_time, departure_time):
            if value is not None:
                try:
                    parse_gtfs_time(value)
                except ValueError as e:
                    raise InvalidInput(str(e)) from e

        if arrival_time is not None:
            cell.arrival_time = clean_time(arrival_time)
            _set_or_drop(trip.arrival_times, position, cell.arrival_time)
        if departure_time is not None:
            cell.departure_time = clean_time(departure_time)
            _set_or_drop(trip.departure_times, position, cell.departure_time)
        _set_or_drop(trip.stop_times, position, cell.departure_time or cell.arrival_time)
        return cell

    def pending_edits(self) -> List[StopTimeEdit]:
        """All modified cells, in grid column then row order."""
        edits = []
        for trip in self.trips:
            for position in sorted(trip.editable_stop_times):
                cell = trip.editable_stop_times[position]
                if not cell.is_modified:
                    continue
                edits.append(StopTimeEdit(
                    trip_id=trip.trip_id,
                    local_position=cell.local_position,
                    stop_id=cell.stop_id,
                    stop_sequence=cell.stop_sequence,
                    arrival_time=cell.arrival_time,
                    departure_time=cell.departure_time,
                ))
        return edits


def _set_or_drop(times: Dict[int, str], position: int, value: Optional[str]) -> None:
    if value:
        times[position] = value
    else:
        times.pop(position, None)
