"""
Timetable Data Processor
========================
Builds timetable data for one route/service/direction:

1. Filter trips by route, service and optional direction
2. Collect each trip's stop ids ordered by stop_sequence
3. Align the trips onto their shortest common supersequence
4. Re-key every trip's stop times by supersequence position

Fails hard on data integrity issues (unknown route, no trips, stop ids missing
from stops.txt).
"""

import logging
from typing import List, Optional

import pandas as pd

from ..config import ALLOW_PARTIAL_TIMETABLE, DIRECTION_NAMES
from ..data.gtfs_loader import GTFSLoader
from ..scs import (
    AlignmentBudget,
    AlignmentResult,
    ComplexityExceeded,
    TimetableDataError,
    align_sequences,
    is_subsequence,
)
from ..utils.gtfs_time import clean_time, is_missing, parse_gtfs_time
from .models import AlignedTrip, DirectionInfo, EditableStopTime, TimetableData

logger = logging.getLogger(__name__)


class _FixedSupersequence:
    """Engine stand-in that returns a precomputed row order."""

    def __init__(self, supersequence):
        self.supersequence = tuple(supersequence)

    def compute(self, sequences):
        return self.supersequence


class TimetableDataProcessor:
    """
    Generates aligned timetable data from GTFS tables.

    Usage:
        processor = TimetableDataProcessor(GTFSLoader('feed/'))
        data = processor.generate_timetable_data('R1', 'WEEKDAY', '0')
        grid = data.to_display_grid()
    """

    def __init__(
        self,
        loader: GTFSLoader,
        budget: Optional[AlignmentBudget] = None,
        engine=None,
        allow_partial: bool = ALLOW_PARTIAL_TIMETABLE,
    ):
        self.loader = loader
        self.budget = budget
        self.engine = engine
        self.allow_partial = allow_partial

    # ========================================================================
    # DIRECTIONS
    # ========================================================================

    @staticmethod
    def get_direction_name(direction_id: str) -> str:
        """Human-readable direction name (GTFS: 0 = Outbound, 1 = Inbound)."""
        direction_id = str(direction_id)
        return DIRECTION_NAMES.get(direction_id, f"Direction {direction_id}")

    def get_available_directions(self, route_id: str, service_id: str) -> List[DirectionInfo]:
        """Directions with at least one trip for the route and service, sorted by id."""
        trips = self.loader.get_trips(route_id, service_id)
        counts = trips.groupby('direction_id').size()
        return [
            DirectionInfo(id=str(dir_id), name=self.get_direction_name(dir_id), trip_count=int(count))
            for dir_id, count in sorted(counts.items(), key=lambda item: str(item[0]))
        ]

    # ========================================================================
    # TIMETABLE GENERATION
    # ========================================================================

    def generate_timetable_data(
        self,
        route_id: str,
        service_id: str,
        direction_id: Optional[str] = None
    ) -> TimetableData:
        """
        Generate aligned timetable data.

        Args:
            route_id: GTFS route identifier
            service_id: GTFS service identifier
            direction_id: Optional direction filter ('0', '1', ...)

        Returns:
            TimetableData

        Raises:
            TimetableDataError: route not found, no trips, or stop ids missing
            ComplexityExceeded: alignment over budget and partial mode off
        """
        route = self.loader.get_route(route_id)
        if route is None:
            raise TimetableDataError(f"Route {route_id} not found")

        trips = self.loader.get_trips(route_id, service_id, direction_id)
        if trips.empty:
            direction_filter = f" and direction {direction_id}" if direction_id is not None else ''
            raise TimetableDataError(
                f"No trips found for route {route_id}, service {service_id}{direction_filter}"
            )

        trip_ids = trips['trip_id'].tolist()
        stop_times = self.loader.get_stop_times_by_trip(trip_ids)
        sequences = [self._stop_ids(tid, stop_times[tid]) for tid in trip_ids]

        logger.info(
            f"Aligning {len(trip_ids)} trips for route {route_id}, service {service_id}"
            + (f", direction {direction_id}" if direction_id is not None else '')
        )

        warnings: List[str] = []
        unaligned: List[str] = []
        try:
            alignment = align_sequences(sequences, budget=self.budget, engine=self.engine)
            aligned_indices = list(range(len(trip_ids)))
        except ComplexityExceeded as e:
            if not self.allow_partial:
                raise
            alignment, aligned_indices = self._partial_alignment(sequences)
            kept = set(aligned_indices)
            unaligned = [tid for i, tid in enumerate(trip_ids) if i not in kept]
            message = (
                f"Stop order too complex to align exactly ({e}); showing "
                f"{len(aligned_indices)} of {len(trip_ids)} trips"
            )
            logger.warning(message)
            warnings.append(message)

        stops = self._build_stops(alignment.supersequence)

        aligned_trips = []
        for alignment_index, trip_index in enumerate(aligned_indices):
            row = trips.iloc[trip_index]
            trip_id = trip_ids[trip_index]
            aligned_trips.append(self._align_trip(
                row, stop_times[trip_id], alignment, alignment_index
            ))
        aligned_trips = self._sort_by_first_departure(aligned_trips)

        has_split_times = any(
            cell.arrival_time != cell.departure_time
            for trip in aligned_trips
            for cell in trip.editable_stop_times.values()
        )

        logger.info(
            f"Timetable ready: {len(stops)} stops x {len(aligned_trips)} trips"
        )
        return TimetableData(
            route=route,
            service_id=service_id,
            stops=stops,
            trips=aligned_trips,
            alignment=alignment,
            direction_id=direction_id,
            direction_name=self.get_direction_name(direction_id) if direction_id is not None else None,
            warnings=warnings,
            unaligned_trip_ids=unaligned,
            show_arrival_departure=has_split_times,
        )

    # ========================================================================
    # HELPERS
    # ========================================================================

    @staticmethod
    def _stop_ids(trip_id: str, frame: pd.DataFrame) -> List[str]:
        stop_ids = frame['stop_id'].tolist()
        for position, stop_id in enumerate(stop_ids):
            if is_missing(stop_id):
                raise TimetableDataError(
                    f"Trip {trip_id} has a stop time without stop_id at position {position}"
                )
        return [str(stop_id) for stop_id in stop_ids]

    def _partial_alignment(self, sequences):
        """
        Row order from the longest trip; only trips that fit it are aligned.

        Returns:
            (AlignmentResult over the fitting trips, their indices in the input)
        """
        longest = max(range(len(sequences)), key=lambda i: (len(sequences[i]), -i))
        rows = sequences[longest]
        fitting = [i for i, seq in enumerate(sequences) if is_subsequence(seq, rows)]
        alignment = align_sequences(
            [sequences[i] for i in fitting],
            engine=_FixedSupersequence(rows),
        )
        return alignment, fitting

    def _build_stops(self, supersequence) -> pd.DataFrame:
        """Stop rows for the supersequence, in order."""
        stops = self.loader.stops
        known = stops.drop_duplicates('stop_id').set_index('stop_id')

        missing = [sid for sid in dict.fromkeys(supersequence) if sid not in known.index]
        if missing:
            message = f"Stop(s) {missing} not found in stops.txt but referenced in stop_times.txt"
            logger.error(f"GTFS Data Integrity Error: {message}")
            raise TimetableDataError(message)

        frame = known.loc[list(supersequence)].reset_index()
        if 'stop_name' not in frame.columns:
            frame['stop_name'] = frame['stop_id']
        frame.insert(0, 'position', range(len(frame)))
        return frame

    @staticmethod
    def _align_trip(
        row: pd.Series,
        frame: pd.DataFrame,
        alignment: AlignmentResult,
        alignment_index: int
    ) -> AlignedTrip:
        """Re-key one trip's stop times by supersequence position."""
        trip_id = str(row['trip_id'])
        mapping = alignment.get_position_mapping(alignment_index)

        headsign = row.get('trip_headsign')
        trip = AlignedTrip(
            trip_id=trip_id,
            headsign=trip_id if is_missing(headsign) else str(headsign),
            alignment_index=alignment_index,
            mapping=mapping,
            attributes={k: v for k, v in row.to_dict().items() if not is_missing(v)},
        )

        records = frame.to_dict('records')
        for local_pos, record in enumerate(records):
            position = mapping[local_pos]
            arrival = clean_time(record.get('arrival_time'))
            departure = clean_time(record.get('departure_time'))
            for value in (arrival, departure):
                try:
                    parse_gtfs_time(value)
                except ValueError as e:
                    raise TimetableDataError(
                        f"Trip {trip_id} has an invalid time {value!r} at position {local_pos}"
                    ) from e
            display = departure or arrival

            if arrival:
                trip.arrival_times[position] = arrival
            if departure:
                trip.departure_times[position] = departure
            if display:
                trip.stop_times[position] = display

            sequence = record.get('stop_sequence')
            trip.editable_stop_times[position] = EditableStopTime(
                stop_id=str(record['stop_id']),
                local_position=local_pos,
                stop_sequence=None if is_missing(sequence) else int(sequence),
                arrival_time=arrival,
                departure_time=departure,
                original_arrival_time=arrival,
                original_departure_time=departure,
            )

        logger.debug(
            f"Trip {trip_id}: {len(records)} stops mapped to positions {list(mapping.positions)}"
        )
        return trip

    @staticmethod
    def _sort_by_first_departure(trips: List[AlignedTrip]) -> List[AlignedTrip]:
        """Order columns by first departure; trips without times go last."""
        def key(trip: AlignedTrip):
            first = trip.first_departure
            return (first is None, first or 0)
        return sorted(trips, key=key)
