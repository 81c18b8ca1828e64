"""
Timetable Page Generator
========================
Renders one route/service/direction timetable as a static HTML page, with an
optional CSV export of the same grid.

Rows follow the aligned stop order; columns are trips ordered by first
departure. Cells where a trip does not stop are marked, not errors.
"""

import re
from pathlib import Path
from typing import Optional

from .base import BaseGenerator
from ..config import EMPTY_CELL
from ..data.gtfs_loader import GTFSLoader
from ..timetable import TimetableData, TimetableDataProcessor
from ..utils.html_builder import build_table_page


def _slug(value: str) -> str:
    return re.sub(r'[^A-Za-z0-9_-]+', '_', str(value)).strip('_') or 'x'


class TimetableGenerator(BaseGenerator):
    """Generator for a single timetable page."""

    def __init__(
        self,
        loader: Optional[GTFSLoader] = None,
        route_id: str = '',
        service_id: str = '',
        direction_id: Optional[str] = None,
        processor: Optional[TimetableDataProcessor] = None,
        output_dir: Optional[Path] = None,
        arrival_departure: bool = False,
    ):
        super().__init__(loader, output_dir)
        self.route_id = route_id
        self.service_id = service_id
        self.direction_id = direction_id
        self.processor = processor or TimetableDataProcessor(self.loader)
        self.arrival_departure = arrival_departure
        self._data: Optional[TimetableData] = None

        parts = ['timetable', _slug(route_id), _slug(service_id)]
        if direction_id is not None:
            parts.append(_slug(direction_id))
        self.output_filename = '_'.join(parts) + '.html'

    @property
    def data(self) -> TimetableData:
        """Timetable data, computed once per generator."""
        if self._data is None:
            self._log_progress(f"Aligning trips for route {self.route_id}...")
            self._data = self.processor.generate_timetable_data(
                self.route_id, self.service_id, self.direction_id
            )
        return self._data

    def generate(self) -> str:
        """Generate the timetable HTML."""
        data = self.data
        self._log_progress(f"Rendering {len(data.stops)} stops x {len(data.trips)} trips...")

        route_name = self.loader.get_route_name(self.route_id)
        subtitle = f"Service {self.service_id}"
        if data.direction_name:
            subtitle += f" · {data.direction_name}"

        table_html = self._grid_frame(data).to_html(
            classes='timetable', border=0, na_rep=EMPTY_CELL, escape=True
        )
        return build_table_page(
            title=f"Route {route_name} Timetable",
            table_html=table_html,
            subtitle=subtitle,
            warnings=data.warnings,
        )

    def save_csv(self, output_path: Optional[Path] = None) -> Path:
        """Write the timetable grid as CSV next to the HTML output."""
        if output_path is None:
            output_path = self.output_dir / self.output_filename.replace('.html', '.csv')
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        self._grid_frame(self.data).to_csv(output_path)
        return output_path

    def _grid_frame(self, data: TimetableData):
        """Grid with stop names as row labels and trip ids as column labels."""
        if self.arrival_departure and data.show_arrival_departure:
            arrivals = data.to_grid('arrival')
            departures = data.to_grid('departure')
            frame = arrivals[['stop_id', 'stop_name']].copy()
            for trip in data.trips:
                frame[f"{trip.trip_id} arr"] = arrivals[trip.trip_id]
                frame[f"{trip.trip_id} dep"] = departures[trip.trip_id]
        else:
            frame = data.to_grid('display')
        return frame.set_index('stop_name')
