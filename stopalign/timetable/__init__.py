"""
Timetable Modules
=================
Turns aligned trips into a supersequence-indexed timetable grid.
"""

from .models import AlignedTrip, DirectionInfo, EditableStopTime, StopTimeEdit, TimetableData
from .processor import TimetableDataProcessor

__all__ = [
    'AlignedTrip',
    'DirectionInfo',
    'EditableStopTime',
    'StopTimeEdit',
    'TimetableData',
    'TimetableDataProcessor',
]
