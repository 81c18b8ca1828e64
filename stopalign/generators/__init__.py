"""
Generators package.
Contains output generators for timetable pages.
"""

from .base import BaseGenerator
from .timetable_page import TimetableGenerator

__all__ = [
    'BaseGenerator',
    'TimetableGenerator',
]
