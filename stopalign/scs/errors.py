"""
Alignment Errors
================
Exception hierarchy shared by the SCS engine, the alignment extractor and the
timetable processor.
"""

from typing import Optional


class StopAlignError(Exception):
    """Base class for all stopalign errors."""


class InvalidInput(StopAlignError, ValueError):
    """Sequence data is missing or malformed."""


class ComplexityExceeded(StopAlignError):
    """
    The SCS search ran past its state or time budget.

    Recoverable: callers can retry with fewer sequences, raise the budget,
    or present a partial view.
    """

    def __init__(
        self,
        message: str,
        states_explored: int = 0,
        max_states: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        elapsed_seconds: float = 0.0,
    ):
        super().__init__(message)
        self.states_explored = states_explored
        self.max_states = max_states
        self.timeout_seconds = timeout_seconds
        self.elapsed_seconds = elapsed_seconds


class AlignmentIntegrityError(StopAlignError):
    """A position mapping could not be built against the supersequence."""

    def __init__(self, message: str, sequence_index: int, sequence=(), supersequence=()):
        super().__init__(message)
        self.sequence_index = sequence_index
        self.sequence = tuple(sequence)
        self.supersequence = tuple(supersequence)


class TimetableDataError(StopAlignError):
    """GTFS data needed to build a timetable is missing or inconsistent."""
