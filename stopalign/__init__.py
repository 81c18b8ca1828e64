"""
stopalign
=========
Aligns per-trip stop sequences onto their shortest common supersequence and
builds supersequence-indexed timetables from GTFS data.
"""

from .scs import (
    AlignmentBudget,
    AlignmentExtractor,
    AlignmentIntegrityError,
    AlignmentResult,
    ComplexityExceeded,
    InvalidInput,
    PositionMapping,
    SCSEngine,
    StopAlignError,
    TimetableDataError,
    align_sequences,
    shortest_common_supersequence,
    visualize_alignment,
)

__version__ = '0.1.0'

__all__ = [
    'AlignmentBudget',
    'AlignmentExtractor',
    'AlignmentIntegrityError',
    'AlignmentResult',
    'ComplexityExceeded',
    'InvalidInput',
    'PositionMapping',
    'SCSEngine',
    'StopAlignError',
    'TimetableDataError',
    'align_sequences',
    'shortest_common_supersequence',
    'visualize_alignment',
]
