"""
Shortest common supersequence and alignment extraction.
"""

from .errors import (
    StopAlignError,
    InvalidInput,
    ComplexityExceeded,
    AlignmentIntegrityError,
    TimetableDataError,
)
from .engine import AlignmentBudget, SCSEngine, shortest_common_supersequence
from .alignment import AlignmentExtractor, PositionMapping, is_subsequence
from .aligner import AlignmentResult, align_sequences
from .visualize import visualize_alignment

__all__ = [
    'StopAlignError',
    'InvalidInput',
    'ComplexityExceeded',
    'AlignmentIntegrityError',
    'TimetableDataError',
    'AlignmentBudget',
    'SCSEngine',
    'shortest_common_supersequence',
    'AlignmentExtractor',
    'PositionMapping',
    'is_subsequence',
    'AlignmentResult',
    'align_sequences',
    'visualize_alignment',
]
