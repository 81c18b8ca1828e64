"""
Sequence Aligner
================
Runs the SCS engine and the alignment extractor as two stages connected only
through the supersequence tuple, and bundles the outcome for consumers.
"""

import logging
from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .alignment import AlignmentExtractor, PositionMapping
from .engine import AlignmentBudget, SCSEngine, normalize_sequences
from .errors import InvalidInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignmentResult:
    """Supersequence plus one PositionMapping per input sequence."""
    sequences: Tuple[tuple, ...]
    supersequence: tuple
    alignments: Dict[int, PositionMapping] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.supersequence)

    def get_position_mapping(self, sequence_index: int) -> PositionMapping:
        try:
            return self.alignments[sequence_index]
        except KeyError:
            raise InvalidInput(
                f"sequence index {sequence_index!r} out of range for "
                f"{len(self.sequences)} sequences"
            ) from None

    def supersequence_position(self, sequence_index: int, local_pos: int) -> int:
        """Forward lookup: local position of a sequence -> supersequence position."""
        mapping = self.get_position_mapping(sequence_index)
        try:
            return mapping[local_pos]
        except KeyError:
            raise InvalidInput(
                f"local position {local_pos!r} out of range for sequence {sequence_index}"
            ) from None

    def local_position(self, sequence_index: int, super_pos: int) -> Optional[int]:
        """
        Reverse lookup: supersequence position -> local position.

        Returns None when the sequence has no element at that position, which
        is the normal case for a trip that skips a stop.
        """
        return self.get_position_mapping(sequence_index).local_position(super_pos)

    def realign(self, sequence_index: int, values) -> Dict[int, Any]:
        """
        Re-key per-local-position data by supersequence position.

        Args:
            sequence_index: Which input sequence the data belongs to.
            values: Either a mapping local_pos -> value or a list indexed by
                local position. Missing keys and None entries are skipped.

        Returns:
            Dict of supersequence position -> value.
        """
        mapping = self.get_position_mapping(sequence_index)
        if isinstance(values, Mapping):
            items = values.items()
        else:
            items = enumerate(values)

        realigned = {}
        for local_pos, value in items:
            if value is None:
                continue
            if local_pos not in mapping:
                raise InvalidInput(
                    f"local position {local_pos!r} out of range for sequence {sequence_index}"
                )
            realigned[mapping[local_pos]] = value
        return realigned

    def aligned_row(self, sequence_index: int) -> List[Any]:
        """The sequence spread over the supersequence, None where it has no element."""
        row: List[Any] = [None] * len(self.supersequence)
        mapping = self.get_position_mapping(sequence_index)
        sequence = self.sequences[sequence_index]
        for local_pos, super_pos in mapping.items():
            row[super_pos] = sequence[local_pos]
        return row


def align_sequences(
    sequences: Sequence[Sequence],
    budget: Optional[AlignmentBudget] = None,
    engine=None,
) -> AlignmentResult:
    """
    Compute the shortest common supersequence and per-sequence alignments.

    Args:
        sequences: Ordered stop-id lists, one per trip.
        budget: Search limits for the default engine.
        engine: Any object with compute(sequences) -> supersequence. Defaults
                to SCSEngine(budget).

    Returns:
        AlignmentResult

    Raises:
        InvalidInput, ComplexityExceeded, AlignmentIntegrityError
    """
    seqs = normalize_sequences(sequences)
    if engine is None:
        engine = SCSEngine(budget)

    supersequence = tuple(engine.compute(seqs))
    alignments = AlignmentExtractor(seqs, supersequence).extract_all()

    logger.debug(
        f"Aligned {len(seqs)} sequences onto supersequence of length {len(supersequence)}"
    )
    return AlignmentResult(
        sequences=tuple(seqs),
        supersequence=supersequence,
        alignments=alignments,
    )
