"""
Alignment Extraction
====================
Derives, for each input sequence, the mapping from its own positions to
positions in the supersequence.
"""

import logging
import operator
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import AlignmentIntegrityError, InvalidInput

logger = logging.getLogger(__name__)


def _walk(sequence: Sequence, supersequence: Sequence) -> List[int]:
    """
    Two-pointer walk matching each element to the earliest unconsumed equal
    slot. Returns the matched supersequence positions, which may be shorter
    than the sequence when it is not a subsequence.
    """
    matched = []
    local_pos = 0
    for super_pos, element in enumerate(supersequence):
        if local_pos >= len(sequence):
            break
        if element == sequence[local_pos]:
            matched.append(super_pos)
            local_pos += 1
    return matched


def is_subsequence(sequence: Sequence, supersequence: Sequence) -> bool:
    """True if sequence appears in order (not necessarily contiguous) in supersequence."""
    return len(_walk(sequence, supersequence)) == len(sequence)


class PositionMapping(Mapping):
    """
    Read-only mapping from local position to supersequence position.

    Strictly increasing and value-preserving. Compares equal to a plain dict
    with the same items.
    """

    __slots__ = ('_positions', '_reverse')

    def __init__(self, positions: Sequence[int]):
        self._positions: Tuple[int, ...] = tuple(positions)
        self._reverse: Dict[int, int] = {
            super_pos: local_pos for local_pos, super_pos in enumerate(self._positions)
        }

    def __getitem__(self, local_pos: int) -> int:
        if isinstance(local_pos, bool):
            raise KeyError(local_pos)
        try:
            index = operator.index(local_pos)
        except TypeError:
            raise KeyError(local_pos) from None
        if index < 0:
            raise KeyError(local_pos)
        try:
            return self._positions[index]
        except IndexError:
            raise KeyError(local_pos) from None

    def __iter__(self) -> Iterator[int]:
        return iter(range(len(self._positions)))

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"PositionMapping({dict(self)!r})"

    @property
    def positions(self) -> Tuple[int, ...]:
        """Supersequence positions in local order."""
        return self._positions

    def local_position(self, super_pos: int) -> Optional[int]:
        """Reverse lookup. None means the sequence has no element at super_pos."""
        return self._reverse.get(super_pos)


class AlignmentExtractor:
    """
    Builds PositionMappings of input sequences against a supersequence.

    Usage:
        extractor = AlignmentExtractor(sequences, supersequence)
        mapping = extractor.get_position_mapping(0)
        all_mappings = extractor.extract_all()
    """

    def __init__(self, sequences: Sequence[Sequence], supersequence: Sequence):
        self.sequences = [tuple(seq) for seq in sequences]
        self.supersequence = tuple(supersequence)
        self._cache: Dict[int, PositionMapping] = {}

    def get_position_mapping(self, sequence_index: int) -> PositionMapping:
        """
        Map positions of one input sequence onto the supersequence.

        Raises:
            InvalidInput: if sequence_index is out of range.
            AlignmentIntegrityError: if the sequence is not a subsequence of
                the supersequence.
        """
        if not isinstance(sequence_index, int) or not 0 <= sequence_index < len(self.sequences):
            raise InvalidInput(
                f"sequence index {sequence_index!r} out of range for "
                f"{len(self.sequences)} sequences"
            )
        if sequence_index in self._cache:
            return self._cache[sequence_index]

        sequence = self.sequences[sequence_index]
        matched = _walk(sequence, self.supersequence)

        if len(matched) != len(sequence):
            unmatched = sequence[len(matched)]
            logger.error(
                f"Alignment integrity failure for sequence {sequence_index}: "
                f"element {unmatched!r} at local position {len(matched)} has no slot. "
                f"sequence={list(sequence)} supersequence={list(self.supersequence)}"
            )
            raise AlignmentIntegrityError(
                f"sequence {sequence_index} is not a subsequence of the supersequence "
                f"(stopped at local position {len(matched)}, element {unmatched!r})",
                sequence_index=sequence_index,
                sequence=sequence,
                supersequence=self.supersequence,
            )

        mapping = PositionMapping(matched)
        self._cache[sequence_index] = mapping
        return mapping

    def extract_all(self) -> Dict[int, PositionMapping]:
        """Position mappings for every input sequence, keyed by index."""
        return {i: self.get_position_mapping(i) for i in range(len(self.sequences))}
