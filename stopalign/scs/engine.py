"""
Shortest Common Supersequence Engine
====================================
Exact SCS of any number of sequences.

The search walks states made of one read cursor per sequence. Each state is
packed into a single mixed-radix integer and memoized, so the work is bounded
by the product of (len_i + 1) over all sequences. For timetable sized input
(tens of stops, tens of trips that mostly agree) only a small fraction of that
product is ever reached.

Move rules, in order:
    1. If every unfinished sequence has the same head, consume it from all of
       them and emit it once.
    2. Otherwise try each unfinished sequence by ascending index: emit its
       head and advance every sequence currently sitting on an equal head.
       The first strictly shortest result wins, which keeps the output
       deterministic for a given input order.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import MAX_SCS_STATES, SCS_CLOCK_CHECK_INTERVAL, SCS_TIMEOUT_SECONDS
from .errors import ComplexityExceeded, InvalidInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignmentBudget:
    """
    Limits for one SCS computation.

    Attributes:
        max_states: Maximum number of memoized cursor states. None = unbounded.
        timeout_seconds: Wall-clock limit in seconds. None = unbounded.
    """
    max_states: Optional[int] = MAX_SCS_STATES
    timeout_seconds: Optional[float] = SCS_TIMEOUT_SECONDS

    def __post_init__(self):
        if self.max_states is not None and self.max_states < 1:
            raise InvalidInput(f"max_states must be positive, got {self.max_states}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise InvalidInput(f"timeout_seconds must be positive, got {self.timeout_seconds}")

    @classmethod
    def unbounded(cls) -> 'AlignmentBudget':
        return cls(max_states=None, timeout_seconds=None)


def normalize_sequences(sequences) -> List[tuple]:
    """
    Validate input sequences and return them as a list of tuples.

    Raises:
        InvalidInput: if the collection or any sequence is None, a sequence is
            not a list/tuple, or an element is None.
    """
    if sequences is None:
        raise InvalidInput("sequences must not be None")
    if isinstance(sequences, (str, bytes)) or not isinstance(sequences, (list, tuple)):
        raise InvalidInput(
            f"sequences must be a list of sequences, got {type(sequences).__name__}"
        )

    normalized = []
    for index, seq in enumerate(sequences):
        if seq is None:
            raise InvalidInput(f"sequence {index} is None")
        if not isinstance(seq, (list, tuple)):
            raise InvalidInput(
                f"sequence {index} must be a list or tuple, got {type(seq).__name__}"
            )
        for position, element in enumerate(seq):
            if element is None:
                raise InvalidInput(f"sequence {index} has a None element at position {position}")
        normalized.append(tuple(seq))
    return normalized


class SCSEngine:
    """
    Exact shortest common supersequence solver.

    Usage:
        engine = SCSEngine()
        engine.compute([["S1", "S2", "S3"], ["S1", "S3"]])
        # ('S1', 'S2', 'S3')
    """

    def __init__(self, budget: Optional[AlignmentBudget] = None):
        self.budget = budget or AlignmentBudget()
        self.last_state_count = 0

    def compute(self, sequences: Sequence[Sequence]) -> tuple:
        """
        Compute the shortest common supersequence.

        Args:
            sequences: Ordered collection of sequences (lists or tuples).

        Returns:
            The supersequence as a tuple.

        Raises:
            InvalidInput: on malformed input.
            ComplexityExceeded: when the search runs past the budget.
        """
        seqs = normalize_sequences(sequences)
        self.last_state_count = 0

        if not seqs:
            return ()
        if len(seqs) == 1:
            return seqs[0]

        # Empty sequences are a subsequence of anything
        active = [seq for seq in seqs if seq]
        if not active:
            return ()
        if len(active) == 1:
            return active[0]

        return self._search(active)

    # ========================================================================
    # SEARCH
    # ========================================================================

    def _search(self, seqs: List[tuple]) -> tuple:
        lengths = [len(seq) for seq in seqs]
        strides = []
        stride = 1
        for length in lengths:
            strides.append(stride)
            stride *= length + 1
        end_key = sum(length * s for length, s in zip(lengths, strides))

        logger.debug(
            f"SCS search over {len(seqs)} sequences, lengths={lengths}, "
            f"state space={stride:,}"
        )

        # key -> (remaining length, next key, emitted element)
        memo: Dict[int, Tuple[int, Optional[int], object]] = {end_key: (0, None, None)}

        max_states = self.budget.max_states
        timeout = self.budget.timeout_seconds
        started = time.monotonic()
        expanded = 0

        stack = [0]
        while stack:
            key = stack[-1]
            if key in memo:
                stack.pop()
                continue

            moves = self._moves(seqs, lengths, strides, key)
            pending = [next_key for _, next_key in moves if next_key not in memo]
            if pending:
                stack.extend(reversed(pending))
                continue

            best = None
            for element, next_key in moves:
                remaining = memo[next_key][0] + 1
                if best is None or remaining < best[0]:
                    best = (remaining, next_key, element)
            memo[key] = best
            stack.pop()

            expanded += 1
            if max_states is not None and len(memo) > max_states:
                self._exceeded(f"state budget of {max_states:,} exceeded", len(memo), started)
            if timeout is not None and expanded % SCS_CLOCK_CHECK_INTERVAL == 0:
                if time.monotonic() - started > timeout:
                    self._exceeded(f"time budget of {timeout}s exceeded", len(memo), started)

        self.last_state_count = len(memo)

        result = []
        key = 0
        while key != end_key:
            _, key, element = memo[key]
            result.append(element)

        logger.debug(
            f"SCS found length {len(result)} after {len(memo):,} states "
            f"in {time.monotonic() - started:.3f}s"
        )
        return tuple(result)

    @staticmethod
    def _moves(seqs, lengths, strides, key) -> List[tuple]:
        """List (element, next_key) moves available from a packed state."""
        heads = []
        for i, (length, stride) in enumerate(zip(lengths, strides)):
            pos = (key // stride) % (length + 1)
            if pos < length:
                heads.append((i, seqs[i][pos]))

        first = heads[0][1]
        if all(head == first for _, head in heads):
            return [(first, key + sum(strides[i] for i, _ in heads))]

        # Group equal heads in one pass; dict order keeps first-index order
        try:
            groups: Dict[Any, List[int]] = {}
            for i, element in heads:
                groups.setdefault(element, []).append(i)
        except TypeError:
            groups = None
        if groups is not None:
            return [
                (element, key + sum(strides[i] for i in members))
                for element, members in groups.items()
            ]

        # Unhashable elements: pairwise == scan
        moves = []
        tried = []
        for _, element in heads:
            if any(element == seen for seen in tried):
                continue
            tried.append(element)
            next_key = key + sum(strides[j] for j, head in heads if head == element)
            moves.append((element, next_key))
        return moves

    def _exceeded(self, reason: str, states: int, started: float) -> None:
        elapsed = time.monotonic() - started
        logger.warning(f"SCS search aborted: {reason} ({states:,} states, {elapsed:.2f}s)")
        raise ComplexityExceeded(
            f"SCS search aborted: {reason}",
            states_explored=states,
            max_states=self.budget.max_states,
            timeout_seconds=self.budget.timeout_seconds,
            elapsed_seconds=elapsed,
        )


def shortest_common_supersequence(sequences, budget: Optional[AlignmentBudget] = None) -> tuple:
    """Convenience wrapper around SCSEngine(budget).compute(sequences)."""
    return SCSEngine(budget).compute(sequences)
