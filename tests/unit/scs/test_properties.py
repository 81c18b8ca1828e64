"""
Property checks over seeded random inputs.

Minimality is checked against an independent breadth-first search over cursor
states, where every step emits one alphabet symbol and advances all sequences
whose head equals it.
"""

import random

import pytest

from stopalign.scs import align_sequences


def scs_length_oracle(sequences):
    """Length of the shortest common supersequence by BFS."""
    alphabet = sorted({element for seq in sequences for element in seq})
    start = tuple(0 for _ in sequences)
    goal = tuple(len(seq) for seq in sequences)

    frontier = {start}
    seen = {start}
    depth = 0
    while goal not in frontier:
        next_frontier = set()
        for state in frontier:
            for symbol in alphabet:
                new_state = tuple(
                    pos + 1 if pos < len(seq) and seq[pos] == symbol else pos
                    for pos, seq in zip(state, sequences)
                )
                if new_state != state and new_state not in seen:
                    seen.add(new_state)
                    next_frontier.add(new_state)
        frontier = next_frontier
        depth += 1
    return depth


def random_sequences(seed):
    rng = random.Random(seed)
    alphabet = [f"S{i}" for i in range(rng.randint(2, 5))]
    count = rng.randint(1, 4)
    return [
        [rng.choice(alphabet) for _ in range(rng.randint(0, 5))]
        for _ in range(count)
    ]


SEEDS = list(range(80))


class TestRandomProperties:
    """Invariants that must hold for every input."""

    @pytest.mark.parametrize("seed", SEEDS)
    def test_length_bounds(self, seed):
        sequences = random_sequences(seed)
        result = align_sequences(sequences)
        lengths = [len(seq) for seq in sequences]
        assert max(lengths) <= len(result.supersequence) <= sum(lengths)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_mappings_preserve_values_and_order(self, seed):
        sequences = random_sequences(seed)
        result = align_sequences(sequences)
        supersequence = result.supersequence
        for i, seq in enumerate(sequences):
            mapping = result.alignments[i]
            assert len(mapping) == len(seq)
            for p, element in enumerate(seq):
                assert supersequence[mapping[p]] == element
            positions = [mapping[p] for p in range(len(seq))]
            assert positions == sorted(set(positions))

    @pytest.mark.parametrize("seed", SEEDS)
    def test_minimal_length(self, seed):
        sequences = random_sequences(seed)
        result = align_sequences(sequences)
        assert len(result.supersequence) == scs_length_oracle(sequences)

    @pytest.mark.parametrize("seed", SEEDS[:20])
    def test_deterministic(self, seed):
        sequences = random_sequences(seed)
        first = align_sequences(sequences)
        second = align_sequences([list(seq) for seq in sequences])
        assert first.supersequence == second.supersequence
        assert first.alignments == second.alignments


class TestOracle:
    """Sanity checks for the oracle itself."""

    @pytest.mark.parametrize("sequences, expected", [
        ([["A", "B", "C"], ["A", "C", "B"]], 4),
        ([["A", "B"], ["A", "C"], ["B"]], 3),
        ([[], []], 0),
        ([["A", "B", "A"]], 3),
    ])
    def test_known_lengths(self, sequences, expected):
        assert scs_length_oracle(sequences) == expected
