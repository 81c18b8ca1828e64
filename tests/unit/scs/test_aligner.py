"""Unit tests for align_sequences and AlignmentResult."""

import pandas as pd
import pytest

from stopalign.scs import (
    AlignmentIntegrityError,
    InvalidInput,
    align_sequences,
    visualize_alignment,
)


class FixedEngine:
    """Engine returning a given supersequence."""

    def __init__(self, supersequence):
        self.supersequence = supersequence
        self.calls = []

    def compute(self, sequences):
        self.calls.append(sequences)
        return self.supersequence


class TestScenarios:
    """End-to-end alignment scenarios."""

    def test_skipped_stop(self):
        result = align_sequences([["S1", "S2", "S3"], ["S1", "S3"]])
        assert list(result.supersequence) == ["S1", "S2", "S3"]
        assert result.alignments[0] == {0: 0, 1: 1, 2: 2}
        assert result.alignments[1] == {0: 0, 1: 2}

    def test_looped_stop_is_preserved(self):
        result = align_sequences([["S1", "S2", "S1"]])
        assert list(result.supersequence) == ["S1", "S2", "S1"]
        assert result.alignments[0] == {0: 0, 1: 1, 2: 2}

    def test_divergence(self):
        sequences = [["S1", "S2", "S4"], ["S1", "S3", "S4"]]
        result = align_sequences(sequences)
        supersequence = result.supersequence
        assert len(supersequence) == 4
        assert supersequence.index("S1") < supersequence.index("S2") < supersequence.index("S4")
        assert supersequence.index("S1") < supersequence.index("S3") < supersequence.index("S4")
        for i, seq in enumerate(sequences):
            assert all(supersequence[result.alignments[i][p]] == seq[p] for p in range(len(seq)))

    def test_empty_input(self):
        result = align_sequences([])
        assert result.supersequence == ()
        assert result.alignments == {}

    def test_empty_sequence_gets_empty_mapping(self):
        result = align_sequences([["A", "B"], []])
        assert result.supersequence == ("A", "B")
        assert result.alignments[1] == {}

    def test_identical_sequences_map_to_identity(self):
        result = align_sequences([["A", "B", "C"]] * 3)
        assert result.supersequence == ("A", "B", "C")
        for mapping in result.alignments.values():
            assert mapping == {0: 0, 1: 1, 2: 2}


class TestAlignmentResult:
    """Forward and reverse lookups on the result."""

    @pytest.fixture
    def result(self):
        return align_sequences([["S1", "S2", "S3"], ["S1", "S3"]])

    def test_forward_lookup(self, result):
        assert result.supersequence_position(1, 1) == 2

    def test_forward_lookup_out_of_range(self, result):
        with pytest.raises(InvalidInput):
            result.supersequence_position(1, 2)

    def test_reverse_lookup(self, result):
        assert result.local_position(1, 2) == 1
        assert result.local_position(1, 1) is None

    def test_unknown_sequence_index(self, result):
        with pytest.raises(InvalidInput):
            result.get_position_mapping(5)

    def test_realign_mapping(self, result):
        times = {0: "08:00:00", 1: "08:10:00"}
        assert result.realign(1, times) == {0: "08:00:00", 2: "08:10:00"}

    def test_realign_numpy_keys(self, result):
        keys = pd.Index([0, 1]).to_numpy()
        times = dict(zip(keys, ["08:00:00", "08:10:00"]))
        assert result.realign(1, times) == {0: "08:00:00", 2: "08:10:00"}

    def test_realign_list_skips_missing(self, result):
        assert result.realign(0, ["08:00:00", None, "08:20:00"]) == {0: "08:00:00", 2: "08:20:00"}

    def test_realign_rejects_unknown_position(self, result):
        with pytest.raises(InvalidInput):
            result.realign(1, {3: "08:00:00"})

    def test_aligned_row(self, result):
        assert result.aligned_row(1) == ["S1", None, "S3"]

    def test_length(self, result):
        assert len(result) == 3


class TestEngineInjection:
    """The supersequence stage can be swapped without touching extraction."""

    def test_custom_engine_is_used(self):
        engine = FixedEngine(["A", "X", "B"])
        result = align_sequences([["A", "B"]], engine=engine)
        assert result.supersequence == ("A", "X", "B")
        assert result.alignments[0] == {0: 0, 1: 2}
        assert engine.calls == [[("A", "B")]]

    def test_invalid_supersequence_is_fatal(self):
        with pytest.raises(AlignmentIntegrityError):
            align_sequences([["A", "B"]], engine=FixedEngine(["B", "A"]))

    def test_input_validated_before_engine(self):
        engine = FixedEngine([])
        with pytest.raises(InvalidInput):
            align_sequences([["A", None]], engine=engine)
        assert engine.calls == []


class TestVisualizeAlignment:
    """Text rendering."""

    def test_layout(self):
        sequences = [["S1", "S2", "S3"], ["S1", "S3"]]
        text = visualize_alignment(sequences, ["S1", "S2", "S3"])
        lines = text.splitlines()
        assert lines[2] == "SCS: S1 S2 S3"
        assert lines[3] == "     ── ── ──"
        assert lines[4] == "S1:  S1 S2 S3"
        assert lines[5] == "S2:  S1    S3"

    def test_mixed_widths(self):
        text = visualize_alignment([["A"], ["LONG"]], ["A", "LONG"])
        assert "SCS: A    LONG" in text
        assert "S1:  A" in text.splitlines()
