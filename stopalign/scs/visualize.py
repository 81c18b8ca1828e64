"""
Text rendering of an alignment, mostly for the CLI and debugging.
"""

from typing import Sequence

from .alignment import AlignmentExtractor


def visualize_alignment(sequences: Sequence[Sequence], supersequence: Sequence) -> str:
    """
    Render input sequences under their supersequence slots.

    Example:
        SCS: S1 S2 S3
             ── ── ──
        S1:  S1 S2 S3
        S2:  S1    S3
    """
    extractor = AlignmentExtractor(sequences, supersequence)
    super_cells = [str(el) for el in supersequence]
    seq_cells = [[str(el) for el in seq] for seq in sequences]

    width = max(
        [len(cell) for cell in super_cells]
        + [len(cell) for cells in seq_cells for cell in cells]
        + [1]
    )

    lines = ['Input sequences and their alignment with the supersequence:', '']
    lines.append('SCS: ' + ' '.join(cell.ljust(width) for cell in super_cells))
    lines.append('     ' + ' '.join('─' * width for _ in super_cells))

    for index, cells in enumerate(seq_cells):
        row = [' ' * width] * len(super_cells)
        mapping = extractor.get_position_mapping(index)
        for local_pos, super_pos in mapping.items():
            row[super_pos] = cells[local_pos].ljust(width)
        lines.append(f"S{index + 1}:  " + ' '.join(row).rstrip())

    return '\n'.join(lines)
