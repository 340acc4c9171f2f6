from __future__ import annotations

from collections.abc import Iterator

from .chords import OCTAVE, ChordDefinition


def iter_inversions(chord: ChordDefinition) -> Iterator[tuple[int, ChordDefinition]]:
    """Yield ``(inversion, voicing)`` for inversions ``1 .. len(chord) - 1``.

    Each step raises the next lowest voice by an octave on top of the previous
    inversion, so the bumps accumulate: for ``[0, 4, 7]`` this yields
    ``[12, 4, 7]`` then ``[12, 16, 7]``. The last voice is never raised.
    The yielded chords are independent copies; ``chord`` is left untouched.
    """

    working = list(chord.offsets)
    for index in range(len(working) - 1):
        working[index] += OCTAVE
        yield index + 1, chord.model_copy(update={"offsets": tuple(working)})
