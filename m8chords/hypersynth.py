"""Chord-table encoding for the HyperSynth engine.

The table holds sixteen voicings of one chord. Walking the table, a cursor
raises one voice per entry by an octave and wraps back to the root once it
runs past the last voice, skipping the bump on the wrapping entry. Bumps
are never undone, so later entries are progressively wider spreads of the
chord rather than a fixed set of inversions.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace

from .chords import OCTAVE, ChordDefinition
from .instruments import (
    CHORD_SLOTS,
    CHORD_TABLE_SIZE,
    ChordTableEntry,
    HyperSynthPreset,
    SynthParams,
    shared_synth_params,
)

# Past any real chord length, so the first step always wraps without a bump.
CURSOR_SENTINEL = 8
BASE_MASK = 0xC0


@dataclass(frozen=True, slots=True)
class TableCursor:
    """Voicing and mutation cursor before encoding a table entry."""

    offsets: tuple[int, ...]
    cursor: int = CURSOR_SENTINEL

    @classmethod
    def start(cls, chord: ChordDefinition) -> TableCursor:
        return cls(offsets=chord.offsets)


def advance(state: TableCursor) -> TableCursor:
    if state.cursor >= len(state.offsets):
        return replace(state, cursor=0)
    offsets = list(state.offsets)
    offsets[state.cursor] += OCTAVE
    return TableCursor(offsets=tuple(offsets), cursor=state.cursor + 1)


def encode_entry(offsets: tuple[int, ...]) -> ChordTableEntry:
    """Repeat ``offsets`` cyclically over the largest whole multiple that fits."""

    voices = len(offsets)
    filled = (CHORD_SLOTS // voices) * voices
    slots = [0] * CHORD_SLOTS
    mask = BASE_MASK
    for slot in range(filled):
        slots[slot] = offsets[slot % voices]
        mask |= 1 << slot
    return ChordTableEntry(mask=mask, offsets=tuple(slots))


def iter_table_states(chord: ChordDefinition) -> Iterator[TableCursor]:
    state = TableCursor.start(chord)
    for _ in range(CHORD_TABLE_SIZE):
        state = advance(state)
        yield state


def build_chord_table(chord: ChordDefinition) -> tuple[ChordTableEntry, ...]:
    return tuple(encode_entry(state.offsets) for state in iter_table_states(chord))


def default_chord(chord: ChordDefinition) -> tuple[int, ...]:
    # Slot 0 is the implicit root.
    slots = [0] * CHORD_SLOTS
    for index, offset in enumerate(chord.offsets):
        slots[index + 1] = offset
    return tuple(slots)


def build_hypersynth_preset(
    chord: ChordDefinition,
    *,
    synth_params: SynthParams | None = None,
) -> HyperSynthPreset:
    return HyperSynthPreset(
        name=chord.name,
        synth_params=synth_params or shared_synth_params(),
        default_chord=default_chord(chord),
        chords=build_chord_table(chord),
    )
