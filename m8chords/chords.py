from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MIN_VOICES = 2
MAX_VOICES = 6
OCTAVE = 12


class ChordDefinition(BaseModel):
    """A named chord as semitone offsets from an implicit root at 0."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    offsets: tuple[int, ...] = Field(..., min_length=MIN_VOICES, max_length=MAX_VOICES)

    def __len__(self) -> int:
        return len(self.offsets)

    @classmethod
    def make(cls, name: str, *offsets: int) -> ChordDefinition:
        return cls(name=name, offsets=offsets)


# Emission order; one preset folder per entry.
CHORD_CATALOG: tuple[ChordDefinition, ...] = (
    ChordDefinition.make("MAJ", 0, 4, 7),
    ChordDefinition.make("MAJ6", 0, 4, 7, 9),
    ChordDefinition.make("DOM7", 0, 4, 7, 10),
    ChordDefinition.make("MAJ7", 0, 4, 7, 11),
    ChordDefinition.make("AUG", 0, 4, 8),
    ChordDefinition.make("AUG7", 0, 4, 8, 10),
    ChordDefinition.make("MIN", 0, 3, 7),
    ChordDefinition.make("MIN6", 0, 3, 7, 9),
    ChordDefinition.make("MIN7", 0, 3, 7, 10),
    ChordDefinition.make("MINMAJ7", 0, 3, 7, 11),
    ChordDefinition.make("DIM", 0, 3, 6),
    ChordDefinition.make("DIM7", 0, 3, 6, 9),
    ChordDefinition.make("HDIM7", 0, 3, 6, 10),
    ChordDefinition.make("POW", 0, 7),
    ChordDefinition.make("POW_AUG", 0, 7, 12),
)


def get_chord(name: str) -> ChordDefinition:
    for chord in CHORD_CATALOG:
        if chord.name == name:
            return chord
    raise KeyError(name)
