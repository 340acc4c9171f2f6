"""Instrument records handed to the preset serializer.

The records mirror the parameter layout of the tracker's FM and HyperSynth
engines. Every field is byte-sized; only the fields driven by a chord vary
between generated presets, the rest come from :func:`shared_synth_params`.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Byte = Annotated[int, Field(ge=0, le=0xFF)]

CHORD_SLOTS = 7
CHORD_TABLE_SIZE = 16
TABLE_ROWS = 16
OPERATOR_COUNT = 4
MOD_SLOTS = 4


class InstrumentKind(IntEnum):
    WAVSYNTH = 0x00
    MACROSYNTH = 0x01
    SAMPLER = 0x02
    MIDIOUT = 0x03
    FMSYNTH = 0x04
    HYPERSYNTH = 0x05
    EXTERNAL = 0x06


class FMWave(IntEnum):
    SIN = 0x00
    SW2 = 0x01
    SW3 = 0x02
    SW4 = 0x03
    SW5 = 0x04
    SW6 = 0x05
    TRI = 0x06
    SAW = 0x07
    SQR = 0x08
    PUL = 0x09
    IMP = 0x0A
    NOI = 0x0B


class LfoShape(IntEnum):
    TRI = 0x00
    SIN = 0x01
    RAMP_DOWN = 0x02
    RAMP_UP = 0x03
    SQR_DOWN = 0x04
    SQR_UP = 0x05
    RANDOM = 0x06


class LfoTriggerMode(IntEnum):
    FREE = 0x00
    RETRIG = 0x01
    HOLD = 0x02
    ONCE = 0x03


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Version(_Record):
    major: Byte = 4
    minor: Annotated[int, Field(ge=0, le=0x0F)] = 2
    patch: Annotated[int, Field(ge=0, le=0x0F)] = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class OperatorParameters(_Record):
    """One FM operator: waveform, frequency ratio and routing."""

    shape: FMWave
    ratio: Byte
    ratio_fine: Byte
    level: Byte
    feedback: Byte = 0
    retrigger: Byte = 0
    mod_a: Byte = 0
    mod_b: Byte = 0


class AHDEnv(_Record):
    kind: Literal["ahd"] = "ahd"
    dest: Byte = 0
    amount: Byte = 0xFF
    attack: Byte = 0
    hold: Byte = 0
    decay: Byte = 0x80


class LFO(_Record):
    kind: Literal["lfo"] = "lfo"
    shape: LfoShape = LfoShape.TRI
    dest: Byte = 0
    trigger_mode: LfoTriggerMode = LfoTriggerMode.FREE
    freq: Byte = 0x10
    amount: Byte = 0xFF
    retrigger: Byte = 0


Mod = Annotated[Union[AHDEnv, LFO], Field(discriminator="kind")]


class SynthParams(_Record):
    """Parameters common to every synth engine: levels, filter, mixer and mods."""

    volume: Byte
    pitch: Byte
    fine_tune: Byte
    filter_type: Byte
    filter_cutoff: Byte
    filter_res: Byte
    amp: Byte
    limit: Byte
    mixer_pan: Byte
    mixer_dry: Byte
    mixer_mfx: Byte
    mixer_delay: Byte
    mixer_reverb: Byte
    associated_eq: Byte
    mods: tuple[Mod, ...] = Field(..., min_length=MOD_SLOTS, max_length=MOD_SLOTS)


class FMPreset(_Record):
    kind: Literal["fm"] = "fm"
    name: str
    transpose: bool = True
    table_tick: Byte = 1
    synth_params: SynthParams
    algo: Byte
    operators: tuple[OperatorParameters, ...] = Field(
        ..., min_length=OPERATOR_COUNT, max_length=OPERATOR_COUNT
    )
    mod1: Byte = 0
    mod2: Byte = 0
    mod3: Byte = 0
    mod4: Byte = 0


class ChordTableEntry(_Record):
    """One playable voicing of a HyperSynth chord table."""

    mask: Byte = 0
    offsets: tuple[Byte, ...] = Field(
        default=(0,) * CHORD_SLOTS, min_length=CHORD_SLOTS, max_length=CHORD_SLOTS
    )


class HyperSynthPreset(_Record):
    kind: Literal["hypersynth"] = "hypersynth"
    name: str
    transpose: bool = True
    table_tick: Byte = 1
    synth_params: SynthParams
    scale: Byte = 0
    default_chord: tuple[Byte, ...] = Field(..., min_length=CHORD_SLOTS, max_length=CHORD_SLOTS)
    shift: Byte = 0x80
    swarm: Byte = 0
    width: Byte = 0
    subosc: Byte = 0x80
    chords: tuple[ChordTableEntry, ...] = Field(
        ..., min_length=CHORD_TABLE_SIZE, max_length=CHORD_TABLE_SIZE
    )


Instrument = Annotated[Union[FMPreset, HyperSynthPreset], Field(discriminator="kind")]


class TableRow(_Record):
    transpose: Byte = 0
    velocity: Byte = 0xFF
    fx: tuple[tuple[Byte, Byte], ...] = ((0xFF, 0x00), (0xFF, 0x00), (0xFF, 0x00))


class InstrumentFile(_Record):
    """Everything written into one ``.m8i`` file."""

    instrument: Instrument
    table: tuple[TableRow, ...] = Field(
        default=(TableRow(),) * TABLE_ROWS, min_length=TABLE_ROWS, max_length=TABLE_ROWS
    )
    version: Version = Version()


def shared_synth_params() -> SynthParams:
    """Chord-independent parameters shared by every generated preset."""
    ahd = AHDEnv(dest=0, amount=0xFF, attack=0, hold=0, decay=0x80)
    lfo = LFO(
        shape=LfoShape.TRI,
        dest=0,
        trigger_mode=LfoTriggerMode.FREE,
        freq=0x10,
        amount=0xFF,
        retrigger=0,
    )
    return SynthParams(
        volume=0x00,
        pitch=0,
        fine_tune=0x80,
        filter_type=0,
        filter_cutoff=0xFF,
        filter_res=0x00,
        amp=0,
        limit=0,
        mixer_pan=0x80,
        mixer_dry=0xC0,
        mixer_mfx=0,
        mixer_delay=0,
        mixer_reverb=0x00,
        associated_eq=0x80,
        mods=(ahd, ahd, lfo, lfo),
    )


def wrap_instrument(
    instrument: FMPreset | HyperSynthPreset, version: Version | None = None
) -> InstrumentFile:
    return InstrumentFile(instrument=instrument, version=version or Version())
