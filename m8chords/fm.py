"""FM preset construction: ratio quantization, operator slots and algorithm choice."""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType

from .chords import OCTAVE, ChordDefinition
from .instruments import (
    OPERATOR_COUNT,
    FMPreset,
    FMWave,
    OperatorParameters,
    SynthParams,
    shared_synth_params,
)

OPERATOR_LEVEL = 0x80

# Voice count -> operator routing topology of the FM engine.
_ALGORITHM_MAP: Mapping[int, int] = MappingProxyType(
    {
        4: 0x0B,
        3: 0x08,
        2: 0x07,
    }
)
_FALLBACK_ALGORITHM = 0x00


def quantize_ratio(offset: int) -> tuple[int, int]:
    """Map a semitone offset to an ``(ratio, fine)`` pair.

    The equal-tempered ratio ``2 ** (offset / 12)`` is split into its integer
    part and its fractional part in hundredths. Both parts are truncated, not
    rounded, so neighbouring offsets may share a pair.
    """

    freq = 2.0 ** (offset / OCTAVE)
    whole = math.floor(freq)
    fine = math.floor((freq - whole) * 100.0)
    return min(whole, 0xFF), min(fine, 0xFF)


def make_operator(offset: int) -> OperatorParameters:
    ratio, fine = quantize_ratio(offset)
    return OperatorParameters(
        shape=FMWave.SAW,
        ratio=ratio,
        ratio_fine=fine,
        level=OPERATOR_LEVEL,
    )


def fallback_operator() -> OperatorParameters:
    """Inert operator filling slots that have no chord voice."""
    return OperatorParameters(
        shape=FMWave.SIN,
        ratio=0x01,
        ratio_fine=0x00,
        level=OPERATOR_LEVEL,
    )


def select_algorithm(voice_count: int) -> int:
    return _ALGORITHM_MAP.get(voice_count, _FALLBACK_ALGORITHM)


def build_operators(offsets: tuple[int, ...]) -> tuple[OperatorParameters, ...]:
    """Fill the operator slots from the highest voice down to the root."""

    def operator_for(voice: int) -> OperatorParameters:
        if voice < len(offsets):
            return make_operator(offsets[voice])
        return fallback_operator()

    return tuple(operator_for(voice) for voice in reversed(range(OPERATOR_COUNT)))


def inversion_name(name: str, inversion: int) -> str:
    if inversion > 0:
        return f"{name}_INV{inversion}"
    return name


def build_fm_preset(
    chord: ChordDefinition,
    inversion: int = 0,
    *,
    synth_params: SynthParams | None = None,
) -> FMPreset:
    return FMPreset(
        name=inversion_name(chord.name, inversion),
        synth_params=synth_params or shared_synth_params(),
        algo=select_algorithm(len(chord.offsets)),
        operators=build_operators(chord.offsets),
    )
