from __future__ import annotations

from .chords import CHORD_CATALOG, ChordDefinition, get_chord
from .config import GeneratorConfig
from .emitter import ChordPresets, build_chord_presets, emit_chord, generate
from .errors import FolderCreationError, InstrumentWriteError, M8ChordsError
from .fm import build_fm_preset, fallback_operator, quantize_ratio, select_algorithm
from .hypersynth import TableCursor, advance, build_chord_table, build_hypersynth_preset
from .instruments import (
    ChordTableEntry,
    FMPreset,
    HyperSynthPreset,
    InstrumentFile,
    OperatorParameters,
    Version,
)
from .inversions import iter_inversions
from .writer import InstrumentSerializer, M8InstrumentWriter

__all__ = [
    "CHORD_CATALOG",
    "ChordDefinition",
    "ChordPresets",
    "ChordTableEntry",
    "FMPreset",
    "FolderCreationError",
    "GeneratorConfig",
    "HyperSynthPreset",
    "InstrumentFile",
    "InstrumentSerializer",
    "InstrumentWriteError",
    "M8ChordsError",
    "M8InstrumentWriter",
    "OperatorParameters",
    "TableCursor",
    "Version",
    "advance",
    "build_chord_presets",
    "build_chord_table",
    "build_fm_preset",
    "build_hypersynth_preset",
    "emit_chord",
    "fallback_operator",
    "generate",
    "get_chord",
    "iter_inversions",
    "quantize_ratio",
    "select_algorithm",
]
