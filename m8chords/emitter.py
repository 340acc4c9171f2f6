"""Writes the preset folders for every chord of the catalog.

Each chord gets its own folder holding the root-position FM preset, one FM
preset per inversion and the HyperSynth chord-table preset. Chords are
processed one at a time; the first I/O failure aborts the whole batch and
files already written are left in place.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .chords import CHORD_CATALOG, ChordDefinition
from .errors import FolderCreationError, InstrumentWriteError
from .fm import build_fm_preset, inversion_name
from .hypersynth import build_hypersynth_preset
from .instruments import FMPreset, HyperSynthPreset, Version, shared_synth_params, wrap_instrument
from .inversions import iter_inversions
from .logging_utils import generation_context
from .writer import InstrumentSerializer, M8InstrumentWriter

_LOGGER = logging.getLogger("m8chords.emitter")
PRESET_SUFFIX = ".m8i"
HYPERSYNTH_SUFFIX = "_HS"


@dataclass(slots=True)
class ChordPresets:
    """Files written for one chord."""

    chord: ChordDefinition
    folder: Path
    files: list[Path] = field(default_factory=list)


def build_chord_presets(
    chord: ChordDefinition,
) -> list[tuple[str, FMPreset | HyperSynthPreset]]:
    """Return ``(file stem, preset)`` pairs in write order for one chord."""

    params = shared_synth_params()
    presets: list[tuple[str, FMPreset | HyperSynthPreset]] = [
        (chord.name, build_fm_preset(chord, synth_params=params))
    ]
    for inversion, voicing in iter_inversions(chord):
        preset = build_fm_preset(voicing, inversion, synth_params=params)
        presets.append((inversion_name(chord.name, inversion), preset))
    presets.append(
        (chord.name + HYPERSYNTH_SUFFIX, build_hypersynth_preset(chord, synth_params=params))
    )
    return presets


def _create_folder(folder: Path) -> None:
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FolderCreationError(folder, str(exc)) from exc


def _write_file(destination: Path, payload: bytes) -> None:
    try:
        destination.write_bytes(payload)
    except OSError as exc:
        raise InstrumentWriteError(destination, str(exc)) from exc


def emit_chord(
    chord: ChordDefinition,
    output_root: Path,
    serializer: InstrumentSerializer,
    *,
    version: Version | None = None,
) -> ChordPresets:
    folder = Path(output_root) / chord.name
    _create_folder(folder)
    result = ChordPresets(chord=chord, folder=folder)
    context = generation_context(output_root, chord.name)
    for stem, preset in build_chord_presets(chord):
        destination = folder / f"{stem}{PRESET_SUFFIX}"
        _write_file(destination, serializer.serialize(wrap_instrument(preset, version)))
        _LOGGER.debug("Wrote %s", destination.name, extra=context)
        result.files.append(destination)
    return result


def generate(
    output_root: str | Path,
    *,
    catalog: Iterable[ChordDefinition] = CHORD_CATALOG,
    serializer: InstrumentSerializer | None = None,
    version: Version | None = None,
) -> list[ChordPresets]:
    """Write the preset folders of every chord in ``catalog`` under ``output_root``."""

    writer = serializer or M8InstrumentWriter()
    root = Path(output_root)
    written: list[ChordPresets] = []
    for chord in catalog:
        presets = emit_chord(chord, root, writer, version=version)
        _LOGGER.info(
            "Generated %d presets for %s",
            len(presets.files),
            chord.name,
            extra=generation_context(root, chord.name),
        )
        written.append(presets)
    return written
