from pathlib import Path

import pytest

from m8chords.chords import CHORD_CATALOG, ChordDefinition, get_chord
from m8chords.emitter import build_chord_presets, emit_chord, generate
from m8chords.errors import FolderCreationError, InstrumentWriteError
from m8chords.instruments import FMPreset, HyperSynthPreset, InstrumentFile
from m8chords.writer import M8InstrumentWriter


class _RecordingSerializer:
    def __init__(self) -> None:
        self.names: list[str] = []

    def serialize(self, instrument: InstrumentFile) -> bytes:
        self.names.append(instrument.instrument.name)
        return instrument.instrument.name.encode("ascii")


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*.m8i"))
    }


def test_major_chord_writes_four_files(tmp_path: Path) -> None:
    result = emit_chord(get_chord("MAJ"), tmp_path, M8InstrumentWriter())
    names = sorted(path.name for path in (tmp_path / "MAJ").iterdir())
    assert names == ["MAJ.m8i", "MAJ_HS.m8i", "MAJ_INV1.m8i", "MAJ_INV2.m8i"]
    assert [path.name for path in result.files] == [
        "MAJ.m8i",
        "MAJ_INV1.m8i",
        "MAJ_INV2.m8i",
        "MAJ_HS.m8i",
    ]


def test_build_chord_presets_order_and_kinds() -> None:
    presets = build_chord_presets(get_chord("DOM7"))
    stems = [stem for stem, _ in presets]
    assert stems == ["DOM7", "DOM7_INV1", "DOM7_INV2", "DOM7_INV3", "DOM7_HS"]
    assert all(isinstance(p, FMPreset) for _, p in presets[:-1])
    assert isinstance(presets[-1][1], HyperSynthPreset)
    assert presets[2][1].name == "DOM7_INV2"


def test_generate_writes_whole_catalog(tmp_path: Path) -> None:
    results = generate(tmp_path)
    assert [r.chord.name for r in results] == [c.name for c in CHORD_CATALOG]
    expected = sum(len(c) + 1 for c in CHORD_CATALOG)
    assert len(list(tmp_path.rglob("*.m8i"))) == expected


def test_generate_is_deterministic(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    generate(first)
    generate(second)
    assert _snapshot(first) == _snapshot(second)


def test_generate_uses_injected_serializer(tmp_path: Path) -> None:
    serializer = _RecordingSerializer()
    generate(tmp_path, catalog=[get_chord("POW")], serializer=serializer)
    assert serializer.names == ["POW", "POW_INV1", "POW"]
    assert (tmp_path / "POW" / "POW_INV1.m8i").read_bytes() == b"POW_INV1"


def test_folder_creation_failure_aborts(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a folder", encoding="utf-8")
    with pytest.raises(FolderCreationError) as info:
        generate(blocker)
    assert info.value.path == blocker / "MAJ"
    assert isinstance(info.value.__cause__, OSError)


def test_write_failure_aborts_without_rollback(tmp_path: Path) -> None:
    chords = [get_chord("MAJ"), ChordDefinition.make("MIN", 0, 3, 7)]
    # A folder in place of the first inversion file makes the write fail.
    (tmp_path / "MAJ" / "MAJ_INV1.m8i").mkdir(parents=True)
    with pytest.raises(InstrumentWriteError) as info:
        generate(tmp_path, catalog=chords)
    assert info.value.destination == tmp_path / "MAJ" / "MAJ_INV1.m8i"
    assert (tmp_path / "MAJ" / "MAJ.m8i").exists()
    assert not (tmp_path / "MAJ" / "MAJ_HS.m8i").exists()
    assert not (tmp_path / "MIN").exists()
