from m8chords.chords import CHORD_CATALOG, ChordDefinition, get_chord
from m8chords.hypersynth import (
    CURSOR_SENTINEL,
    TableCursor,
    advance,
    build_chord_table,
    build_hypersynth_preset,
    default_chord,
    encode_entry,
    iter_table_states,
)


def test_first_step_wraps_without_mutation() -> None:
    start = TableCursor.start(get_chord("MAJ"))
    assert start.cursor == CURSOR_SENTINEL
    first = advance(start)
    assert first.offsets == (0, 4, 7)
    assert first.cursor == 0


def test_advance_bumps_cursor_voice() -> None:
    state = advance(TableCursor(offsets=(0, 4, 7), cursor=1))
    assert state.offsets == (0, 16, 7)
    assert state.cursor == 2


def test_advance_does_not_mutate_input() -> None:
    state = TableCursor(offsets=(0, 4, 7), cursor=0)
    advance(state)
    assert state.offsets == (0, 4, 7)
    assert state.cursor == 0


def test_three_voice_entry_fills_six_slots() -> None:
    entry = build_chord_table(get_chord("MAJ"))[0]
    assert entry.offsets == (0, 4, 7, 0, 4, 7, 0)
    assert entry.mask == 0xFF


def test_four_voice_entry_fills_four_slots() -> None:
    entry = encode_entry((0, 4, 7, 10))
    assert entry.offsets == (0, 4, 7, 10, 0, 0, 0)
    assert entry.mask == 0xCF


def test_two_voice_entry_fills_six_slots() -> None:
    entry = encode_entry((0, 7))
    assert entry.offsets == (0, 7, 0, 7, 0, 7, 0)
    assert entry.mask == 0xFF


def test_table_sequence_for_major() -> None:
    table = build_chord_table(get_chord("MAJ"))
    assert len(table) == 16
    heads = [entry.offsets[:3] for entry in table[:6]]
    assert heads == [
        (0, 4, 7),
        (12, 4, 7),
        (12, 16, 7),
        (12, 16, 19),
        (12, 16, 19),
        (24, 16, 19),
    ]


def test_bumps_never_decrease_across_entries() -> None:
    for chord in CHORD_CATALOG:
        previous = chord.offsets
        for state in iter_table_states(chord):
            assert all(now >= before for now, before in zip(state.offsets, previous))
            assert sum(state.offsets) - sum(previous) in (0, 12)
            previous = state.offsets


def test_wrapping_step_leaves_offsets_unchanged() -> None:
    states = list(iter_table_states(get_chord("DOM7")))
    wraps = [i for i, state in enumerate(states) if state.cursor == 0]
    assert wraps == [0, 5, 10, 15]
    for i in wraps[1:]:
        assert states[i].offsets == states[i - 1].offsets


def test_default_chord_uses_unmutated_offsets() -> None:
    chord = get_chord("MIN7")
    assert default_chord(chord) == (0, 0, 3, 7, 10, 0, 0)


def test_hypersynth_preset_fields() -> None:
    chord = ChordDefinition.make("POW_AUG", 0, 7, 12)
    preset = build_hypersynth_preset(chord)
    assert preset.name == "POW_AUG"
    assert preset.default_chord == (0, 0, 7, 12, 0, 0, 0)
    assert (preset.shift, preset.subosc, preset.swarm, preset.width) == (0x80, 0x80, 0, 0)
    assert preset.chords == build_chord_table(chord)
