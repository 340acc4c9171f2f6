"""Binary ``.m8i`` encoding of :class:`~m8chords.instruments.InstrumentFile`.

Generation code only depends on :class:`InstrumentSerializer`; the writer
below is the default implementation and can be swapped for any object with a
matching ``serialize`` method.
"""

from __future__ import annotations

from typing import Protocol

from .instruments import (
    LFO,
    AHDEnv,
    FMPreset,
    HyperSynthPreset,
    InstrumentFile,
    InstrumentKind,
    SynthParams,
    TableRow,
    Version,
)

HEADER_MAGIC = b"M8VERSION\x00"
INSTRUMENT_FILE_TAG = 0x10
INSTRUMENT_SIZE = 215
NAME_LENGTH = 12
_MOD_AHD = 0x00
_MOD_LFO = 0x03


class InstrumentSerializer(Protocol):
    def serialize(self, instrument: InstrumentFile) -> bytes: ...


def encode_name(name: str, length: int = NAME_LENGTH) -> bytes:
    raw = name.encode("ascii", errors="replace")[:length]
    return raw.ljust(length, b"\x00")


def encode_version(version: Version) -> bytes:
    return HEADER_MAGIC + bytes(
        [(version.minor << 4) | version.patch, version.major, 0x00, INSTRUMENT_FILE_TAG]
    )


class M8InstrumentWriter:
    """Encodes one instrument, its table and the version header."""

    def __init__(self, *, instrument_size: int = INSTRUMENT_SIZE) -> None:
        self._instrument_size = instrument_size

    def serialize(self, instrument: InstrumentFile) -> bytes:
        out = bytearray(encode_version(instrument.version))
        out += self._encode_instrument(instrument.instrument)
        for row in instrument.table:
            out += self._encode_table_row(row)
        return bytes(out)

    def _encode_instrument(self, instrument: FMPreset | HyperSynthPreset) -> bytes:
        match instrument:
            case FMPreset():
                body = self._encode_fm(instrument)
            case HyperSynthPreset():
                body = self._encode_hypersynth(instrument)
            case _:
                raise TypeError(f"Unsupported instrument: {type(instrument).__name__}")
        if len(body) > self._instrument_size:
            raise ValueError(
                f"Encoded instrument is {len(body)} bytes, limit is {self._instrument_size}"
            )
        return bytes(body.ljust(self._instrument_size, b"\xff"))

    @staticmethod
    def _encode_common(
        kind: InstrumentKind,
        name: str,
        transpose: bool,
        table_tick: int,
        params: SynthParams,
    ) -> bytearray:
        out = bytearray([kind])
        out += encode_name(name)
        out += bytes([int(transpose), table_tick, params.volume, params.pitch, params.fine_tune])
        return out

    @staticmethod
    def _encode_params(params: SynthParams) -> bytes:
        out = bytearray(
            [
                params.filter_type,
                params.filter_cutoff,
                params.filter_res,
                params.amp,
                params.limit,
                params.mixer_pan,
                params.mixer_dry,
                params.mixer_mfx,
                params.mixer_delay,
                params.mixer_reverb,
                params.associated_eq,
            ]
        )
        for mod in params.mods:
            match mod:
                case AHDEnv():
                    out += bytes(
                        [
                            (_MOD_AHD << 4) | (mod.dest & 0x0F),
                            mod.amount,
                            mod.attack,
                            mod.hold,
                            mod.decay,
                            0x00,
                        ]
                    )
                case LFO():
                    out += bytes(
                        [
                            (_MOD_LFO << 4) | (mod.dest & 0x0F),
                            mod.amount,
                            mod.shape,
                            mod.trigger_mode,
                            mod.freq,
                            mod.retrigger,
                        ]
                    )
                case _:
                    raise TypeError(f"Unsupported modulation slot: {type(mod).__name__}")
        return bytes(out)

    def _encode_fm(self, preset: FMPreset) -> bytearray:
        params = preset.synth_params
        out = self._encode_common(
            InstrumentKind.FMSYNTH, preset.name, preset.transpose, preset.table_tick, params
        )
        ops = preset.operators
        out.append(preset.algo)
        out += bytes(op.shape for op in ops)
        for op in ops:
            out += bytes([op.ratio, op.ratio_fine])
        for op in ops:
            out += bytes([op.level, op.feedback])
        out += bytes(op.retrigger for op in ops)
        out += bytes(op.mod_a for op in ops)
        out += bytes(op.mod_b for op in ops)
        out += bytes([preset.mod1, preset.mod2, preset.mod3, preset.mod4])
        out += self._encode_params(params)
        return out

    def _encode_hypersynth(self, preset: HyperSynthPreset) -> bytearray:
        params = preset.synth_params
        out = self._encode_common(
            InstrumentKind.HYPERSYNTH, preset.name, preset.transpose, preset.table_tick, params
        )
        out += bytes(preset.default_chord)
        out += bytes([preset.scale, preset.shift, preset.swarm, preset.width, preset.subosc])
        out += self._encode_params(params)
        for entry in preset.chords:
            out.append(entry.mask)
            out += bytes(entry.offsets)
        return out

    @staticmethod
    def _encode_table_row(row: TableRow) -> bytes:
        out = bytearray([row.transpose, row.velocity])
        for command, value in row.fx:
            out += bytes([command, value])
        return bytes(out)
