from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .instruments import Version

_LOGGER = logging.getLogger("m8chords.config")
_OUTPUT_DIR_ENV = "M8CHORDS_OUTPUT_DIR"
DEFAULT_OUTPUT_ROOT = Path("FM_CHORDS")


def default_output_root() -> Path:
    configured = os.environ.get(_OUTPUT_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_OUTPUT_ROOT


class GeneratorConfig(BaseModel):
    """Where presets are written and which file format version they carry."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_root: Path = Field(default_factory=default_output_root)
    version: Version = Field(default_factory=Version)

    @classmethod
    def resolve(cls, output: str | Path | None = None) -> GeneratorConfig:
        if output is None:
            config = cls()
        else:
            config = cls(output_root=Path(output).expanduser())
        _LOGGER.debug("Resolved output root %s (format %s)", config.output_root, config.version)
        return config
