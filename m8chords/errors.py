from __future__ import annotations

from pathlib import Path


class M8ChordsError(Exception):
    """Base error for the m8chords generator."""


class FolderCreationError(M8ChordsError):
    """Raised when a per-chord output folder cannot be created."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot create folder '{path}': {reason}")
        self.path = path
        self.reason = reason


class InstrumentWriteError(M8ChordsError):
    """Raised when a serialized instrument cannot be written to disk."""

    def __init__(self, destination: Path, reason: str) -> None:
        super().__init__(f"Cannot write instrument '{destination}': {reason}")
        self.destination = destination
        self.reason = reason
