from __future__ import annotations

from pathlib import Path


class RetroHashError(Exception):
    """Base class for retrohash errors."""


class FatalScanError(RetroHashError):
    """Raised when the run cannot safely continue."""


class UnreadableFileError(FatalScanError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read '{path}': {reason}")
        self.path = path


class ScratchAreaError(FatalScanError):
    """Raised when a scratch directory cannot be created or removed."""
