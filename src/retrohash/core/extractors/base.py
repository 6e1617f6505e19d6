from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from retrohash.core.models import ArchiveKind, ExtractionResult


class ArchiveExtractor(ABC):
    kind: ArchiveKind

    @abstractmethod
    def expand(self, archive_path: Path, scratch_dir: Path, wildcards: tuple[str, ...] | None) -> ExtractionResult:
        """Extract entries matching `wildcards` (all entries when empty) into `scratch_dir`."""


def collect_files(root: Path) -> list[Path]:
    return sorted(path for path in root.rglob("*") if path.is_file())
