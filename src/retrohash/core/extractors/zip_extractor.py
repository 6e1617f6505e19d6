from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
import zipfile
import zlib

from retrohash.core.allowlist import matches_wildcards
from retrohash.core.extractors.base import ArchiveExtractor
from retrohash.core.models import ArchiveKind, ExtractionResult, ExtractionStatus

logger = logging.getLogger(__name__)


class ZipExtractor(ArchiveExtractor):
    """Extracts ZIP entries one at a time so a bad entry does not stop the rest."""

    kind = ArchiveKind.ZIP

    def expand(self, archive_path: Path, scratch_dir: Path, wildcards: tuple[str, ...] | None) -> ExtractionResult:
        extracted: list[Path] = []
        skipped: list[str] = []
        try:
            with zipfile.ZipFile(archive_path, "r") as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    if not matches_wildcards(PurePosixPath(info.filename).name, wildcards):
                        continue
                    try:
                        extracted.append(Path(archive.extract(info, scratch_dir)))
                    except (NotImplementedError, RuntimeError, zipfile.BadZipFile, zlib.error) as exc:
                        logger.debug("Cannot extract '%s' from '%s': %s", info.filename, archive_path, exc)
                        skipped.append(info.filename)
        except (OSError, zipfile.BadZipFile) as exc:
            return ExtractionResult(status=ExtractionStatus.FAILURE, error=f"Cannot open ZIP archive: {exc}")

        files = sorted(extracted)
        if skipped:
            return ExtractionResult(
                files=files,
                status=ExtractionStatus.PARTIAL_SUCCESS,
                error=f"{len(skipped)} entries could not be extracted: {', '.join(skipped)}",
            )
        return ExtractionResult(files=files)
