from __future__ import annotations

import logging
import lzma
from pathlib import Path, PurePosixPath

from retrohash.core.allowlist import matches_wildcards
from retrohash.core.extractors.base import ArchiveExtractor, collect_files
from retrohash.core.models import ArchiveKind, ExtractionResult, ExtractionStatus

logger = logging.getLogger(__name__)


class SevenZipExtractor(ArchiveExtractor):
    """7-Zip backend on top of py7zr.

    py7zr is imported on first use so the package still imports when the
    7-Zip capability is missing. Corrupt or encrypted archives fail as a
    whole; files already written may hold damaged data.
    """

    kind = ArchiveKind.SEVEN_ZIP

    def expand(self, archive_path: Path, scratch_dir: Path, wildcards: tuple[str, ...] | None) -> ExtractionResult:
        import py7zr
        from py7zr.exceptions import ArchiveError, PasswordRequired, UnsupportedCompressionMethodError

        try:
            with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                targets = [
                    entry.filename
                    for entry in archive.list()
                    if not entry.is_directory and matches_wildcards(PurePosixPath(entry.filename).name, wildcards)
                ]
                if not targets:
                    return ExtractionResult()
                if wildcards:
                    archive.extract(path=scratch_dir, targets=targets)
                else:
                    archive.extractall(path=scratch_dir)
        except UnsupportedCompressionMethodError as exc:
            files = collect_files(scratch_dir)
            if files:
                return ExtractionResult(
                    files=files,
                    status=ExtractionStatus.PARTIAL_SUCCESS,
                    error=f"Unsupported compression method: {exc}",
                )
            return ExtractionResult(status=ExtractionStatus.FAILURE, error=f"Unsupported compression method: {exc}")
        except PasswordRequired:
            return ExtractionResult(status=ExtractionStatus.FAILURE, error="Archive is password protected")
        except (OSError, EOFError, ArchiveError, lzma.LZMAError) as exc:
            return ExtractionResult(status=ExtractionStatus.FAILURE, error=f"Cannot extract 7-Zip archive: {exc!r}")

        files = collect_files(scratch_dir)
        logger.debug("Extracted %d of %d selected entries from '%s'", len(files), len(targets), archive_path)
        return ExtractionResult(files=files)
