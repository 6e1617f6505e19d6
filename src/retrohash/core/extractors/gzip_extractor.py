from __future__ import annotations

import gzip
from pathlib import Path
import shutil
import zlib

from retrohash.core.allowlist import matches_wildcards
from retrohash.core.extractors.base import ArchiveExtractor
from retrohash.core.models import ArchiveKind, ExtractionResult, ExtractionStatus

CHUNK_SIZE = 1024 * 1024


class GzipExtractor(ArchiveExtractor):
    """Single-entry backend: `name.ext.gz` decompresses to `name.ext`."""

    kind = ArchiveKind.GZIP

    def expand(self, archive_path: Path, scratch_dir: Path, wildcards: tuple[str, ...] | None) -> ExtractionResult:
        output_name = archive_path.name.removesuffix(".gz")
        if not output_name:
            return ExtractionResult(status=ExtractionStatus.FAILURE, error="Archive name has no base name")
        if not matches_wildcards(output_name, wildcards):
            return ExtractionResult()

        output_path = scratch_dir / output_name
        try:
            with gzip.open(archive_path, "rb") as source, output_path.open("wb") as target:
                shutil.copyfileobj(source, target, CHUNK_SIZE)
        except (OSError, EOFError, zlib.error) as exc:
            output_path.unlink(missing_ok=True)
            return ExtractionResult(status=ExtractionStatus.FAILURE, error=f"Cannot decompress GZIP data: {exc}")
        return ExtractionResult(files=[output_path])
