"""Archive extraction backends."""

from __future__ import annotations

from retrohash.core.capabilities import Capabilities, probe_capabilities
from retrohash.core.extractors.base import ArchiveExtractor
from retrohash.core.extractors.gzip_extractor import GzipExtractor
from retrohash.core.extractors.sevenzip_extractor import SevenZipExtractor
from retrohash.core.extractors.zip_extractor import ZipExtractor
from retrohash.core.models import ArchiveKind


def build_extractors(capabilities: Capabilities | None = None) -> dict[ArchiveKind, ArchiveExtractor]:
    """Backends for the archive kinds whose capability is present."""
    capabilities = capabilities if capabilities is not None else probe_capabilities()
    extractors: dict[ArchiveKind, ArchiveExtractor] = {}
    if capabilities.zip:
        extractors[ArchiveKind.ZIP] = ZipExtractor()
    if capabilities.gzip:
        extractors[ArchiveKind.GZIP] = GzipExtractor()
    if capabilities.sevenzip:
        extractors[ArchiveKind.SEVEN_ZIP] = SevenZipExtractor()
    return extractors


__all__ = [
    "ArchiveExtractor",
    "GzipExtractor",
    "SevenZipExtractor",
    "ZipExtractor",
    "build_extractors",
]
