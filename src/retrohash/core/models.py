from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from retrohash.config.formats import DEFAULT_MAX_DEPTH


class ArchiveKind(str, Enum):
    ZIP = "zip"
    GZIP = "gzip"
    SEVEN_ZIP = "7z"


class ExtractionStatus(str, Enum):
    FULL_SUCCESS = "full_success"
    PARTIAL_SUCCESS = "partial_success"
    FAILURE = "failure"


class ClassificationKind(str, Enum):
    ARCHIVE = "archive"
    ROM_HEADER = "rom_header"
    PLAIN_RECOGNIZED = "plain_recognized"
    UNRECOGNIZED = "unrecognized"


class Algorithm(str, Enum):
    CRC32 = "CRC32"
    MD5 = "MD5"
    SHA1 = "SHA-1"


@dataclass(slots=True, frozen=True)
class RomSignature:
    magic: bytes
    system: str
    header_size: int


@dataclass(slots=True, frozen=True)
class FileClassification:
    kind: ClassificationKind
    archive_kind: ArchiveKind | None = None
    rom_signature: RomSignature | None = None

    @property
    def header_offset(self) -> int:
        return self.rom_signature.header_size if self.rom_signature is not None else 0


@dataclass(slots=True)
class ExtractionResult:
    files: list[Path] = field(default_factory=list)
    status: ExtractionStatus = ExtractionStatus.FULL_SUCCESS
    error: str | None = None


@dataclass(slots=True)
class ChecksumResult:
    """Digests for one resolved file.

    `digests` maps report labels ("File MD5", "ROM CRC32", ...) to lowercase hex.
    `chain` lists the enclosing archives, innermost first.
    """

    path: Path
    display_name: str
    chain: tuple[str, ...] = ()
    digests: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ScanOptions:
    # None selects DEFAULT_EXTENSIONS.
    extensions: tuple[str, ...] | None = None
    recursive: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    filter_archive_entries: bool = True


@dataclass(slots=True)
class ScanResult:
    reports: list[ChecksumResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    files_hashed: int = 0
    archives_expanded: int = 0
