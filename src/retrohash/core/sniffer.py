from __future__ import annotations

from pathlib import Path

from retrohash.config.formats import (
    ARCHIVE_MAGIC,
    ARCHIVE_SUFFIXES,
    MAGIC_LENGTH,
    ROM_SIGNATURES,
    TEXT_SNIFF_BYTES,
    UNSUPPORTED_ARCHIVE_SUFFIXES,
)
from retrohash.core.errors import UnreadableFileError
from retrohash.core.models import ArchiveKind, RomSignature

ROM_SIGNATURE_TABLE: tuple[RomSignature, ...] = tuple(
    RomSignature(magic=magic, system=system, header_size=header_size)
    for magic, system, header_size in ROM_SIGNATURES
)

_TEXT_BYTES = bytes(range(32, 127)) + b"\n\r\t\f\b\x1b"
_MAX_BINARY_RATIO = 0.30


def read_magic(path: Path) -> bytes:
    """Return the first MAGIC_LENGTH bytes of `path` with NUL bytes removed.

    Raises UnreadableFileError if the file cannot be opened or read.
    """
    try:
        with path.open("rb") as handle:
            head = handle.read(MAGIC_LENGTH)
    except OSError as exc:
        raise UnreadableFileError(path, exc.strerror or str(exc)) from exc
    return head.replace(b"\x00", b"")


def archive_kind_for_name(name: str) -> ArchiveKind | None:
    """Archive kind claimed by a file name's suffix (case-sensitive)."""
    for suffix, kind in ARCHIVE_SUFFIXES.items():
        if name.endswith(suffix):
            return ArchiveKind(kind)
    return None


def is_unsupported_archive_name(name: str) -> bool:
    return any(name.endswith(suffix) for suffix in UNSUPPORTED_ARCHIVE_SUFFIXES)


def sniff_archive_kind(magic: bytes) -> ArchiveKind | None:
    # Priority order: 7z and zip need an exact match, gzip only a prefix.
    if magic == ARCHIVE_MAGIC["7z"]:
        return ArchiveKind.SEVEN_ZIP
    if magic == ARCHIVE_MAGIC["zip"]:
        return ArchiveKind.ZIP
    if magic.startswith(ARCHIVE_MAGIC["gzip"]):
        return ArchiveKind.GZIP
    return None


def magic_matches(kind: ArchiveKind, magic: bytes) -> bool:
    return sniff_archive_kind(magic) == kind


def sniff_rom_signature(magic: bytes) -> RomSignature | None:
    for signature in ROM_SIGNATURE_TABLE:
        if magic == signature.magic:
            return signature
    return None


def looks_like_text(path: Path) -> bool:
    """Heuristic text check on the start of a file.

    A sample containing NUL bytes is binary; otherwise it is text when at most
    30% of its bytes fall outside printable ASCII and common whitespace.
    UTF-8 sequences count as text. Empty files count as text.
    """
    try:
        with path.open("rb") as handle:
            sample = handle.read(TEXT_SNIFF_BYTES)
    except OSError as exc:
        raise UnreadableFileError(path, exc.strerror or str(exc)) from exc
    if not sample:
        return True
    if b"\x00" in sample:
        return False
    try:
        sample.decode("utf-8")
        return True
    except UnicodeDecodeError:
        pass
    non_text = sample.translate(None, _TEXT_BYTES)
    return len(non_text) / len(sample) <= _MAX_BINARY_RATIO
