from __future__ import annotations

# Extensions hashed when no -e list is given. Archive suffixes are included so
# nested archives survive entry filtering.
DEFAULT_EXTENSIONS: tuple[str, ...] = (
    "nes",
    "unf",
    "fds",
    "sfc",
    "smc",
    "fig",
    "gb",
    "gbc",
    "gba",
    "nds",
    "n64",
    "z64",
    "v64",
    "sms",
    "gg",
    "gen",
    "md",
    "32x",
    "a26",
    "a78",
    "pce",
    "lnx",
    "ngp",
    "ngc",
    "ws",
    "wsc",
    "zip",
    "gz",
    "7z",
)

# Matched case-sensitively against the end of the file name.
ARCHIVE_SUFFIXES: dict[str, str] = {
    ".zip": "zip",
    ".gz": "gzip",
    ".7z": "7z",
}

UNSUPPORTED_ARCHIVE_SUFFIXES: tuple[str, ...] = (".tar.gz",)

MAGIC_LENGTH = 4

ARCHIVE_MAGIC: dict[str, bytes] = {
    "7z": b"7z\xbc\xaf",
    "zip": b"PK\x03\x04",
    "gzip": b"\x1f\x8b",
}

# (magic, system, header size in bytes)
ROM_SIGNATURES: tuple[tuple[bytes, str, int], ...] = (
    (b"NES\x1a", "nes", 16),
)

# Extensions shared with common text formats (.md is also Markdown). Files with
# these extensions are only hashed when their content does not look like text.
TEXT_LIKELY_EXTENSIONS: frozenset[str] = frozenset({".md"})

TEXT_SNIFF_BYTES = 8192

DEFAULT_MAX_DEPTH = 1

SCRATCH_PREFIX = "retrohash_"
