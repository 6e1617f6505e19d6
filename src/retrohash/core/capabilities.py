from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import importlib.util


@dataclass(slots=True, frozen=True)
class Capabilities:
    """Optional collaborators detected at startup.

    MD5 and SHA-1 come from hashlib and are always present, so they have no flag.
    """

    crc32: bool = True
    zip: bool = True
    gzip: bool = True
    sevenzip: bool = True


@lru_cache(maxsize=1)
def probe_capabilities() -> Capabilities:
    has_zlib = _module_available("zlib")
    return Capabilities(
        crc32=has_zlib,
        zip=has_zlib,
        gzip=has_zlib,
        sevenzip=_module_available("py7zr"),
    )


def _module_available(name: str) -> bool:
    return importlib.util.find_spec(name) is not None
