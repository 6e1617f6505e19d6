"""Archive resolution, classification and checksum modules for retrohash."""

from retrohash.core.allowlist import ExtensionAllowlist
from retrohash.core.checksums import ChecksumEngine
from retrohash.core.dispatcher import FileDispatcher
from retrohash.core.models import ChecksumResult, ScanOptions, ScanResult
from retrohash.core.recursion import RecursionContext, RecursionPolicy
from retrohash.core.walker import walk

__all__ = [
    "ChecksumEngine",
    "ChecksumResult",
    "ExtensionAllowlist",
    "FileDispatcher",
    "RecursionContext",
    "RecursionPolicy",
    "ScanOptions",
    "ScanResult",
    "walk",
]
