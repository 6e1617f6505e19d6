from __future__ import annotations

import hashlib
from pathlib import Path
import zlib

from retrohash.core.capabilities import Capabilities, probe_capabilities
from retrohash.core.models import Algorithm

CHUNK_SIZE = 1024 * 1024
DEFAULT_ALGORITHMS: tuple[Algorithm, ...] = (Algorithm.CRC32, Algorithm.MD5, Algorithm.SHA1)

FILE_LABEL = "File"
ROM_LABEL = "ROM"


class ChecksumEngine:
    """Computes whole-file or offset-adjusted digests.

    Digests are lowercase hex. CRC32 is skipped when the capability is missing.
    """

    def __init__(self, capabilities: Capabilities | None = None) -> None:
        self.capabilities = capabilities if capabilities is not None else probe_capabilities()

    def available_algorithms(self, algorithms: tuple[Algorithm, ...] = DEFAULT_ALGORITHMS) -> tuple[Algorithm, ...]:
        if self.capabilities.crc32:
            return algorithms
        return tuple(algorithm for algorithm in algorithms if algorithm != Algorithm.CRC32)

    def digest(self, path: Path, offset: int = 0, algorithm: Algorithm = Algorithm.SHA1) -> str | None:
        digests = self.digest_many(path, offset, (algorithm,))
        return digests.get(algorithm)

    def digest_many(
        self,
        path: Path,
        offset: int = 0,
        algorithms: tuple[Algorithm, ...] = DEFAULT_ALGORITHMS,
    ) -> dict[Algorithm, str]:
        """Digest `path` from `offset` to end of file in a single read pass."""
        if offset < 0:
            raise ValueError(f"Negative offset: {offset}")
        selected = self.available_algorithms(algorithms)
        crc = 0
        md5 = hashlib.md5() if Algorithm.MD5 in selected else None
        sha1 = hashlib.sha1() if Algorithm.SHA1 in selected else None
        with_crc = Algorithm.CRC32 in selected

        with path.open("rb") as handle:
            handle.seek(offset)
            while True:
                chunk = handle.read(CHUNK_SIZE)
                if not chunk:
                    break
                if with_crc:
                    crc = zlib.crc32(chunk, crc)
                if md5 is not None:
                    md5.update(chunk)
                if sha1 is not None:
                    sha1.update(chunk)

        digests: dict[Algorithm, str] = {}
        if with_crc:
            digests[Algorithm.CRC32] = f"{crc & 0xFFFFFFFF:08x}"
        if md5 is not None:
            digests[Algorithm.MD5] = md5.hexdigest()
        if sha1 is not None:
            digests[Algorithm.SHA1] = sha1.hexdigest()
        return digests

    def labelled_checksums(self, path: Path, offset: int, label: str) -> dict[str, str]:
        """Digests keyed by report label, e.g. {"ROM CRC32": "..."}."""
        digests = self.digest_many(path, offset)
        return {f"{label} {algorithm.value}": value for algorithm, value in digests.items()}
