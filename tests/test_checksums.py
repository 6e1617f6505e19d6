from __future__ import annotations

import hashlib
from pathlib import Path
import sys
import tempfile
import unittest
import zlib

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from retrohash.core.capabilities import Capabilities
from retrohash.core.checksums import ChecksumEngine
from retrohash.core.models import Algorithm


class ChecksumEngineTests(unittest.TestCase):
    def test_known_digests_for_whole_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "abc.bin"
            path.write_bytes(b"abc")
            digests = ChecksumEngine(Capabilities()).digest_many(path)

            self.assertEqual(digests[Algorithm.CRC32], "352441c2")
            self.assertEqual(digests[Algorithm.MD5], "900150983cd24fb0d6963f7d28e17f72")
            self.assertEqual(digests[Algorithm.SHA1], "a9993e364706816aba3e25717850c26c9cd0d89d")

    def test_offset_digest_matches_stripped_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            data = b"NES\x1a" + bytes(12) + bytes(range(256)) * 8
            path = Path(temp_dir) / "game.nes"
            path.write_bytes(data)
            stripped = Path(temp_dir) / "stripped.bin"
            stripped.write_bytes(data[16:])
            engine = ChecksumEngine(Capabilities())

            for algorithm in (Algorithm.CRC32, Algorithm.MD5, Algorithm.SHA1):
                self.assertEqual(engine.digest(path, 16, algorithm), engine.digest(stripped, 0, algorithm))
            self.assertEqual(engine.digest(path, 0, Algorithm.MD5), hashlib.md5(data).hexdigest())
            self.assertEqual(engine.digest(path, 16, Algorithm.SHA1), hashlib.sha1(data[16:]).hexdigest())
            self.assertEqual(engine.digest(path, 16, Algorithm.CRC32), f"{zlib.crc32(data[16:]) & 0xFFFFFFFF:08x}")

    def test_digest_is_idempotent(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "game.sfc"
            path.write_bytes(bytes(range(256)) * 4096)
            engine = ChecksumEngine(Capabilities())
            self.assertEqual(engine.digest_many(path, 0), engine.digest_many(path, 0))
            self.assertEqual(engine.digest_many(path, 16), engine.digest_many(path, 16))

    def test_crc32_skipped_when_capability_missing(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "abc.bin"
            path.write_bytes(b"abc")
            engine = ChecksumEngine(Capabilities(crc32=False))

            self.assertIsNone(engine.digest(path, 0, Algorithm.CRC32))
            self.assertEqual(set(engine.digest_many(path)), {Algorithm.MD5, Algorithm.SHA1})
            self.assertEqual(set(engine.labelled_checksums(path, 0, "File")), {"File MD5", "File SHA-1"})

    def test_labelled_checksums_order_and_case(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "abc.bin"
            path.write_bytes(b"abc")
            labelled = ChecksumEngine(Capabilities()).labelled_checksums(path, 0, "ROM")

            self.assertEqual(list(labelled), ["ROM CRC32", "ROM MD5", "ROM SHA-1"])
            self.assertTrue(all(value == value.lower() for value in labelled.values()))

    def test_offset_past_end_digests_empty_input(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "short.nes"
            path.write_bytes(b"NES\x1a")
            engine = ChecksumEngine(Capabilities())
            self.assertEqual(engine.digest(path, 16, Algorithm.MD5), hashlib.md5(b"").hexdigest())

    def test_negative_offset_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "abc.bin"
            path.write_bytes(b"abc")
            with self.assertRaises(ValueError):
                ChecksumEngine(Capabilities()).digest_many(path, -1)


if __name__ == "__main__":
    unittest.main()
