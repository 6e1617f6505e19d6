from __future__ import annotations

import os
from pathlib import Path
import sys
import tempfile
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from retrohash.core.allowlist import ExtensionAllowlist
from retrohash.core.walker import walk


class WalkerTests(unittest.TestCase):
    def _make_tree(self, root: Path) -> None:
        (root / "sub" / "deeper").mkdir(parents=True, exist_ok=True)
        (root / "Mario.nes").write_bytes(b"rom")
        (root / "notes.txt").write_text("notes", encoding="utf-8")
        (root / "sub" / "Zelda.SFC").write_bytes(b"rom")
        (root / "sub" / "deeper" / "set.zip").write_bytes(b"PK\x03\x04")
        (root / "sub" / "deeper" / "cover.png").write_bytes(b"png")

    def test_non_recursive_walk_yields_depth_one_matches(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            self._make_tree(root)
            found = set(walk(root, ExtensionAllowlist.build(), recursive=False))
            self.assertEqual(found, {root / "Mario.nes"})

    def test_recursive_walk_yields_matches_at_any_depth(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            self._make_tree(root)
            found = set(walk(root, ExtensionAllowlist.build(), recursive=True))
            self.assertEqual(
                found,
                {root / "Mario.nes", root / "sub" / "Zelda.SFC", root / "sub" / "deeper" / "set.zip"},
            )

    def test_custom_allowlist_filters_walk(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            self._make_tree(root)
            found = set(walk(root, ExtensionAllowlist.build(("png",)), recursive=True))
            self.assertEqual(found, {root / "sub" / "deeper" / "cover.png"})

    @unittest.skipUnless(hasattr(os, "mkfifo"), "named pipes not supported")
    def test_special_files_are_not_yielded(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            (root / "sub").mkdir()
            (root / "sub" / "Mario.nes").write_bytes(b"rom")
            os.mkfifo(root / "pipe.nes")
            os.mkfifo(root / "sub" / "pipe.sfc")

            self.assertEqual(set(walk(root, ExtensionAllowlist.build(), recursive=False)), set())
            self.assertEqual(
                set(walk(root, ExtensionAllowlist.build(), recursive=True)),
                {root / "sub" / "Mario.nes"},
            )

    def test_file_argument_is_yielded_unfiltered(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            notes = Path(temp_dir) / "notes.txt"
            notes.write_text("notes", encoding="utf-8")
            self.assertEqual(list(walk(notes, ExtensionAllowlist.build())), [notes])


if __name__ == "__main__":
    unittest.main()
