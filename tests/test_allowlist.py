from __future__ import annotations

from pathlib import Path
import sys
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from retrohash.config.formats import DEFAULT_EXTENSIONS
from retrohash.core.allowlist import ExtensionAllowlist, matches_wildcards, parse_extension_list


class AllowlistTests(unittest.TestCase):
    def test_parse_extension_list_normalizes_spellings(self) -> None:
        self.assertEqual(parse_extension_list("nes, .SFC,*.gba,,nes"), ("nes", "sfc", "gba"))
        self.assertEqual(parse_extension_list(""), ())

    def test_default_allowlist(self) -> None:
        allowlist = ExtensionAllowlist.build()
        self.assertEqual(allowlist.extensions, DEFAULT_EXTENSIONS)
        self.assertIn("*.nes", allowlist.wildcards)
        self.assertIn("*.zip", allowlist.wildcards)
        self.assertTrue(allowlist.is_active)

    def test_matching_is_case_insensitive_and_anchored(self) -> None:
        allowlist = ExtensionAllowlist.build(("nes", "gb"))
        self.assertTrue(allowlist.matches("Zelda.NES"))
        self.assertTrue(allowlist.matches("tetris.gb"))
        self.assertFalse(allowlist.matches("tetris.gbc"))
        self.assertFalse(allowlist.matches("nes.txt"))
        self.assertFalse(allowlist.matches("gamenes"))

    def test_custom_list_replaces_default(self) -> None:
        allowlist = ExtensionAllowlist.build(("sfc",))
        self.assertFalse(allowlist.matches("game.nes"))
        self.assertEqual(allowlist.wildcards, ("*.sfc",))

    def test_empty_list_is_inactive(self) -> None:
        allowlist = ExtensionAllowlist.build(())
        self.assertFalse(allowlist.is_active)
        self.assertFalse(allowlist.matches("game.nes"))
        self.assertEqual(allowlist.wildcards, ())

    def test_matches_wildcards(self) -> None:
        self.assertTrue(matches_wildcards("GAME.NES", ("*.nes",)))
        self.assertFalse(matches_wildcards("readme.txt", ("*.nes", "*.sfc")))
        self.assertTrue(matches_wildcards("readme.txt", None))
        self.assertTrue(matches_wildcards("readme.txt", ()))


if __name__ == "__main__":
    unittest.main()
