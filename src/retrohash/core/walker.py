from __future__ import annotations

from collections.abc import Iterator
import os
from pathlib import Path

from retrohash.core.allowlist import ExtensionAllowlist


def walk(path: Path, allowlist: ExtensionAllowlist, recursive: bool = False) -> Iterator[Path]:
    """Yield candidate files for one command-line argument.

    Non-directories are yielded as given, without filtering. Directories yield
    their allowlisted files, descending into subdirectories only when
    `recursive` is set. Enumeration order is not guaranteed.
    """
    if not path.is_dir():
        yield path
        return

    if not recursive:
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_file() and allowlist.matches(entry.name):
                    yield Path(entry.path)
        return

    for dirpath, _dirnames, filenames in os.walk(path):
        for filename in filenames:
            candidate = Path(dirpath) / filename
            if allowlist.matches(filename) and candidate.is_file():
                yield candidate
