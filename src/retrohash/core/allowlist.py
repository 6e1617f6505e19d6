from __future__ import annotations

from dataclasses import dataclass
import fnmatch
import re

from retrohash.config.formats import DEFAULT_EXTENSIONS


def parse_extension_list(raw: str) -> tuple[str, ...]:
    """Split a comma-separated -e value into normalised extensions.

    Accepts "nes", ".nes" and "*.nes" spellings.
    """
    extensions: list[str] = []
    for item in raw.split(","):
        value = item.strip().lower()
        if value.startswith("*"):
            value = value[1:]
        value = value.lstrip(".")
        if value and value not in extensions:
            extensions.append(value)
    return tuple(extensions)


@dataclass(slots=True, frozen=True)
class ExtensionAllowlist:
    """Extension patterns shared by directory walks and archive extraction.

    Built once per run and never mutated afterwards.
    """

    extensions: tuple[str, ...]
    wildcards: tuple[str, ...]
    pattern: re.Pattern[str] | None

    @classmethod
    def build(cls, extensions: tuple[str, ...] | None = None) -> ExtensionAllowlist:
        selected = DEFAULT_EXTENSIONS if extensions is None else extensions
        normalized = tuple(ext.lower().lstrip(".") for ext in selected if ext.strip(". "))
        wildcards = tuple(f"*.{ext}" for ext in normalized)
        pattern = None
        if normalized:
            alternatives = "|".join(re.escape(ext) for ext in normalized)
            pattern = re.compile(rf"\.(?:{alternatives})$", re.IGNORECASE)
        return cls(extensions=normalized, wildcards=wildcards, pattern=pattern)

    @property
    def is_active(self) -> bool:
        return self.pattern is not None

    def matches(self, name: str) -> bool:
        if self.pattern is None:
            return False
        return self.pattern.search(name) is not None


def matches_wildcards(name: str, wildcards: tuple[str, ...] | None) -> bool:
    """Case-insensitive glob match of an entry basename; no wildcards matches all."""
    if not wildcards:
        return True
    lowered = name.lower()
    return any(fnmatch.fnmatchcase(lowered, wildcard.lower()) for wildcard in wildcards)
