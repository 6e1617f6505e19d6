from __future__ import annotations

from dataclasses import dataclass

from retrohash.config.formats import DEFAULT_MAX_DEPTH

CHAIN_SEPARATOR = " < "


@dataclass(slots=True, frozen=True)
class RecursionContext:
    """Nesting state of the file being processed.

    `depth` is 0 for paths given on the command line. `chain` holds the names
    of the enclosing archives, innermost first.
    """

    depth: int = 0
    chain: tuple[str, ...] = ()

    @property
    def inside_archive(self) -> bool:
        return bool(self.chain)

    def descend(self, archive_name: str) -> RecursionContext:
        return RecursionContext(depth=self.depth + 1, chain=(archive_name, *self.chain))

    def render_chain(self) -> str:
        return render_chain(self.chain)


@dataclass(slots=True, frozen=True)
class RecursionPolicy:
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

    def allows_expansion(self, context: RecursionContext) -> bool:
        return context.depth <= self.max_depth


def render_chain(chain: tuple[str, ...]) -> str:
    return "".join(f"{CHAIN_SEPARATOR}{name}" for name in chain)
