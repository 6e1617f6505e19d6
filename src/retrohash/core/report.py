from __future__ import annotations

from typing import TextIO

from retrohash.core.models import ChecksumResult
from retrohash.core.recursion import render_chain


def format_report(report: ChecksumResult) -> list[str]:
    lines = [f"{report.display_name}{render_chain(report.chain)}"]
    for label, value in report.digests.items():
        lines.append(f"{label}: {value.upper()}")
    return lines


class ReportWriter:
    """Writes report blocks separated by blank lines."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.blocks_written = 0

    def write(self, report: ChecksumResult) -> None:
        if self.blocks_written:
            self.stream.write("\n")
        self.stream.write("\n".join(format_report(report)) + "\n")
        self.stream.flush()
        self.blocks_written += 1
