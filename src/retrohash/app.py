from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence, TextIO

from colorama import Fore, Style, just_fix_windows_console

from retrohash.config.formats import DEFAULT_MAX_DEPTH
from retrohash.core.allowlist import parse_extension_list
from retrohash.core.capabilities import probe_capabilities
from retrohash.core.dispatcher import FileDispatcher
from retrohash.core.errors import FatalScanError
from retrohash.core.models import ScanOptions, ScanResult
from retrohash.core.report import ReportWriter
from retrohash.core.walker import walk

__version__ = "0.1.0"

logger = logging.getLogger("retrohash")

EXIT_OK = 0
EXIT_FATAL = 1


class DiagnosticFormatter(logging.Formatter):
    """Prefixes records with a severity marker, coloured when enabled."""

    MARKERS: dict[int, tuple[str, str]] = {
        logging.DEBUG: ("[debug]", Style.DIM),
        logging.INFO: ("[info]", ""),
        logging.WARNING: ("[warn]", Fore.YELLOW),
        logging.ERROR: ("[error]", Fore.RED),
        logging.CRITICAL: ("[fatal]", Fore.RED + Style.BRIGHT),
    }

    def __init__(self, use_color: bool) -> None:
        super().__init__("%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        marker, color = self.MARKERS.get(record.levelno, ("[log]", ""))
        message = super().format(record)
        if self.use_color and color:
            return f"{color}{marker}{Style.RESET_ALL} {message}"
        return f"{marker} {message}"


def configure_logging(stream: TextIO, verbose: bool = False, use_color: bool | None = None) -> logging.Handler:
    if use_color is None:
        use_color = hasattr(stream, "isatty") and stream.isatty()
    if use_color:
        just_fix_windows_console()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(DiagnosticFormatter(use_color))
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retrohash",
        description="Compute file and ROM checksums, looking inside ZIP, GZIP and 7-Zip archives.",
    )
    parser.add_argument("paths", nargs="*", type=Path, help="Files or directories to checksum.")
    parser.add_argument(
        "-e",
        dest="extensions",
        metavar="LIST",
        type=_extension_list,
        help="Comma-separated extension allowlist replacing the default list (e.g. nes,sfc,zip).",
    )
    parser.add_argument("-r", dest="recursive", action="store_true", help="Recurse into directories.")
    parser.add_argument(
        "--max-depth",
        type=_non_negative_int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Nested archive levels to expand beyond the first (default: {DEFAULT_MAX_DEPTH}).",
    )
    parser.add_argument(
        "--extract-all",
        action="store_true",
        help="Extract every archive entry instead of only allowlisted ones.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable coloured diagnostics.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show skipped files and progress details.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return number


def _extension_list(value: str) -> tuple[str, ...]:
    extensions = parse_extension_list(value)
    if not extensions:
        raise argparse.ArgumentTypeError("extension list must not be empty")
    return extensions


def options_from_args(args: argparse.Namespace) -> ScanOptions:
    return ScanOptions(
        extensions=args.extensions,
        recursive=args.recursive,
        max_depth=args.max_depth,
        filter_archive_entries=not args.extract_all,
    )


def run(
    argv: Sequence[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.paths:
        parser.print_usage(stdout)
        return EXIT_OK

    configure_logging(stderr, verbose=args.verbose, use_color=False if args.no_color else None)
    options = options_from_args(args)
    writer = ReportWriter(stdout)
    dispatcher = FileDispatcher.from_options(
        options,
        capabilities=probe_capabilities(),
        on_report=writer.write,
        retain_reports=False,
    )
    result = ScanResult()
    try:
        for path in args.paths:
            for candidate in walk(path, dispatcher.allowlist, recursive=options.recursive):
                dispatcher.process(candidate, result=result)
    except FatalScanError as exc:
        logger.critical(str(exc))
        return EXIT_FATAL

    logger.debug(
        "Done: %d files hashed, %d archives expanded, %d warnings, %d errors",
        result.files_hashed,
        result.archives_expanded,
        len(result.warnings),
        len(result.errors),
    )
    return EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
