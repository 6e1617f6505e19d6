from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from retrohash.config.formats import TEXT_LIKELY_EXTENSIONS
from retrohash.core.allowlist import ExtensionAllowlist
from retrohash.core.capabilities import Capabilities
from retrohash.core.checksums import FILE_LABEL, ROM_LABEL, ChecksumEngine
from retrohash.core.errors import UnreadableFileError
from retrohash.core.extractors import ArchiveExtractor, build_extractors
from retrohash.core.models import (
    ArchiveKind,
    ChecksumResult,
    ClassificationKind,
    ExtractionStatus,
    FileClassification,
    RomSignature,
    ScanOptions,
    ScanResult,
)
from retrohash.core.recursion import RecursionContext, RecursionPolicy
from retrohash.core.scratch import scratch_area
from retrohash.core.sniffer import (
    archive_kind_for_name,
    is_unsupported_archive_name,
    looks_like_text,
    magic_matches,
    read_magic,
    sniff_rom_signature,
)

logger = logging.getLogger(__name__)

ReportCallback = Callable[[ChecksumResult], None]

_ARCHIVE_DESCRIPTIONS: dict[ArchiveKind, str] = {
    ArchiveKind.ZIP: "ZIP",
    ArchiveKind.GZIP: "GZIP",
    ArchiveKind.SEVEN_ZIP: "7-Zip",
}


class FileDispatcher:
    """Classifies paths and routes them to archive expansion or hashing.

    This is the only component that decides whether a problem is a warning,
    a recoverable error or fatal. Warnings and errors are logged and recorded
    on the ScanResult; fatal conditions raise FatalScanError subclasses.
    Nested archives are expanded depth-first, each into its own scratch
    directory that is removed before the call returns.
    """

    def __init__(
        self,
        allowlist: ExtensionAllowlist,
        policy: RecursionPolicy | None = None,
        extractors: dict[ArchiveKind, ArchiveExtractor] | None = None,
        checksum_engine: ChecksumEngine | None = None,
        filter_archive_entries: bool = True,
        on_report: ReportCallback | None = None,
        retain_reports: bool = True,
    ) -> None:
        self.allowlist = allowlist
        self.policy = policy or RecursionPolicy()
        self.extractors = extractors if extractors is not None else build_extractors()
        self.checksum_engine = checksum_engine or ChecksumEngine()
        self.filter_archive_entries = filter_archive_entries
        self.on_report = on_report
        self.retain_reports = retain_reports

    @classmethod
    def from_options(
        cls,
        options: ScanOptions,
        capabilities: Capabilities | None = None,
        on_report: ReportCallback | None = None,
        retain_reports: bool = True,
    ) -> FileDispatcher:
        return cls(
            allowlist=ExtensionAllowlist.build(options.extensions),
            policy=RecursionPolicy(max_depth=options.max_depth),
            extractors=build_extractors(capabilities),
            checksum_engine=ChecksumEngine(capabilities),
            filter_archive_entries=options.filter_archive_entries,
            on_report=on_report,
            retain_reports=retain_reports,
        )

    def process(
        self,
        path: Path,
        context: RecursionContext | None = None,
        result: ScanResult | None = None,
    ) -> ScanResult:
        result = result if result is not None else ScanResult()
        self._process(path, context or RecursionContext(), result)
        return result

    def classify(self, name: str, magic: bytes) -> FileClassification:
        archive_kind = archive_kind_for_name(name)
        if archive_kind is not None:
            return FileClassification(kind=ClassificationKind.ARCHIVE, archive_kind=archive_kind)
        signature = sniff_rom_signature(magic)
        if signature is not None:
            return FileClassification(kind=ClassificationKind.ROM_HEADER, rom_signature=signature)
        if self.allowlist.matches(name):
            return FileClassification(kind=ClassificationKind.PLAIN_RECOGNIZED)
        return FileClassification(kind=ClassificationKind.UNRECOGNIZED)

    def _process(self, path: Path, context: RecursionContext, result: ScanResult) -> None:
        label = self._label(path, context)
        if not path.exists():
            self._error(result, f"{label}: no such file or directory")
            return

        magic = read_magic(path)
        classification = self.classify(path.name, magic)

        if classification.kind == ClassificationKind.ARCHIVE:
            self._expand_archive(path, classification.archive_kind, magic, context, result)
        elif classification.kind == ClassificationKind.ROM_HEADER:
            self._report(path, context, classification.rom_signature, result)
        elif classification.kind == ClassificationKind.PLAIN_RECOGNIZED:
            if path.suffix.lower() in TEXT_LIKELY_EXTENSIONS and looks_like_text(path):
                logger.debug("Skipping text file %s", label)
                return
            self._report(path, context, None, result)
        else:
            self._error(result, f"{label}: unknown file extension")

    def _expand_archive(
        self,
        path: Path,
        kind: ArchiveKind,
        magic: bytes,
        context: RecursionContext,
        result: ScanResult,
    ) -> None:
        label = self._label(path, context)
        description = _ARCHIVE_DESCRIPTIONS[kind]

        if is_unsupported_archive_name(path.name):
            self._warn(result, f"{label}: tar.gz archives are not supported, skipped")
            return
        if not self.policy.allows_expansion(context):
            self._warn(result, f"{label}: too many recursions, archive skipped")
            return
        extractor = self.extractors.get(kind)
        if extractor is None:
            logger.debug("No %s extractor available, skipping %s", description, label)
            return
        if not magic_matches(kind, magic):
            self._warn(result, f"{label}: not a valid {description} archive, skipped")
            return

        wildcards = self.allowlist.wildcards if self.filter_archive_entries else None
        with scratch_area() as scratch_dir:
            logger.debug("Expanding %s into %s", label, scratch_dir)
            extraction = extractor.expand(path, scratch_dir, wildcards)
            if extraction.status == ExtractionStatus.FAILURE:
                self._error(result, f"{label}: extraction failed: {extraction.error or 'unknown error'}")
                return
            if extraction.status == ExtractionStatus.PARTIAL_SUCCESS:
                self._warn(result, f"{label}: some entries could not be extracted: {extraction.error or 'unknown error'}")

            result.archives_expanded += 1
            nested_context = context.descend(self._display_name(path, context))
            for extracted_path in extraction.files:
                self._process(extracted_path, nested_context, result)

    def _report(
        self,
        path: Path,
        context: RecursionContext,
        signature: RomSignature | None,
        result: ScanResult,
    ) -> None:
        try:
            digests = self.checksum_engine.labelled_checksums(path, 0, FILE_LABEL)
            if signature is not None:
                digests.update(self.checksum_engine.labelled_checksums(path, signature.header_size, ROM_LABEL))
        except OSError as exc:
            raise UnreadableFileError(path, exc.strerror or str(exc)) from exc

        report = ChecksumResult(
            path=path,
            display_name=self._display_name(path, context),
            chain=context.chain,
            digests=digests,
        )
        result.files_hashed += 1
        if self.retain_reports:
            result.reports.append(report)
        if self.on_report is not None:
            self.on_report(report)

    @staticmethod
    def _display_name(path: Path, context: RecursionContext) -> str:
        return path.name if context.inside_archive else str(path)

    def _label(self, path: Path, context: RecursionContext) -> str:
        return f"{self._display_name(path, context)}{context.render_chain()}"

    @staticmethod
    def _warn(result: ScanResult, message: str) -> None:
        result.warnings.append(message)
        logger.warning(message)

    @staticmethod
    def _error(result: ScanResult, message: str) -> None:
        result.errors.append(message)
        logger.error(message)
