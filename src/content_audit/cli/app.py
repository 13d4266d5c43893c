"""Command-line interface for auditing markdown corpora."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from ..adapters import FilesystemDocumentSource, LinkProbe, StaticLinkProbe
from ..cache import CacheManager
from ..config import AuditConfig, ConfigError, ConfigLoader
from ..models import CorpusSnapshot, DocumentAuditResult, FindingSeverity
from ..service import AuditService

FAIL_ON_CHOICES = ("error", "warning", "notice", "none")


@dataclass(slots=True)
class AuditReport:
    """Document results plus contextual metadata for rendering."""

    results: Sequence[DocumentAuditResult]
    metadata: Mapping[str, Any] = field(default_factory=dict)
    partial: bool = False
    duplicates_checked: bool = False

    @classmethod
    def from_snapshot(cls, snapshot: CorpusSnapshot, metadata: Mapping[str, Any]) -> "AuditReport":
        meta = dict(metadata)
        meta.setdefault("timestamp", snapshot.timestamp.isoformat())
        return cls(
            results=snapshot.results,
            metadata=meta,
            partial=snapshot.partial,
            duplicates_checked=snapshot.duplicates_checked,
        )

    @property
    def highest_severity(self) -> FindingSeverity | None:
        highest: FindingSeverity | None = None
        for result in self.results:
            for _, finding in result.iter_findings():
                if finding.severity is FindingSeverity.INFO:
                    continue
                if highest is None or finding.severity.rank > highest.rank:
                    highest = finding.severity
        return highest

    def counts_by_severity(self) -> Dict[str, int]:
        counts = {severity.value: 0 for severity in FindingSeverity}
        for result in self.results:
            for _, finding in result.iter_findings():
                counts[finding.severity.value] += 1
        return counts

    @property
    def average_score(self) -> float:
        if not self.results:
            return 100.0
        return round(sum(result.overall_score for result in self.results) / len(self.results), 1)

    def to_dict(self) -> Dict[str, Any]:
        highest = self.highest_severity
        return {
            "metadata": dict(self.metadata),
            "summary": {
                "total_documents": len(self.results),
                "average_score": self.average_score,
                "highest_severity": highest.value if highest else None,
                "counts": self.counts_by_severity(),
                "partial": self.partial,
                "duplicates_checked": self.duplicates_checked,
            },
            "results": [result.to_dict() for result in self.results],
        }


def render_table(report: AuditReport) -> str:
    """Render scores and failing findings as plain text tables."""

    if not report.results:
        return "No documents audited."

    score_rows = [("Score", "Issues", "Warnings", "Notices", "Document")]
    for result in report.results:
        score_rows.append(
            (
                f"{result.overall_score:.1f}",
                str(result.issues_count),
                str(result.warnings_count),
                str(result.notices_count),
                result.document_id,
            )
        )

    lines = _format_rows(score_rows)

    finding_rows = [("Severity", "Check", "Location", "Message")]
    for result in report.results:
        for check_name, finding in result.iter_findings():
            if finding.passed and finding.severity is not FindingSeverity.NOTICE:
                continue
            location = result.document_id
            if finding.position is not None:
                location = f"{location}:{finding.position.line}"
            finding_rows.append((finding.severity.value, check_name, location, finding.message))

    if len(finding_rows) > 1:
        lines.append("")
        lines.extend(_format_rows(finding_rows))

    lines.append("")
    footer = f"{len(report.results)} document(s), average score {report.average_score:.1f}"
    if report.partial:
        footer += " (partial results)"
    lines.append(footer)
    return "\n".join(lines)


def _format_rows(rows: List[tuple[str, ...]]) -> List[str]:
    widths = [max(len(row[idx]) for row in rows) for idx in range(len(rows[0]))]

    def format_row(values: tuple[str, ...]) -> str:
        return "  ".join(value.ljust(width) for value, width in zip(values, widths, strict=True)).rstrip()

    lines = [format_row(rows[0])]
    lines.append("  ".join("=" * width for width in widths))
    for row in rows[1:]:
        lines.append(format_row(row))
    return lines


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        dest="config_files",
        action="append",
        type=Path,
        default=None,
        help="YAML or JSON configuration file; repeat to merge several in order.",
    )
    parser.add_argument(
        "--fail-on",
        choices=FAIL_ON_CHOICES,
        default=FindingSeverity.ERROR.value,
        help="Fail the run when findings at or above the provided severity are present.",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format for audit results.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity written to stderr.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(prog="content-audit", description="Markdown content audit CLI")
    subparsers = parser.add_subparsers(dest="command")

    scan_parser = subparsers.add_parser("scan", help="Audit every markdown document below a directory.")
    scan_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path.cwd(),
        help="Root directory of the corpus.",
    )
    scan_parser.add_argument(
        "--scope",
        default=None,
        help="Comma separated directories (relative to the root) to audit.",
    )
    scan_parser.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help="Number of documents processed between progress reports.",
    )
    scan_parser.add_argument(
        "--cache",
        type=Path,
        default=None,
        help="Write the resulting snapshot to this JSON file.",
    )
    scan_parser.add_argument(
        "--link-status",
        type=Path,
        default=None,
        help="JSON object mapping external URLs to reachability (true/false).",
    )
    _add_common_arguments(scan_parser)

    check_parser = subparsers.add_parser("check", help="Audit individual documents without duplicate detection.")
    check_parser.add_argument("files", type=Path, nargs="+", help="Markdown files to audit.")
    check_parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Corpus root used to resolve internal links.",
    )
    _add_common_arguments(check_parser)

    show_parser = subparsers.add_parser("show", help="Render a snapshot previously written with --cache.")
    show_parser.add_argument("cache", type=Path, help="Snapshot JSON file.")
    _add_common_arguments(show_parser)

    return parser


def create_service(
    root: Path,
    config: AuditConfig,
    *,
    cache_path: Path | None = None,
    link_probe: LinkProbe | None = None,
) -> AuditService:
    """Create an audit service reading documents from the filesystem."""

    source = FilesystemDocumentSource(
        root,
        extensions=config.extensions,
        ignore_underscore_files=config.ignore_underscore_files,
    )
    return AuditService(source, config, link_probe=link_probe, cache=CacheManager(cache_path))


def _load_config(args: argparse.Namespace) -> AuditConfig:
    config = ConfigLoader().load(args.config_files or [])
    changes: Dict[str, Any] = {}
    if getattr(args, "scope", None) is not None:
        changes["scan_directories"] = args.scope
    if getattr(args, "batch_size", None) is not None:
        changes["batch_size"] = args.batch_size
    return config.with_changes(**changes) if changes else config


def _load_link_probe(path: Path | None) -> LinkProbe | None:
    if path is None:
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to read link status file {path}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Link status file must contain a JSON object")
    return StaticLinkProbe({str(url): bool(ok) for url, ok in data.items()})


def _format_report(
    report: AuditReport,
    *,
    fail_on: str,
    output_format: str,
) -> tuple[str, bool]:
    if output_format not in {"table", "json"}:
        raise ValueError("format must be either 'table' or 'json'")

    highest = report.highest_severity
    should_fail = False
    if highest is not None and fail_on != "none":
        should_fail = highest.rank >= FindingSeverity(fail_on).rank

    if output_format == "json":
        output = json.dumps(report.to_dict(), indent=2)
    else:
        output = render_table(report)

    return output, should_fail


def _emit(report: AuditReport, args: argparse.Namespace) -> int:
    output, should_fail = _format_report(report, fail_on=args.fail_on, output_format=args.format)
    print(output)
    return 1 if should_fail else 0


def _handle_scan(args: argparse.Namespace) -> int:
    root = args.path.resolve()
    if not root.is_dir():
        print(f"Error: not a directory: {root}", file=sys.stderr)
        return 2

    try:
        config = _load_config(args)
        link_probe = _load_link_probe(args.link_status)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if link_probe is not None and not config.check_external_broken_links:
        config = config.with_changes(check_external_broken_links=True)

    service = create_service(root, config, cache_path=args.cache, link_probe=link_probe)
    snapshot = asyncio.run(service.run_scan())
    report = AuditReport.from_snapshot(snapshot, {"root": str(root), "scope": config.scan_directories or "."})
    return _emit(report, args)


def _handle_check(args: argparse.Namespace) -> int:
    root = args.root.resolve()
    try:
        config = _load_config(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    service = create_service(root, config)
    source = service.source
    refs = [source.ref_for(path) for path in args.files]

    async def audit_all() -> List[DocumentAuditResult]:
        return [await service.check_document(ref) for ref in refs]

    results = asyncio.run(audit_all())
    report = AuditReport(results=results, metadata={"root": str(root)})
    return _emit(report, args)


def _handle_show(args: argparse.Namespace) -> int:
    snapshot = CacheManager(args.cache).load()
    if snapshot is None:
        print(f"Error: no snapshot stored at {args.cache}", file=sys.stderr)
        return 2
    report = AuditReport.from_snapshot(snapshot, {"cache": str(args.cache)})
    return _emit(report, args)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr)

    handlers = {"scan": _handle_scan, "check": _handle_check, "show": _handle_show}
    return handlers[args.command](args)


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
