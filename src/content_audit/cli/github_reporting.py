"""Helpers for publishing audit results to GitHub Actions surfaces."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Iterable, List, Mapping, MutableMapping, Sequence, Tuple

SEVERITY_ORDER = ["error", "warning", "notice", "info"]
ANNOTATION_LEVELS = {
    "error": "error",
    "warning": "warning",
    "notice": "notice",
}
DISPLAY_LIMIT = 10


def _normalize_counts(raw_counts: Mapping[str, int] | None) -> MutableMapping[str, int]:
    counts: MutableMapping[str, int] = {severity: 0 for severity in SEVERITY_ORDER}
    for severity, value in (raw_counts or {}).items():
        severity_key = str(severity).lower()
        if severity_key in counts:
            counts[severity_key] = int(value)
    return counts


def _iter_failures(report: Mapping[str, object]) -> Iterable[Tuple[Mapping[str, object], str, Mapping[str, object]]]:
    """Yield ``(result, check_name, finding)`` for every non-info finding."""

    results: Sequence[Mapping[str, object]] = report.get("results") or []
    for result in results:
        checks: Mapping[str, Sequence[Mapping[str, object]]] = result.get("checks") or {}
        for check_name, findings in checks.items():
            for finding in findings or []:
                if str(finding.get("severity", "info")).lower() in ANNOTATION_LEVELS:
                    yield result, check_name, finding


def format_summary(report: Mapping[str, object]) -> str:
    """Render a Markdown job summary for the provided report."""

    summary: Mapping[str, object] = report.get("summary") or {}
    metadata: Mapping[str, object] = report.get("metadata") or {}
    results: Sequence[Mapping[str, object]] = report.get("results") or []

    total_documents = int(summary.get("total_documents", len(results)))
    average = summary.get("average_score")
    average_display = f"{float(average):.1f}" if isinstance(average, (int, float)) else "n/a"
    counts = _normalize_counts(summary.get("counts"))

    lines: List[str] = [
        "# Content Audit Report",
        "",
        f"**Documents audited:** {total_documents}",
        f"**Average score:** {average_display}",
    ]
    if summary.get("partial"):
        lines.append("**Note:** the scan was cancelled; results are partial.")
    lines.extend(["", "| Severity | Findings |", "| --- | ---: |"])
    for severity in SEVERITY_ORDER:
        lines.append(f"| {severity.title()} | {counts[severity]} |")

    if results:
        lines.extend(["", "## Lowest scores", "", "| Document | Score | Issues | Warnings |", "| --- | ---: | ---: | ---: |"])
        ranked = sorted(results, key=lambda item: float(item.get("overall_score", 100.0)))
        for result in ranked[:DISPLAY_LIMIT]:
            lines.append(
                f"| {result.get('document_id', '')} | {float(result.get('overall_score', 100.0)):.1f} "
                f"| {int(result.get('issues_count', 0))} | {int(result.get('warnings_count', 0))} |"
            )

    if metadata:
        lines.extend(["", "## Metadata", ""])
        for key in sorted(metadata):
            lines.append(f"- **{key}:** {metadata[key]}")

    failures = [item for item in _iter_failures(report) if str(item[2].get("severity")).lower() != "notice"]
    if failures:
        lines.extend(["", "## Findings", ""])
        for result, check_name, finding in failures[:DISPLAY_LIMIT]:
            severity = str(finding.get("severity", "info")).lower()
            message = str(finding.get("message", "")).strip()
            bullet = f"- **{severity.title()}** `{check_name}`"
            if message:
                bullet += f": {message}"
            bullet += f" _(Document: `{result.get('document_id', '')}`)_"
            lines.append(bullet)

        remaining = len(failures) - DISPLAY_LIMIT
        if remaining > 0:
            lines.append(f"- ...and {remaining} more findings.")

    lines.append("")
    return "\n".join(lines)


def iter_annotations(report: Mapping[str, object], *, root: str | None = None) -> Iterable[str]:
    """Generate GitHub Actions workflow command annotations for the findings."""

    for result, check_name, finding in _iter_failures(report):
        severity = str(finding.get("severity", "info")).lower()
        level = ANNOTATION_LEVELS[severity]
        message = str(finding.get("message", "")).strip()
        suggestion = str(finding.get("suggestion") or "").strip()
        document_id = str(result.get("document_id", "")).strip()
        position = finding.get("position") or {}

        file_path = f"{root.rstrip('/')}/{document_id}" if root and document_id else document_id
        line = _coerce_int(position.get("line")) if isinstance(position, Mapping) else None

        body_parts = [message] if message else ["Content audit finding reported without message."]
        if suggestion:
            body_parts.append(suggestion)
        body = "; ".join(body_parts)
        body = body.replace("%", "%25").replace("\r", "").replace("\n", "%0A")

        attributes: List[str] = []
        if file_path:
            attributes.append(f"file={file_path}")
        if line is not None:
            attributes.append(f"line={line}")
        attributes.append(f"title={severity.title()} - {check_name}")

        yield f"::{level} {','.join(attributes)}::{body}"


def _coerce_int(value: object | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _load_report(path: Path) -> Mapping[str, object]:
    raw = path.read_text(encoding="utf-8-sig")
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse report JSON from '{path}': {exc.msg}.") from exc

    if not isinstance(data, Mapping):
        raise ValueError("Report JSON must be an object.")
    return data


def _write_summary(report: Mapping[str, object], destination: Path | None) -> None:
    if destination is None:
        return

    content = format_summary(report)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("a", encoding="utf-8") as handle:
        handle.write(content)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Publish content audit results as GitHub job summary and annotations."
    )
    parser.add_argument("report", type=Path, help="Path to the JSON report written by `content-audit --format json`.")
    parser.add_argument(
        "--summary-path",
        type=Path,
        default=None,
        help="Optional explicit path for the GitHub job summary output.",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Repository-relative corpus root prefixed to document paths in annotations.",
    )

    args = parser.parse_args(argv)

    summary_path = args.summary_path
    if summary_path is None:
        summary_env = os.getenv("GITHUB_STEP_SUMMARY")
        if summary_env:
            summary_path = Path(summary_env)

    report = _load_report(args.report)

    _write_summary(report, summary_path)

    for command in iter_annotations(report, root=args.root):
        print(command)

    return 0


def run() -> None:  # pragma: no cover - wrapper for console entry point
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
