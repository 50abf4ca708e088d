"""Human-readable and JSON renderings of a scan run."""

from __future__ import annotations

from typing import Any

from charguard.models import ScanRun

CLEAN_TEXT = "No control/non-printable bytes found in scanned extensions."
CLEAN_BINARY = "No control bytes (binary) found."
NO_CHANGES = "No changes needed - no invisible/control characters found in scanned extensions."
FOUND_HEADER = "Found control bytes in files:"
CLEANED_HEADER = "Cleaned invisible/control characters from files:"
FAILED_HEADER = "Could not process files:"


def render_text(run: ScanRun, detail_limit: int = 10) -> str:
    """Grouped summary: per file the count and the first *detail_limit* findings."""
    lines: list[str] = []

    if run.mode == "repair":
        if run.changed_files:
            lines.append(CLEANED_HEADER)
            lines.extend(f" - {path}" for path in run.changed_files)
        elif not run.failures:
            lines.append(NO_CHANGES)
    elif not run.findings and not run.failures:
        lines.append(CLEAN_BINARY if run.profile == "binary" else CLEAN_TEXT)

    if run.mode == "report" and run.findings:
        lines.append(FOUND_HEADER)
        for path, findings in run.findings.items():
            lines.append(f"- {path} count: {len(findings)}")
            lines.extend(f"   {f.describe()}" for f in findings[:detail_limit])

    if run.failures:
        lines.append(FAILED_HEADER)
        for failure in run.failures:
            lines.append(f"- {failure.path} ({failure.stage}): {failure.error}")

    return "\n".join(lines)


def render_json(run: ScanRun) -> dict[str, Any]:
    return {
        "root": str(run.root),
        "profile": run.profile,
        "mode": run.mode,
        "clean": run.clean,
        "stats": {
            "scanned": run.files_scanned,
            "skipped": run.files_skipped,
            "inaccessible": run.files_inaccessible,
            "flagged": len(run.findings),
            "findings": run.finding_count,
        },
        "findings": {
            path: [
                {"offset": f.offset, "code": f.code, "char": f.char}
                for f in findings
            ]
            for path, findings in run.findings.items()
        },
        "changed_files": list(run.changed_files),
        "failures": [
            {"path": f.path, "stage": f.stage, "error": f.error} for f in run.failures
        ],
    }
