"""File actions — what the pipeline does with each classified file.

One traversal serves both modes; the mode only selects which action runs.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from charguard.classifier import ClassifiedFile
from charguard.config import ScanConfig
from charguard.exceptions import ConfigError
from charguard.models import ScanRun
from charguard.sanitize import repair_text

log = structlog.get_logger("charguard.actions")


@runtime_checkable
class FileAction(Protocol):
    """Interface that every action must satisfy."""

    name: str

    def apply(self, item: ClassifiedFile, run: ScanRun) -> None: ...


class ReportAction:
    """Read-only: record findings, never touch the file."""

    name = "report"

    def apply(self, item: ClassifiedFile, run: ScanRun) -> None:
        run.record_findings(item.rel_path, item.findings)


class RepairAction:
    """Record findings, then rewrite the file in place if the cleaned text differs."""

    name = "repair"

    def __init__(self, config: ScanConfig) -> None:
        self._config = config

    def apply(self, item: ClassifiedFile, run: ScanRun) -> None:
        run.record_findings(item.rel_path, item.findings)
        if item.text is None:
            return

        cleaned = repair_text(item.text, self._config)
        if cleaned == item.text:
            return

        try:
            item.entry.path.write_bytes(cleaned.encode(self._config.encoding))
        except OSError as e:
            log.error("repair.write_failed", path=item.rel_path, error=str(e))
            run.record_failure(item.rel_path, "write", e)
            return

        log.info(
            "repair.rewritten",
            path=item.rel_path,
            removed=len(item.text) - len(cleaned),
        )
        run.changed_files.append(item.rel_path)


def action_for(config: ScanConfig) -> FileAction:
    """Select the action for ``config.mode``."""
    if config.mode == "report":
        return ReportAction()
    if config.mode == "repair":
        return RepairAction(config)
    raise ConfigError(f"Unknown mode '{config.mode}'")
