"""Scan pipeline — walker -> classifier -> action."""

from __future__ import annotations

import structlog

from charguard.actions import FileAction, action_for
from charguard.classifier import classify, in_scope
from charguard.config import ScanConfig
from charguard.exceptions import DecodeFailure
from charguard.models import ScanRun
from charguard.walker import walk_files

log = structlog.get_logger("charguard.scanner")


def run_scan(config: ScanConfig, action: FileAction | None = None) -> ScanRun:
    """Process every reachable file under ``config.root`` exactly once.

    Returns a fresh :class:`ScanRun`. Unreadable files are skipped, while
    decode and write failures are recorded on the run; neither stops the
    walk.
    """
    action = action or action_for(config)
    run = ScanRun(root=config.root, profile=config.profile, mode=config.mode)
    log.debug(
        "scanner.start",
        root=str(config.root),
        profile=config.profile,
        mode=config.mode,
    )

    for entry in walk_files(config.root, config.excluded_dirs):
        rel_path = entry.path.relative_to(config.root).as_posix()
        if not in_scope(entry, config):
            run.files_skipped += 1
            continue

        try:
            item = classify(entry, rel_path, config)
        except DecodeFailure as e:
            log.error("scanner.decode_failed", path=rel_path, error=str(e))
            run.record_failure(rel_path, "decode", e)
            continue
        except OSError as e:
            log.warning("scanner.file_inaccessible", path=rel_path, error=str(e))
            run.files_inaccessible += 1
            continue

        run.files_scanned += 1
        if item.findings:
            log.debug("scanner.flagged", path=rel_path, count=len(item.findings))
        action.apply(item, run)

    log.info(
        "scanner.done",
        scanned=run.files_scanned,
        skipped=run.files_skipped,
        inaccessible=run.files_inaccessible,
        flagged=len(run.findings),
        changed=len(run.changed_files),
        failed=len(run.failures),
    )
    return run


def exit_code(run: ScanRun) -> int:
    """Report mode: 0 when clean, 1 otherwise. Repair mode is best-effort: always 0."""
    if run.mode == "repair":
        return 0
    return 0 if run.clean else 1
