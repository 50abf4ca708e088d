"""Data models for the scan pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class FileEntry:
    """A regular file discovered by the walker."""

    path: Path
    size: int
    extension: str  # lowercased suffix, or the whole name for dotfiles like ".env"


@dataclass(frozen=True)
class Finding:
    """A single forbidden unit found in a file."""

    path: str
    offset: int  # byte index (binary profile) or character index (text profile)
    code: int
    char: str | None = None

    def describe(self) -> str:
        if self.char is None:
            return f"offset {self.offset} byte {self.code}"
        return f"offset {self.offset} char U+{self.code:04X}"


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be processed."""

    path: str
    stage: str  # "decode" | "write"
    error: str


@dataclass
class ScanRun:
    """Run-scoped accumulator threaded through every file-processing call."""

    root: Path
    profile: str
    mode: str
    findings: dict[str, list[Finding]] = field(default_factory=dict)
    changed_files: list[str] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    files_inaccessible: int = 0

    @property
    def clean(self) -> bool:
        return not self.findings and not self.failures

    @property
    def finding_count(self) -> int:
        return sum(len(f) for f in self.findings.values())

    def record_findings(self, path: str, findings: list[Finding]) -> None:
        # Clean files never enter the log
        if findings:
            self.findings[path] = list(findings)

    def record_failure(self, path: str, stage: str, error: BaseException) -> None:
        self.failures.append(FileFailure(path=path, stage=stage, error=str(error)))
