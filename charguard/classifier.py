"""Classifier — scope decisions and unit-by-unit scanning for forbidden values."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from charguard.config import ScanConfig
from charguard.exceptions import DecodeFailure
from charguard.models import FileEntry, Finding


@dataclass
class ClassifiedFile:
    """An in-scope file after reading and scanning."""

    entry: FileEntry
    rel_path: str
    text: str | None  # None in the binary profile
    findings: list[Finding] = field(default_factory=list)


def in_scope(entry: FileEntry, config: ScanConfig) -> bool:
    """Extension allow-list and/or size ceiling, whichever the profile sets."""
    if config.extensions is not None and entry.extension not in config.extensions:
        return False
    if config.max_file_size is not None and entry.size > config.max_file_size:
        return False
    return True


def is_forbidden(code: int, config: ScanConfig) -> bool:
    return config.is_forbidden(code)


def scan_units(units: bytes | str, path: str, config: ScanConfig) -> list[Finding]:
    """Scan bytes or characters against the forbidden set.

    Stops once ``config.max_findings`` findings are collected; anything after
    that point in the same file goes unreported.
    """
    findings: list[Finding] = []
    as_text = isinstance(units, str)
    values: Iterable[int] = (ord(ch) for ch in units) if as_text else units
    for offset, code in enumerate(values):
        if not config.is_forbidden(code):
            continue
        findings.append(
            Finding(path=path, offset=offset, code=code, char=chr(code) if as_text else None)
        )
        if len(findings) >= config.max_findings:
            break
    return findings


def classify(entry: FileEntry, rel_path: str, config: ScanConfig) -> ClassifiedFile:
    """Read *entry* and scan it according to the profile.

    Raises :class:`OSError` if the file cannot be read and
    :class:`DecodeFailure` if a text-profile file is not valid text.
    """
    raw = entry.path.read_bytes()
    if config.profile == "binary":
        return ClassifiedFile(
            entry=entry,
            rel_path=rel_path,
            text=None,
            findings=scan_units(raw, rel_path, config),
        )

    # Strict decode; a leading BOM stays in the text and is reported as U+FEFF
    try:
        text = raw.decode(config.encoding)
    except UnicodeDecodeError as e:
        raise DecodeFailure(rel_path, e) from e
    return ClassifiedFile(
        entry=entry,
        rel_path=rel_path,
        text=text,
        findings=scan_units(text, rel_path, config),
    )
