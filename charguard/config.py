"""Scan configuration: profiles, forbidden sets and environment overrides.

Two profiles share one engine:

    text    extension allow-list, decoded characters, Unicode-aware forbidden set
    binary  every file under a size ceiling, raw bytes, control bytes only

Environment variables (read by :func:`load_config`):
    CHARGUARD_MAX_FINDINGS   per-file finding cap (default: 40)
    CHARGUARD_MAX_FILE_SIZE  binary profile size ceiling in bytes (default: 5 MiB)
    CHARGUARD_EXCLUDE_DIRS   comma-separated directory names added to the defaults
    CHARGUARD_ENCODING       text profile codec (default: utf-8)
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from charguard.exceptions import ConfigError

PROFILES = ("text", "binary")
MODES = ("report", "repair")

DEFAULT_EXCLUDED_DIRS: frozenset[str] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        "__pycache__",
        ".venv",
        "venv",
        ".tox",
    }
)

TEXT_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".html",
        ".css",
        ".txt",
        ".json",
        ".md",
        ".env",
        ".py",
        ".toml",
        ".yml",
        ".yaml",
    }
)

DEFAULT_MAX_FINDINGS = 40
DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024

# Tab, LF, CR
ALWAYS_ALLOWED: frozenset[int] = frozenset({0x09, 0x0A, 0x0D})

NBSP = 0x00A0
# Removed outright on repair
ZERO_WIDTH: frozenset[int] = frozenset({0x200B, 0x200C, 0x200D, 0x2060, 0xFEFF})
INVISIBLE: frozenset[int] = ZERO_WIDTH | {NBSP}


def is_control(code: int) -> bool:
    return 0x00 <= code < 0x20 or code == 0x7F


@dataclass(frozen=True)
class ScanConfig:
    """Immutable settings for one run."""

    root: Path
    profile: str = "text"
    mode: str = "report"
    excluded_dirs: frozenset[str] = DEFAULT_EXCLUDED_DIRS
    extensions: frozenset[str] | None = TEXT_EXTENSIONS
    max_file_size: int | None = None
    allowed: frozenset[int] = ALWAYS_ALLOWED
    max_findings: int = DEFAULT_MAX_FINDINGS
    encoding: str = "utf-8"
    _forbidden_extra: frozenset[int] = field(default=frozenset(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        root = Path(self.root).expanduser().resolve()
        if not root.is_dir():
            raise ConfigError(f"Scan root does not exist or is not a directory: {root}")
        object.__setattr__(self, "root", root)

        if self.profile not in PROFILES:
            raise ConfigError(f"Unknown profile '{self.profile}', expected one of {PROFILES}")
        if self.mode not in MODES:
            raise ConfigError(f"Unknown mode '{self.mode}', expected one of {MODES}")
        if self.profile == "binary" and self.mode == "repair":
            raise ConfigError("Repair is only supported for the text profile")
        if self.max_findings < 1:
            raise ConfigError(f"max_findings must be positive, got {self.max_findings}")
        if self.max_file_size is not None and self.max_file_size < 0:
            raise ConfigError(f"max_file_size must not be negative, got {self.max_file_size}")
        try:
            codec = codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigError(f"Unknown encoding '{self.encoding}'") from e
        # bytes-to-bytes codecs such as base64 cannot decode a file to str
        if not getattr(codec, "_is_text_encoding", True):
            raise ConfigError(f"'{self.encoding}' is not a text encoding")

        if self.extensions is not None:
            object.__setattr__(
                self, "extensions", frozenset(_normalize_extension(e) for e in self.extensions)
            )
        object.__setattr__(self, "excluded_dirs", frozenset(self.excluded_dirs))
        object.__setattr__(self, "allowed", frozenset(self.allowed))
        object.__setattr__(
            self, "_forbidden_extra", INVISIBLE if self.profile == "text" else frozenset()
        )

    @classmethod
    def text_profile(cls, root: str | Path, **overrides: Any) -> ScanConfig:
        """Extension-scoped, Unicode-aware configuration."""
        params: dict[str, Any] = {"extensions": TEXT_EXTENSIONS, "max_file_size": None}
        params.update(overrides)
        return cls(root=Path(root), profile="text", **params)

    @classmethod
    def binary_profile(cls, root: str | Path, **overrides: Any) -> ScanConfig:
        """Byte-level configuration covering every file under the size ceiling."""
        params: dict[str, Any] = {"extensions": None, "max_file_size": DEFAULT_MAX_FILE_SIZE}
        params.update(overrides)
        return cls(root=Path(root), profile="binary", **params)

    def is_forbidden(self, code: int) -> bool:
        if code in self.allowed:
            return False
        return is_control(code) or code in self._forbidden_extra


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def _env_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from e


def _env_names(key: str) -> frozenset[str]:
    raw = os.environ.get(key, "")
    return frozenset(name.strip() for name in raw.split(",") if name.strip())


def load_config(
    root: str | Path,
    profile: str = "text",
    mode: str = "report",
    **overrides: Any,
) -> ScanConfig:
    """Build a configuration from defaults, environment variables and explicit overrides.

    Explicit overrides win over the environment. ``extra_excluded_dirs`` is
    merged into the excluded set rather than replacing it.
    """
    extra_dirs = frozenset(overrides.pop("extra_excluded_dirs", None) or ())
    params: dict[str, Any] = {
        "max_findings": _env_int("CHARGUARD_MAX_FINDINGS", DEFAULT_MAX_FINDINGS),
        "excluded_dirs": DEFAULT_EXCLUDED_DIRS | _env_names("CHARGUARD_EXCLUDE_DIRS") | extra_dirs,
        "encoding": os.environ.get("CHARGUARD_ENCODING") or "utf-8",
        "mode": mode,
    }
    if profile == "binary":
        params["max_file_size"] = _env_int("CHARGUARD_MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE)
    params.update({k: v for k, v in overrides.items() if v is not None})

    if profile == "text":
        return ScanConfig.text_profile(root, **params)
    if profile == "binary":
        return ScanConfig.binary_profile(root, **params)
    raise ConfigError(f"Unknown profile '{profile}', expected one of {PROFILES}")
