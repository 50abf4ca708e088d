"""charguard: detect and strip invisible/control characters in a source tree."""

__version__ = "0.1.0"

from charguard.actions import FileAction, RepairAction, ReportAction, action_for
from charguard.config import ScanConfig, load_config
from charguard.exceptions import CharGuardError, ConfigError, DecodeFailure
from charguard.models import FileEntry, FileFailure, Finding, ScanRun
from charguard.scanner import exit_code, run_scan
from charguard.walker import walk_files

__all__ = [
    "CharGuardError",
    "ConfigError",
    "DecodeFailure",
    "FileAction",
    "FileEntry",
    "FileFailure",
    "Finding",
    "RepairAction",
    "ReportAction",
    "ScanConfig",
    "ScanRun",
    "action_for",
    "exit_code",
    "load_config",
    "run_scan",
    "walk_files",
]
