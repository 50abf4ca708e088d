"""Tree walker — lazy depth-first enumeration of regular files under a root."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from charguard.models import FileEntry

log = structlog.get_logger("charguard.walker")


def file_extension(name: str) -> str:
    """Lowercased suffix; dotfiles without one (``.env``) use the whole name."""
    suffix = Path(name).suffix
    if not suffix and name.startswith("."):
        return name.lower()
    return suffix.lower()


def walk_files(root: Path, excluded_dirs: Iterable[str] = ()) -> Iterator[FileEntry]:
    """Yield every reachable regular file under *root* exactly once.

    Uses an explicit stack instead of recursion, so nesting depth does not
    grow the call stack. Excluded directory names are pruned without being
    entered. Symlinked directories are followed, but each directory (by
    device + inode) is entered at most once, which breaks symlink cycles.
    Entries that cannot be accessed are logged and skipped.
    """
    excluded = frozenset(excluded_dirs)
    seen_dirs: set[tuple[int, int]] = set()
    seen_files: set[tuple[int, int]] = set()
    stack: list[Path] = [Path(root)]

    while stack:
        current = stack.pop()
        try:
            st = current.stat()
        except OSError as e:
            log.warning("walker.dir_inaccessible", path=str(current), error=str(e))
            continue
        key = (st.st_dev, st.st_ino)
        if key in seen_dirs:
            log.debug("walker.dir_already_visited", path=str(current))
            continue
        seen_dirs.add(key)

        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            log.warning("walker.dir_inaccessible", path=str(current), error=str(e))
            continue

        subdirs: list[Path] = []
        for entry in entries:
            try:
                if entry.is_dir():
                    if entry.name in excluded:
                        log.debug("walker.dir_excluded", path=entry.path)
                        continue
                    subdirs.append(Path(entry.path))
                    continue
                if not entry.is_file():
                    if entry.is_symlink():
                        log.warning("walker.broken_symlink", path=entry.path)
                    else:
                        log.debug("walker.not_regular_file", path=entry.path)
                    continue
                file_st = entry.stat()
            except OSError as e:
                log.warning("walker.entry_inaccessible", path=entry.path, error=str(e))
                continue

            file_key = (file_st.st_dev, file_st.st_ino)
            if file_key in seen_files:
                log.debug("walker.file_already_visited", path=entry.path)
                continue
            seen_files.add(file_key)
            yield FileEntry(
                path=Path(entry.path),
                size=file_st.st_size,
                extension=file_extension(entry.name),
            )

        # Reversed so the stack pops subdirectories in name order
        stack.extend(reversed(subdirs))
