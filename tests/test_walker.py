"""Tests for the tree walker."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from charguard.config import DEFAULT_EXCLUDED_DIRS
from charguard.walker import file_extension, walk_files

_is_root = hasattr(os, "geteuid") and os.geteuid() == 0


def _rel(root: Path, entries) -> list[str]:
    return [e.path.relative_to(root).as_posix() for e in entries]


class TestFileExtension:
    def test_suffix_lowercased(self):
        assert file_extension("App.JSX") == ".jsx"

    def test_last_suffix_only(self):
        assert file_extension("archive.tar.gz") == ".gz"

    def test_dotfile_uses_whole_name(self):
        assert file_extension(".env") == ".env"

    def test_dotfile_with_suffix(self):
        assert file_extension(".eslintrc.json") == ".json"

    def test_no_extension(self):
        assert file_extension("Makefile") == ""


class TestWalkFiles:
    def test_empty_directory(self, tmp_path: Path):
        assert list(walk_files(tmp_path)) == []

    def test_visits_nested_files_once(self, make_tree):
        root = make_tree(
            {
                "a.txt": "a",
                "src/b.js": "b",
                "src/deep/c.md": "c",
                "src/deep/deeper/d.json": "{}",
            }
        )
        found = _rel(root, walk_files(root))
        assert sorted(found) == ["a.txt", "src/b.js", "src/deep/c.md", "src/deep/deeper/d.json"]
        assert len(found) == len(set(found))

    def test_order_is_deterministic(self, make_tree):
        root = make_tree({"b.txt": "", "a.txt": "", "z/x.txt": "", "m/y.txt": ""})
        assert _rel(root, walk_files(root)) == ["a.txt", "b.txt", "m/y.txt", "z/x.txt"]

    def test_is_lazy(self, make_tree):
        root = make_tree({"a.txt": "", "b.txt": ""})
        it = walk_files(root)
        first = next(it)
        assert first.path.name == "a.txt"

    def test_entry_metadata(self, make_tree):
        root = make_tree({"notes.MD": "hello"})
        (entry,) = list(walk_files(root))
        assert entry.size == 5
        assert entry.extension == ".md"
        assert entry.path == root / "notes.MD"

    def test_excluded_dirs_never_visited(self, make_tree):
        root = make_tree(
            {
                "keep.txt": "",
                ".git/config.txt": "\x00\x01",
                "node_modules/pkg/index.js": "\x07",
                "src/node_modules/nested/x.js": "",
                "src/ok.js": "",
            }
        )
        found = _rel(root, walk_files(root, DEFAULT_EXCLUDED_DIRS))
        assert found == ["keep.txt", "src/ok.js"]

    def test_exclusion_matches_directory_names_only(self, make_tree):
        root = make_tree({"node_modules.txt": "", "vendor/lib.js": ""})
        found = _rel(root, walk_files(root, {"node_modules", "vendor"}))
        assert found == ["node_modules.txt"]

    def test_deep_nesting_does_not_recurse(self, tmp_path: Path):
        current = tmp_path
        for i in range(200):
            current = current / f"d{i}"
        current.mkdir(parents=True)
        (current / "leaf.txt").write_text("x")
        found = list(walk_files(tmp_path))
        assert len(found) == 1
        assert found[0].path.name == "leaf.txt"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink_cycle_is_skipped(self, make_tree):
        root = make_tree({"sub/file.txt": "x"})
        os.symlink(root, root / "sub" / "loop", target_is_directory=True)
        found = _rel(root, walk_files(root))
        assert found == ["sub/file.txt"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinked_file_visited_once(self, make_tree):
        root = make_tree({"real.txt": "x"})
        os.symlink(root / "real.txt", root / "alias.txt")
        found = list(walk_files(root))
        assert len(found) == 1

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_broken_symlink_skipped(self, make_tree):
        root = make_tree({"ok.txt": "x"})
        os.symlink(root / "missing.txt", root / "dangling.txt")
        assert _rel(root, walk_files(root)) == ["ok.txt"]

    @pytest.mark.skipif(_is_root or os.name == "nt", reason="permission checks need a non-root POSIX user")
    def test_unreadable_directory_does_not_abort(self, make_tree):
        root = make_tree({"locked/secret.txt": "x", "open/visible.txt": "y"})
        locked = root / "locked"
        locked.chmod(0)
        try:
            found = _rel(root, walk_files(root))
        finally:
            locked.chmod(0o755)
        assert found == ["open/visible.txt"]

    def test_scandir_error_does_not_abort(self, make_tree, monkeypatch):
        root = make_tree({"locked/secret.txt": "x", "open/visible.txt": "y"})
        real_scandir = os.scandir

        def _scandir(path):
            if Path(path).name == "locked":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", _scandir)
        assert _rel(root, walk_files(root)) == ["open/visible.txt"]
