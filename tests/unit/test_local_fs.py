"""
Tests for the LocalFS adapter.
"""

import pytest

from depmap_core.adapters import LocalFS

from conftest import make_files


class TestProbes:
    """Probes answer False instead of raising."""

    def test_existing_paths(self, workspace):
        make_files(workspace, {"a.ts": "x"})
        fs = LocalFS()
        assert fs.exists(workspace / "a.ts")
        assert fs.is_file(workspace / "a.ts")
        assert not fs.is_dir(workspace / "a.ts")
        assert fs.is_dir(workspace)

    def test_missing_path(self, workspace):
        fs = LocalFS()
        assert not fs.exists(workspace / "missing")
        assert not fs.is_file(workspace / "missing")
        assert not fs.is_dir(workspace / "missing")

    def test_invalid_path(self):
        fs = LocalFS()
        assert not fs.exists("bad\x00path")
        assert not fs.is_file("bad\x00path")


class TestScandir:

    def test_lists_entries(self, workspace):
        make_files(workspace, {"a.ts": "", "lib/b.ts": ""})
        entries = {e.name: e for e in LocalFS().scandir(workspace)}
        assert set(entries) == {"a.ts", "lib"}
        assert entries["a.ts"].is_file
        assert entries["lib"].is_dir

    def test_not_a_directory(self, workspace):
        make_files(workspace, {"a.ts": ""})
        with pytest.raises(NotADirectoryError):
            list(LocalFS().scandir(workspace / "a.ts"))


class TestReadText:

    def test_read_and_stats(self, workspace):
        make_files(workspace, {"a.ts": "import b from './b';"})
        fs = LocalFS()
        assert fs.read_text(workspace / "a.ts") == "import b from './b';"
        assert fs.stats["read_count"] == 1
        assert fs.stats["bytes_read"] == len("import b from './b';")

    def test_read_is_capped(self, workspace):
        make_files(workspace, {"big.js": "a" * 100})
        assert LocalFS(max_bytes=10).read_text(workspace / "big.js") == "a" * 10

    def test_invalid_bytes_replaced(self, workspace):
        (workspace / "bin.ts").write_bytes(b"import \xff\xfe")
        text = LocalFS().read_text(workspace / "bin.ts")
        assert text.startswith("import ")

    def test_missing_file_raises(self, workspace):
        with pytest.raises(OSError):
            LocalFS().read_text(workspace / "missing.ts")
