"""
Tests for WorkspaceScanner and ignore-pattern matching.
"""

from depmap_core.adapters import LocalFS
from depmap_core.config import DepMapConfig
from depmap_core.services import WorkspaceScanner
from depmap_core.services.scanner import matches_ignore

from conftest import make_files


class CountingFS(LocalFS):
    """LocalFS that records every directory it lists."""

    def __init__(self):
        super().__init__()
        self.listed = []

    def scandir(self, path):
        self.listed.append(str(path))
        return super().scandir(path)


def scanned(workspace, patterns, fs=None):
    config = DepMapConfig(ignore_patterns=patterns)
    files = WorkspaceScanner(fs or LocalFS(), config).scan(str(workspace))
    return [p for p, _ in files]


class TestScanner:

    def test_skips_vendor_and_hidden(self, workspace):
        make_files(workspace, {
            "a.ts": "",
            "node_modules/dep/index.js": "",
            ".cache/x.ts": "",
            "README.md": "",
        })
        files = WorkspaceScanner(LocalFS(), DepMapConfig()).scan(str(workspace))
        assert [p for p, _ in files] == [str(workspace / "a.ts")]

    def test_ignore_patterns(self, workspace):
        make_files(workspace, {"a.ts": "", "a.test.ts": "", "dist/b.js": ""})
        config = DepMapConfig(ignore_patterns=["*.test.ts", "dist/**"])
        files = WorkspaceScanner(LocalFS(), config).scan(str(workspace))
        assert [p for p, _ in files] == [str(workspace / "a.ts")]

    def test_languages_and_order(self, workspace):
        make_files(workspace, {"b.tsx": "", "a.go": ""})
        files = WorkspaceScanner(LocalFS(), DepMapConfig()).scan(str(workspace))
        assert files == [
            (str(workspace / "a.go"), "go"),
            (str(workspace / "b.tsx"), "typescriptreact"),
        ]

    def test_double_star_prefix_matches_root_and_nested(self, workspace):
        """`**/dist/**` ignores a top-level dist/ as well as pkg/dist/."""
        make_files(workspace, {"a.ts": "", "dist/b.js": "", "pkg/dist/c.js": "", "pkg/d.ts": ""})
        assert scanned(workspace, ["**/dist/**"]) == [
            str(workspace / "a.ts"),
            str(workspace / "pkg" / "d.ts"),
        ]

    def test_ignored_directory_is_not_listed(self, workspace):
        make_files(workspace, {"a.ts": "", "dist/b.js": "", "pkg/dist/c.js": ""})
        fs = CountingFS()
        scanned(workspace, ["**/dist/**"], fs)
        assert str(workspace / "dist") not in fs.listed
        assert str(workspace / "pkg" / "dist") not in fs.listed
        assert str(workspace / "pkg") in fs.listed


class TestMatchesIgnore:

    def test_leading_double_star_is_optional(self):
        assert matches_ignore("x.gen.ts", "x.gen.ts", "**/*.gen.ts")
        assert matches_ignore("x.gen.ts", "lib/x.gen.ts", "**/*.gen.ts")

    def test_directory_matches_its_own_subtree_pattern(self):
        assert matches_ignore("build", "build", "build/**", is_dir=True)
        assert matches_ignore("build", "a/b/build", "**/build/**", is_dir=True)
        assert not matches_ignore("builder", "builder", "**/build/**", is_dir=True)

    def test_plain_name_pattern(self):
        assert matches_ignore("a.test.ts", "src/a.test.ts", "*.test.ts")
        assert not matches_ignore("a.ts", "src/a.ts", "*.test.ts")
