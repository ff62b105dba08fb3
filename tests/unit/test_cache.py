"""
Tests for the dirty-flag graph cache.
"""

from depmap_core.domain import DependencyGraph
from depmap_core.services import GraphCache


class TestGraphCache:

    def test_builds_once_while_clean(self):
        cache = GraphCache()
        calls = []

        def build():
            calls.append(1)
            return DependencyGraph()

        first = cache.get_or_build(build)
        second = cache.get_or_build(build)
        assert first is second
        assert len(calls) == 1
        assert not cache.dirty

    def test_relevant_change_rebuilds(self):
        cache = GraphCache()
        cache.store(DependencyGraph())
        assert cache.mark_dirty("/w/src/a.ts")
        assert cache.dirty

        rebuilt = DependencyGraph()
        assert cache.get_or_build(lambda: rebuilt) is rebuilt

    def test_irrelevant_change_ignored(self):
        cache = GraphCache()
        cache.store(DependencyGraph())
        assert not cache.mark_dirty("/w/notes.txt")
        assert not cache.dirty

    def test_watched_names(self):
        assert GraphCache.is_relevant("/w/depmap.config.json")
        assert GraphCache.is_relevant("/w/.gitignore")
        assert GraphCache.is_relevant("/w/x.PY")
        assert not GraphCache.is_relevant("/w/image.png")

    def test_clear(self):
        cache = GraphCache()
        cache.store(DependencyGraph())
        cache.clear()
        assert cache.graph is None
        assert cache.dirty
