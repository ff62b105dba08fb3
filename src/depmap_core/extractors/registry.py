"""
Extractor registry - maps language identifiers to import extractors.
"""

from typing import Dict, Optional, List, Set

from .base import ImportExtractor
from ..domain.enums import Language


class ExtractorRegistry:
    """Registry of available import extractors.

    Provides the single capability `extract(text, language) -> set`.
    Languages without an extractor yield an empty set.
    """

    def __init__(self):
        self._extractors: Dict[str, ImportExtractor] = {}
        self._register_default_extractors()

    def _register_default_extractors(self):
        """Register all built-in extractors."""
        from .languages import (
            EcmaScriptExtractor,
            PythonExtractor,
            GoExtractor,
            JavaExtractor,
            CIncludeExtractor,
        )

        for extractor_class in [
            EcmaScriptExtractor,
            PythonExtractor,
            GoExtractor,
            JavaExtractor,
            CIncludeExtractor,
        ]:
            self.register(extractor_class())

    def register(self, extractor: ImportExtractor):
        """Register a custom extractor (replaces any existing one)."""
        for language in extractor.LANGUAGES:
            self._extractors[Language.normalize(language)] = extractor

    def get_extractor(self, language: str) -> Optional[ImportExtractor]:
        return self._extractors.get(Language.normalize(language))

    def supports(self, language: str) -> bool:
        return self.get_extractor(language) is not None

    def extract(self, text: str, language: str) -> Set[str]:
        """Extract raw import strings from text."""
        extractor = self.get_extractor(language)
        if extractor is None:
            return set()
        return extractor.extract(text)

    def supported_languages(self) -> List[str]:
        return sorted(self._extractors.keys())


# Global registry instance
_registry: Optional[ExtractorRegistry] = None


def get_registry() -> ExtractorRegistry:
    """Get the shared extractor registry."""
    global _registry
    if _registry is None:
        _registry = ExtractorRegistry()
    return _registry


def extract_imports(text: str, language: str) -> Set[str]:
    """Convenience function to extract imports with the shared registry."""
    return get_registry().extract(text, language)
