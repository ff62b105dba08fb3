"""
Base classes for import extraction.
"""

import re
from abc import ABC
from typing import List, Pattern, Set


class ImportExtractor(ABC):
    """Base class for per-language import extractors.

    Each extractor handles one or more language identifiers and holds a
    table of patterns whose first group is a raw import string. Extraction
    never parses; it over-approximates by matching and never raises on
    malformed input. Extractors are stateless and thread-safe.
    """

    # Language identifiers this extractor handles
    LANGUAGES: List[str] = []

    # Compiled patterns; group(1) is the import string
    PATTERNS: List[Pattern[str]] = []

    def extract(self, text: str) -> Set[str]:
        """Return the distinct import strings found in text."""
        found: Set[str] = set()
        for pattern in self.PATTERNS:
            for match in pattern.finditer(text):
                value = match.group(1).strip()
                if value:
                    found.add(value)
        found.update(self._extract_extra(text))
        return found

    def _extract_extra(self, text: str) -> Set[str]:
        """Hook for syntax that a single pattern can't capture."""
        return set()


def compile_all(*patterns: str) -> List[Pattern[str]]:
    return [re.compile(p) for p in patterns]
