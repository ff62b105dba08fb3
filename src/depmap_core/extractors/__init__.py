"""
Import extractors for supported languages.
"""

from .base import ImportExtractor
from .registry import ExtractorRegistry, get_registry, extract_imports

__all__ = [
    "ImportExtractor",
    "ExtractorRegistry",
    "get_registry",
    "extract_imports",
]
