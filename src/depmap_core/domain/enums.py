"""
Enumerations for the depmap domain.
"""

from enum import Enum
from typing import Optional


class Language(str, Enum):
    """Languages with an import extractor."""
    TYPESCRIPT = "typescript"
    TYPESCRIPT_REACT = "typescriptreact"
    JAVASCRIPT = "javascript"
    JAVASCRIPT_REACT = "javascriptreact"
    PYTHON = "python"
    GO = "go"
    JAVA = "java"
    C = "c"
    CPP = "cpp"

    @classmethod
    def normalize(cls, name: str) -> str:
        """Normalize a configured language name to its identifier."""
        name = name.strip().lower()
        ALIASES = {
            "c++": "cpp",
            "typescript react": "typescriptreact",
            "javascript react": "javascriptreact",
        }
        return ALIASES.get(name, name)

    @classmethod
    def parse(cls, name: str) -> Optional["Language"]:
        """Return the Language for a name, or None if unsupported."""
        try:
            return cls(cls.normalize(name))
        except ValueError:
            return None


class RegionType(str, Enum):
    """Kinds of derived map regions."""
    PLATE = "plate"          # Voronoi cell around a directory centroid
    LANDMASS = "landmass"    # Padded hull around every node


class SelectionKind(str, Enum):
    """What the user currently has selected."""
    NONE = "none"
    NODE = "node"
    CLUSTER = "cluster"
