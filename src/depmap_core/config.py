"""
Workspace configuration for depmap.

Loaded from `depmap.config.json` at the workspace root. The resulting
DepMapConfig is passed explicitly to every component that needs it.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .domain.enums import Language

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "depmap.config.json"

DEFAULT_LANGUAGE_MAPPING: Dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".js": "javascript",
    ".jsx": "javascriptreact",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".py": "python",
    ".go": "go",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
}

# React variants are keyed by extension regardless of the configured name
_EXTENSION_OVERRIDES = {
    ".tsx": "typescriptreact",
    ".jsx": "javascriptreact",
}


@dataclass
class DepMapConfig:
    """Settings for scanning and graph building."""
    ignore_patterns: List[str] = field(default_factory=list)
    language_mapping: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_LANGUAGE_MAPPING)
    )
    project_name_detectors: List[Any] = field(default_factory=list)
    max_workers: int = 8

    def language_for(self, path: str) -> Optional[str]:
        """Normalized language identifier for a file, or None if unmapped."""
        ext = Path(path).suffix.lower()
        if ext in _EXTENSION_OVERRIDES and ext in self.language_mapping:
            return _EXTENSION_OVERRIDES[ext]
        name = self.language_mapping.get(ext)
        if not name:
            return None
        return Language.normalize(name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DepMapConfig":
        """Build from parsed JSON. Accepts camelCase or snake_case keys."""
        if not isinstance(data, dict):
            raise ValueError("configuration root must be an object")

        config = cls()
        ignore = data.get("ignorePatterns", data.get("ignore_patterns"))
        if ignore is not None:
            config.ignore_patterns = [str(p) for p in ignore]

        mapping = data.get("languageMapping", data.get("language_mapping"))
        if mapping is not None:
            config.language_mapping = {
                _normalize_ext(ext): str(name) for ext, name in mapping.items()
            }

        detectors = data.get("projectNameDetectors", data.get("project_name_detectors"))
        if detectors is not None:
            config.project_name_detectors = list(detectors)

        workers = data.get("maxWorkers", data.get("max_workers"))
        if workers is not None:
            config.max_workers = max(1, int(workers))
        return config


def _normalize_ext(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def load_config(path: Optional[Path] = None, workspace_root: Optional[Path] = None) -> DepMapConfig:
    """
    Load configuration, falling back to defaults on any failure.

    Args:
        path: Explicit config file path
        workspace_root: Used to locate depmap.config.json when path is None

    Returns:
        The parsed DepMapConfig, or the default one if loading failed
    """
    if path is None:
        if workspace_root is None:
            return DepMapConfig()
        path = Path(workspace_root) / CONFIG_FILENAME

    path = Path(path)
    if not path.is_file():
        logger.debug("No config at %s, using defaults", path)
        return DepMapConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        config = DepMapConfig.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Failed to load config %s: %s. Using defaults.", path, e)
        return DepMapConfig()

    logger.info("Loaded config from %s", path)
    return config
