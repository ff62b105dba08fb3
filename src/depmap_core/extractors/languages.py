"""
Built-in import extractors, one per language family.
"""

import re
from typing import Set

from .base import ImportExtractor, compile_all


class EcmaScriptExtractor(ImportExtractor):
    """TypeScript/JavaScript: `from '...'`, `require('...')`, bare and dynamic imports."""

    LANGUAGES = ["typescript", "typescriptreact", "javascript", "javascriptreact"]
    PATTERNS = compile_all(
        r"""from\s+['"](.*?)['"]""",
        r"""require\(\s*['"](.*?)['"]\s*\)""",
        r"""import\s+['"](.*?)['"]""",
        r"""import\(\s*['"](.*?)['"]\s*\)""",
    )


class PythonExtractor(ImportExtractor):
    """Python: the module path after `from` or `import`."""

    LANGUAGES = ["python"]
    PATTERNS = compile_all(r"(?:^|\s)(?:from|import)\s+([\w.]+)")


class GoExtractor(ImportExtractor):
    """Go: single-line imports and parenthesized import blocks."""

    LANGUAGES = ["go"]
    PATTERNS = compile_all(r'import\s+(?:[\w.]+\s+)?"(.*?)"')

    _BLOCK = re.compile(r"import\s*\(([\s\S]*?)\)")
    _QUOTED = re.compile(r'"(.*?)"')

    def _extract_extra(self, text: str) -> Set[str]:
        found: Set[str] = set()
        for block in self._BLOCK.finditer(text):
            # One entry per line, optionally aliased
            for line in block.group(1).splitlines():
                quoted = self._QUOTED.search(line)
                if quoted and quoted.group(1):
                    found.add(quoted.group(1))
        return found


class JavaExtractor(ImportExtractor):
    """Java: `import a.b.C;`, `import static ...;` and package wildcards."""

    LANGUAGES = ["java"]
    PATTERNS = compile_all(r"import\s+(?:static\s+)?([\w.]+?)(?:\.\*)?\s*;")


class CIncludeExtractor(ImportExtractor):
    """C/C++: `#include "x.h"` and `#include <x.h>`."""

    LANGUAGES = ["c", "cpp"]
    PATTERNS = compile_all(r'#\s*include\s+["<](.*?)[">]')
