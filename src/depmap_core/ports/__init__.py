"""
Port interfaces (abstract contracts) for depmap.
"""

from .fs_port import FSPort, DirEntry

__all__ = ["FSPort", "DirEntry"]
