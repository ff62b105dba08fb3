"""
Adapters implementing the port interfaces.
"""

from .local_fs import LocalFS

__all__ = ["LocalFS"]
