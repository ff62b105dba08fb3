"""
Background workers for long-running operations.
"""

from .build_worker import BuildWorker

__all__ = ["BuildWorker"]
