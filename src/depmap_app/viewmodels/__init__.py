"""
ViewModels for the depmap MVVM architecture.
"""

from .base import BaseViewModel
from .graph_vm import GraphVM, neighbors_of, fit_min_scale

__all__ = [
    "BaseViewModel",
    "GraphVM",
    "neighbors_of",
    "fit_min_scale",
]
