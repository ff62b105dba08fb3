"""
Base class for depmap view models.

View models own the map state and publish it through Qt signals. Views
subscribe to those signals and call commands; they never write state back.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from PyQt6.QtCore import QObject

logger = logging.getLogger(__name__)


class BaseViewModel(QObject):
    """
    QObject whose state notifications skip repeats.

    `_notify_change` remembers the last values sent on each signal, so a
    burst of watcher events or an unchanged zoom bound reaches views once.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._last_sent: Dict[str, Tuple[Any, ...]] = {}

    def _notify_change(self, signal, *args: Any) -> bool:
        """
        Emit signal unless it would repeat the previous values.

        Returns:
            True if the signal was emitted
        """
        key = signal.signal
        if self._last_sent.get(key) == args:
            return False
        self._last_sent[key] = args
        logger.debug("%s %r", key, args)
        signal.emit(*args)
        return True
