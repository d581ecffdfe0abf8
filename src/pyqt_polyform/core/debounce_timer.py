"""Trailing debounce timer used to coalesce inspector re-renders."""

from typing import Callable, Optional
from PyQt6.QtCore import QObject, QTimer


class DebounceTimer:
    """
    Reusable trailing debounce timer.

    Restarts on each trigger. The handler fires once, ``delay_ms`` after the
    last trigger, so a burst of edits produces a single render pass.

    Usage:
        self._refresh = DebounceTimer(delay_ms=0, handler=self.refresh, parent=self)

        def on_input(self, key):
            self._refresh.trigger()
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None], parent: Optional[QObject] = None):
        self._handler = handler
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, delay_ms))
        self._timer.timeout.connect(self._handler)

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def trigger(self):
        """Trigger debounce; restarts the timer."""
        self._timer.start()

    def cancel(self):
        """Cancel pending trigger."""
        self._timer.stop()

    def force(self):
        """Cancel timer and fire handler immediately."""
        self.cancel()
        self._handler()
