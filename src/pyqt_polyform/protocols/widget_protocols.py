"""
Widget ABC contracts for inspector value editors.

Defines explicit contracts that editor widgets must implement, eliminating
duck typing (``text()`` vs ``value()`` vs ``isChecked()``) in favor of
fail-loud inheritance.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class ValueGettable(ABC):
    """ABC for editors that can return their value."""

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the current value from the editor.

        Returns:
            The editor's current value. None if no value set.
        """
        pass


class ValueSettable(ABC):
    """ABC for editors that can display a value."""

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Set the editor's value without treating it as user input.

        Args:
            value: The value to display. None clears the editor.
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for editors reporting user edits.

    Provides an explicit contract for signal connection, eliminating duck
    typing of signal names (textChanged vs valueChanged vs stateChanged).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Connect callback to the editor's change signal.

        Args:
            callback: Receives the new value. Signature: callback(new_value: Any) -> None
        """
        pass
