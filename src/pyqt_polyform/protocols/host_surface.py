"""
Host rendering surface contract.

The inspector core renders in immediate mode: on every pass it calls the
surface once per visible row, passing the current state, and the surface
answers with whatever the user entered since the previous pass. Rows are
identified by ``key`` (the field's path) so a retained-mode toolkit can map
calls onto persistent widgets.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class FieldLabel:
    """Label and tooltip shown for a row."""
    text: str
    tooltip: Optional[str] = None


class HostSurface(ABC):
    """ABC for surfaces the PolymorphicFieldController draws onto."""

    @abstractmethod
    def begin_pass(self) -> None:
        """Start a render pass."""
        pass

    @abstractmethod
    def end_pass(self) -> None:
        """
        Finish a render pass.

        Rows not touched during the pass are no longer visible.
        """
        pass

    @abstractmethod
    def label(self, key: str, label: FieldLabel, depth: int) -> None:
        """Draw a header row with no editor."""
        pass

    @abstractmethod
    def popup(self, key: str, label: FieldLabel, depth: int,
              index: int, options: Sequence[str], enabled: bool) -> int:
        """
        Draw a selector row.

        Args:
            key: Row identifier
            label: Row label
            depth: Nesting depth for indentation
            index: Currently selected option
            options: Option texts
            enabled: Whether the user may change the selection

        Returns:
            The selected index (differs from ``index`` when the user picked another option)
        """
        pass

    @abstractmethod
    def value_field(self, key: str, label: FieldLabel, depth: int,
                    value: Any, value_type: type, enabled: bool) -> Any:
        """
        Draw a value editor row.

        Returns:
            The edited value (``value`` itself when the user made no edit)
        """
        pass

    @abstractmethod
    def foldout(self, key: str, expanded: bool) -> bool:
        """
        Draw the disclosure toggle of the row ``key``.

        Must follow a ``label`` or ``popup`` call for the same key in the same pass.

        Returns:
            The new expanded state
        """
        pass
