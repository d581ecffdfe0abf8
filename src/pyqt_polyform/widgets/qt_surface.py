"""
PyQt6 host surface for the inspector.

Maps the immediate-mode HostSurface calls onto persistent Qt rows:

- A row is created the first time its key is drawn and reused afterwards
- Programmatic updates run with signals blocked, so only real user edits
  are queued as input
- Queued input is handed back to the controller on the next pass, which is
  requested through ``input_received``
- Rows not drawn during a pass are removed at ``end_pass()``; the rest are
  laid out in the order they were drawn
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QToolButton, QVBoxLayout, QWidget

from pyqt_polyform.protocols.host_surface import FieldLabel, HostSurface
from pyqt_polyform.protocols.inspector_config import get_inspector_config
from .field_editors import PyQtWidgetMeta, create_editor

logger = logging.getLogger(__name__)

_HEADER = "header"
_POPUP = "popup"


@dataclass
class _Row:
    container: QWidget
    layout: QHBoxLayout
    toggle: QToolButton
    label: QLabel
    editor: Optional[QWidget] = None
    editor_kind: Any = None


class QtInspectorSurface(QWidget, HostSurface, metaclass=PyQtWidgetMeta):
    """Immediate-mode inspector surface rendered with Qt widgets."""

    input_received = pyqtSignal(str)  # row key

    def __init__(self, parent: Optional[QWidget] = None, indent_width: Optional[int] = None):
        super().__init__(parent)
        self.indent_width = indent_width if indent_width is not None else get_inspector_config().indent_width

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(4, 4, 4, 4)
        self._layout.setSpacing(1)
        self._layout.addStretch(1)

        self._rows: Dict[str, _Row] = {}
        self._drawn: List[str] = []
        self._displayed: List[str] = []
        self._pending_input: Dict[str, Any] = {}
        self._pending_toggles: Dict[str, bool] = {}
        self.consumed_input = False

    # ========== PASS LIFECYCLE ==========

    def begin_pass(self) -> None:
        self._drawn = []
        self.consumed_input = False

    def end_pass(self) -> None:
        drawn = set(self._drawn)
        for key in [key for key in self._rows if key not in drawn]:
            row = self._rows.pop(key)
            self._layout.removeWidget(row.container)
            row.container.deleteLater()
            self._pending_input.pop(key, None)
            self._pending_toggles.pop(key, None)

        if self._drawn != self._displayed:
            for key in self._drawn:
                self._layout.removeWidget(self._rows[key].container)
            for position, key in enumerate(self._drawn):
                self._layout.insertWidget(position, self._rows[key].container)
            self._displayed = list(self._drawn)

    @property
    def row_keys(self) -> List[str]:
        """Keys of the rows currently displayed, top to bottom."""
        return list(self._displayed)

    # ========== HOST SURFACE ==========

    def label(self, key: str, label: FieldLabel, depth: int) -> None:
        row = self._touch(key, label, depth)
        if row.editor_kind != _HEADER:
            self._set_editor(row, None, _HEADER)

    def popup(self, key: str, label: FieldLabel, depth: int,
              index: int, options: Sequence[str], enabled: bool) -> int:
        row = self._touch(key, label, depth)
        if row.editor_kind != _POPUP:
            combo = QComboBox()
            combo.activated.connect(lambda chosen, k=key: self._queue_input(k, chosen))
            self._set_editor(row, combo, _POPUP)
        combo = row.editor

        combo.blockSignals(True)
        try:
            if [combo.itemText(i) for i in range(combo.count())] != list(options):
                combo.clear()
                combo.addItems(list(options))
            selected = self._take_input(key, index, enabled)
            combo.setCurrentIndex(selected)
        finally:
            combo.blockSignals(False)
        combo.setEnabled(enabled)
        return selected

    def value_field(self, key: str, label: FieldLabel, depth: int,
                    value: Any, value_type: type, enabled: bool) -> Any:
        row = self._touch(key, label, depth)
        if row.editor_kind is not value_type:
            editor = create_editor(value_type)
            editor.connect_change_signal(lambda new_value, k=key: self._queue_input(k, new_value))
            self._set_editor(row, editor, value_type)
        editor = row.editor

        result = self._take_input(key, value, enabled)
        if result is value and editor.get_value() != value:
            editor.blockSignals(True)
            try:
                editor.set_value(value)
            finally:
                editor.blockSignals(False)
        editor.setEnabled(enabled)
        return result

    def foldout(self, key: str, expanded: bool) -> bool:
        row = self._rows.get(key)
        if row is None or key not in self._drawn:
            logger.warning(f"foldout('{key}') drawn without a row; creating a bare header")
            row = self._touch(key, FieldLabel(""), 0)

        if key in self._pending_toggles:
            expanded = self._pending_toggles.pop(key)
            self.consumed_input = True

        row.toggle.blockSignals(True)
        row.toggle.setChecked(expanded)
        row.toggle.blockSignals(False)
        row.toggle.setArrowType(Qt.ArrowType.DownArrow if expanded else Qt.ArrowType.RightArrow)
        row.toggle.setVisible(True)
        return expanded

    # ========== ROWS ==========

    def _touch(self, key: str, label: FieldLabel, depth: int) -> _Row:
        row = self._rows.get(key)
        if row is None:
            row = self._create_row(key)
            self._rows[key] = row
        if key not in self._drawn:
            self._drawn.append(key)
            row.toggle.setVisible(False)

        row.label.setText(label.text)
        row.label.setToolTip(label.tooltip or "")
        row.layout.setContentsMargins(depth * self.indent_width, 0, 0, 0)
        return row

    def _create_row(self, key: str) -> _Row:
        container = QWidget(self)
        layout = QHBoxLayout(container)
        layout.setSpacing(4)

        toggle = QToolButton(container)
        toggle.setCheckable(True)
        toggle.setAutoRaise(True)
        toggle.setArrowType(Qt.ArrowType.RightArrow)
        toggle.toggled.connect(lambda checked, k=key: self._queue_toggle(k, checked))
        toggle.setVisible(False)
        layout.addWidget(toggle)

        label = QLabel(container)
        label.setMinimumWidth(120)
        layout.addWidget(label)

        logger.debug(f"Created inspector row '{key}'")
        return _Row(container=container, layout=layout, toggle=toggle, label=label)

    def _set_editor(self, row: _Row, editor: Optional[QWidget], kind: Any) -> None:
        if row.editor is not None:
            row.layout.removeWidget(row.editor)
            row.editor.deleteLater()
        row.editor = editor
        row.editor_kind = kind
        if editor is not None:
            editor.setParent(row.container)
            row.layout.addWidget(editor, 1)

    # ========== USER INPUT ==========

    def _take_input(self, key: str, current: Any, enabled: bool) -> Any:
        if key not in self._pending_input:
            return current
        queued = self._pending_input.pop(key)
        if not enabled:
            return current
        self.consumed_input = True
        return queued

    def _queue_input(self, key: str, value: Any) -> None:
        self._pending_input[key] = value
        self.input_received.emit(key)

    def _queue_toggle(self, key: str, expanded: bool) -> None:
        self._pending_toggles[key] = expanded
        self.input_received.emit(key)

    def simulate_input(self, key: str, value: Any) -> None:
        """Queue a value as if the user had edited row ``key``."""
        self._queue_input(key, value)

    def simulate_toggle(self, key: str, expanded: bool) -> None:
        """Queue a disclosure toggle as if the user had clicked row ``key``."""
        self._queue_toggle(key, expanded)

    def row_editor(self, key: str) -> Optional[QWidget]:
        row = self._rows.get(key)
        return row.editor if row is not None else None
