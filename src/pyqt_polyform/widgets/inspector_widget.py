"""
Inspector widget - hosts an object graph, its controller and a Qt surface.

User edits arrive on the surface as queued input; the widget schedules a
debounced render pass which hands that input to the controller. A pass that
consumed input schedules one follow-up pass so normalized values (for
example a clamped proxy accessor) are displayed.
"""

from typing import Any, Optional
import logging

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFrame, QScrollArea, QVBoxLayout, QWidget

from pyqt_polyform.core.debounce_timer import DebounceTimer
from pyqt_polyform.core.field_path import FieldPath
from pyqt_polyform.core.type_catalog import TypeCatalog
from pyqt_polyform.forms.polymorphic_field_controller import PolymorphicFieldController
from pyqt_polyform.protocols.inspector_config import InspectorConfig, get_inspector_config
from pyqt_polyform.services.object_graph_store import ObjectGraphStore
from .qt_surface import QtInspectorSurface

logger = logging.getLogger(__name__)


class InspectorWidget(QWidget):
    """
    Scrollable inspector for one target object.

    Signals:
        field_committed(str, object): path and new value of every committed edit
    """

    field_committed = pyqtSignal(str, object)

    def __init__(self, target: Any = None, parent: Optional[QWidget] = None,
                 catalog: Optional[TypeCatalog] = None,
                 config: Optional[InspectorConfig] = None):
        super().__init__(parent)
        self.config = config or get_inspector_config()
        self._catalog = catalog
        self.store: Optional[ObjectGraphStore] = None
        self.controller: Optional[PolymorphicFieldController] = None

        self.surface = QtInspectorSurface(indent_width=self.config.indent_width)
        self.surface.input_received.connect(self._on_input)

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        scroll.setWidget(self.surface)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(scroll)

        self._refresh_timer = DebounceTimer(self.config.refresh_delay_ms, self.refresh, parent=self)

        if target is not None:
            self.set_target(target)

    @property
    def target(self) -> Any:
        return self.store.root if self.store is not None else None

    def set_target(self, target: Any) -> None:
        """Inspect ``target``, replacing any previous object graph."""
        if self.store is not None:
            self.store.remove_commit_listener(self._on_commit)
        self._refresh_timer.cancel()

        self.store = ObjectGraphStore(target)
        self.store.add_commit_listener(self._on_commit)
        self.controller = PolymorphicFieldController(
            self.store, self.surface, catalog=self._catalog, config=self.config
        )
        logger.debug(f"Inspecting {type(target).__name__}")
        self.refresh()

    def refresh(self) -> None:
        """Run one render pass immediately."""
        self._refresh_timer.cancel()
        if self.controller is None:
            return
        self.controller.render()
        if self.surface.consumed_input:
            self._refresh_timer.trigger()

    def schedule_refresh(self) -> None:
        self._refresh_timer.trigger()

    def _on_input(self, key: str) -> None:
        self.schedule_refresh()

    def _on_commit(self, path: FieldPath, value: Any) -> None:
        self.field_committed.emit(str(path), value)
