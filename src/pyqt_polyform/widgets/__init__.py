"""
Qt widgets for the inspector.

Value editors, the Qt host surface and the scrollable InspectorWidget.
"""

from .field_editors import (
    PyQtWidgetMeta,
    EDITOR_IMPLEMENTATIONS,
    register_editor,
    get_editor_class,
    create_editor,
)
from .qt_surface import QtInspectorSurface
from .inspector_widget import InspectorWidget

__all__ = [
    "PyQtWidgetMeta",
    "EDITOR_IMPLEMENTATIONS",
    "register_editor",
    "get_editor_class",
    "create_editor",
    "QtInspectorSurface",
    "InspectorWidget",
]
