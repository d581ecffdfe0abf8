"""
Value editors for inspector rows.

Adapters wrap Qt widgets to implement the editor ABCs, normalizing Qt's
inconsistent APIs:
- QLineEdit.text() vs QSpinBox.value() vs QCheckBox.isChecked()
- textChanged vs valueChanged vs stateChanged

Editors register themselves per Python value type with ``register_editor``;
``get_editor_class`` walks the value type's MRO so ``bool`` finds the checkbox
before ``int`` finds the spinbox, and Enum subclasses find the enum editor.
"""

from abc import ABCMeta
from enum import Enum
from typing import Any, Callable, Dict, Type
import logging

from PyQt6.QtCore import QObject
from PyQt6.QtGui import QWheelEvent
from PyQt6.QtWidgets import QCheckBox, QComboBox, QDoubleSpinBox, QLabel, QLineEdit, QSpinBox, QWidget

from pyqt_polyform.protocols.widget_protocols import ChangeSignalEmitter, ValueGettable, ValueSettable

logger = logging.getLogger(__name__)


class PyQtWidgetMeta(type(QObject), ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


# Maps python value type -> editor class
EDITOR_IMPLEMENTATIONS: Dict[type, Type[QWidget]] = {}


def register_editor(*value_types: type) -> Callable[[Type[QWidget]], Type[QWidget]]:
    """Class decorator registering an editor for one or more value types."""
    def decorator(editor_class: Type[QWidget]) -> Type[QWidget]:
        for value_type in value_types:
            if value_type in EDITOR_IMPLEMENTATIONS:
                logger.warning(
                    f"Editor for {value_type.__name__} already registered to "
                    f"{EDITOR_IMPLEMENTATIONS[value_type].__name__}. Overwriting with {editor_class.__name__}."
                )
            EDITOR_IMPLEMENTATIONS[value_type] = editor_class
        return editor_class
    return decorator


def get_editor_class(value_type: Any) -> Type[QWidget]:
    """
    Editor class for a value type.

    Falls back to a read-only text display for unregistered types.
    """
    if isinstance(value_type, type) and issubclass(value_type, Enum):
        # IntEnum/StrEnum members must not fall through to the int/str editors
        return EnumEditor
    for klass in getattr(value_type, '__mro__', ()):
        editor_class = EDITOR_IMPLEMENTATIONS.get(klass)
        if editor_class is not None:
            return editor_class
    return ReadOnlyEditor


def create_editor(value_type: Any, parent: QWidget = None) -> QWidget:
    editor_class = get_editor_class(value_type)
    if editor_class is EnumEditor:
        return EnumEditor(value_type, parent)
    return editor_class(parent)


@register_editor(str)
class TextEditor(QLineEdit, ValueGettable, ValueSettable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Single-line text. None displays as empty."""

    def get_value(self) -> Any:
        return self.text()

    def set_value(self, value: Any) -> None:
        self.setText("" if value is None else str(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.textEdited.connect(lambda _text: callback(self.get_value()))


@register_editor(int)
class IntEditor(QSpinBox, ValueGettable, ValueSettable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Integer spinbox that ignores wheel events to prevent accidental edits."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRange(-2147483648, 2147483647)

    def get_value(self) -> Any:
        return self.value()

    def set_value(self, value: Any) -> None:
        self.setValue(int(value) if value is not None else 0)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.valueChanged.connect(lambda _value: callback(self.get_value()))

    def wheelEvent(self, event: QWheelEvent):
        event.ignore()


@register_editor(float)
class FloatEditor(QDoubleSpinBox, ValueGettable, ValueSettable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Floating-point spinbox that ignores wheel events."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRange(-1e308, 1e308)
        self.setDecimals(6)

    def get_value(self) -> Any:
        return self.value()

    def set_value(self, value: Any) -> None:
        self.setValue(float(value) if value is not None else 0.0)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.valueChanged.connect(lambda _value: callback(self.get_value()))

    def wheelEvent(self, event: QWheelEvent):
        event.ignore()


@register_editor(bool)
class BoolEditor(QCheckBox, ValueGettable, ValueSettable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Checkbox. None displays unchecked."""

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        self.setChecked(bool(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.toggled.connect(lambda _checked: callback(self.get_value()))


@register_editor(Enum)
class EnumEditor(QComboBox, ValueGettable, ValueSettable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Dropdown over the members of one Enum type; values live in item data."""

    def __init__(self, enum_type: type, parent=None):
        super().__init__(parent)
        self.enum_type = enum_type
        for member in enum_type:
            self.addItem(member.name, member)

    def get_value(self) -> Any:
        if self.currentIndex() < 0:
            return None
        return self.itemData(self.currentIndex())

    def set_value(self, value: Any) -> None:
        for index in range(self.count()):
            if self.itemData(index) == value:
                self.setCurrentIndex(index)
                return
        self.setCurrentIndex(-1)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.activated.connect(lambda _index: callback(self.get_value()))

    def wheelEvent(self, event: QWheelEvent):
        event.ignore()


class ReadOnlyEditor(QLabel, ValueGettable, ValueSettable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Text display for values without a registered editor."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._value = None

    def get_value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> None:
        self._value = value
        self.setText("None" if value is None else repr(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        # Never edited by the user
        pass
