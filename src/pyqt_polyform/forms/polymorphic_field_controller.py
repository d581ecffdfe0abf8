"""
Polymorphic field controller - renders an object graph onto a host surface.

One ``render()`` call is one immediate-mode pass over the inspected root:

1. Every field opens a writability scope, so a read-only ancestor forces its
   whole subtree to render read-only.
2. Fields declared with an abstract type get a variant selector:
   option 0 clears the field, option k constructs the k-th catalogued variant.
   A switch is committed to the object graph immediately, before anything
   reads the field's nested members.
3. Expanded fields render their members recursively. A field only renders
   children exactly one level deeper; deeper levels are drawn by those
   children in turn, so a pass over a self-referential graph never goes past
   the disclosure toggles the user actually opened.
4. Fields naming a proxy accessor are synchronized after edits, and on every
   pass when the field is read-only.

Failures stay local: a field that raises an InspectorError is logged and
skipped, and the pass continues with the next field.
"""

from typing import Any, Optional, Sequence
import logging

from pyqt_polyform.core.exceptions import InspectorError
from pyqt_polyform.core.field_path import FieldPath, IndexSegment
from pyqt_polyform.core.type_catalog import TypeCatalog, get_type_catalog
from pyqt_polyform.core.type_utils import FieldTypeUtils
from pyqt_polyform.core.writability import WritabilityScopeStack
from pyqt_polyform.protocols.host_surface import FieldLabel, HostSurface
from pyqt_polyform.protocols.inspector_config import InspectorConfig, get_inspector_config
from pyqt_polyform.protocols.object_graph import ObjectGraphView
from pyqt_polyform.services.proxy_synchronizer import ProxySynchronizer, SyncAction
from pyqt_polyform.services.variant_factory import VariantFactory
from .field_state import (
    CompositeFieldState, FieldStateBase, PolymorphicFieldState, SequenceFieldState, ValueFieldState,
)

logger = logging.getLogger(__name__)


class PolymorphicFieldController:
    """
    Renders fields of an ObjectGraphView onto a HostSurface.

    Each controller owns its writability stack, so controllers driving
    different surfaces never see each other's read-only scopes.

    Example:
        store = ObjectGraphStore(player)
        controller = PolymorphicFieldController(store, surface)
        controller.render()
    """

    def __init__(self,
                 view: ObjectGraphView,
                 surface: HostSurface,
                 catalog: Optional[TypeCatalog] = None,
                 synchronizer: Optional[ProxySynchronizer] = None,
                 factory: Optional[VariantFactory] = None,
                 writability: Optional[WritabilityScopeStack] = None,
                 config: Optional[InspectorConfig] = None):
        self.view = view
        self.surface = surface
        self.catalog = catalog or get_type_catalog()
        self.synchronizer = synchronizer or ProxySynchronizer()
        self.factory = factory or VariantFactory()
        self.writability = writability or WritabilityScopeStack()
        self.config = config or get_inspector_config()

    def render(self) -> None:
        """Run one render pass over every top-level field of the view's root."""
        self.surface.begin_pass()
        try:
            for state in self.view.iter_fields(FieldPath.root(), depth=0):
                self._render_isolated(state)
            self._commit_pending()
        finally:
            self.surface.end_pass()

    def _render_isolated(self, state: FieldStateBase) -> None:
        try:
            self.render_field(state)
        except InspectorError as e:
            logger.error(f"Skipping field '{state.path}': {e}")

    def _commit_pending(self) -> None:
        try:
            self.view.commit()
        except InspectorError as e:
            logger.error(f"Failed to commit pending edits: {e}")

    def render_field(self, state: FieldStateBase) -> bool:
        """
        Render one field and, if expanded, its members.

        Args:
            state: Fresh per-pass state of the field

        Returns:
            True if the field's value changed during this call

        Raises:
            InspectorError: Owner resolution, assignment or variant construction
                failures for this field
        """
        config = state.config
        label = self.label_for(state)

        with self.writability.scope(config.can_write) as enabled:
            if isinstance(state, PolymorphicFieldState):
                changed = self._render_polymorphic(state, label, enabled)
            elif isinstance(state, (CompositeFieldState, SequenceFieldState)):
                self.surface.label(state.key, label, state.depth)
                self._render_children(state)
                changed = False
            else:
                changed = self._render_value(state, label, enabled)

            if config.proxy_accessor_name and (changed or not config.can_write):
                self._synchronize(state)

        return changed

    def label_for(self, state: FieldStateBase) -> FieldLabel:
        if state.config.display_name is not None:
            text = state.config.display_name
        elif state.path.segments and isinstance(state.path.leaf, IndexSegment):
            text = self.config.element_label.format(index=state.path.leaf.index)
        else:
            text = FieldTypeUtils.nicify_name(state.name)
        return FieldLabel(text, state.config.tooltip)

    # ========== POLYMORPHIC FIELDS ==========

    def variant_options(self, variants: Sequence[type]) -> list:
        return [self.config.unset_option_label] + [variant.__name__ for variant in variants]

    @staticmethod
    def variant_index(variants: Sequence[type], value: Any) -> int:
        """Selector index of ``value``: 0 for None or an uncatalogued type."""
        if value is None:
            return 0
        runtime_type = type(value)
        for index, variant in enumerate(variants):
            if variant is runtime_type:
                return index + 1
        return 0

    def _render_polymorphic(self, state: PolymorphicFieldState, label: FieldLabel, enabled: bool) -> bool:
        variants = self.catalog.resolve(state.declared_type)
        current = self.variant_index(variants, state.value)
        interactive = enabled and state.config.can_switch_variant
        selected = self.surface.popup(
            state.key, label, state.depth, current,
            self.variant_options(variants), interactive,
        )

        changed = False
        if interactive and selected != current:
            changed = self.switch_variant(state, variants, selected)

        self._render_children(state)
        return changed

    def switch_variant(self, state: FieldStateBase, variants: Sequence[type], selected: int) -> bool:
        """
        Replace the field's value according to a selector choice and commit it.

        Args:
            state: Field being switched; its ``value`` is updated in place
            variants: Catalogued variants shown in the selector
            selected: Chosen selector index (0 clears the field)

        Returns:
            True if the field's value was replaced

        Raises:
            VariantConstructionError: If the chosen variant cannot be produced;
                the field is left unchanged
        """
        if selected == 0:
            new_value = None
        elif 0 < selected <= len(variants):
            new_value = self.factory.create(variants[selected - 1])
        else:
            logger.warning(f"Ignoring out-of-range variant index {selected} for '{state.path}'")
            return False

        self.view.set_value(state.path, new_value)
        # Nested reads later in this pass must see the new shape
        self.view.commit()
        state.value = new_value
        logger.debug(
            f"Switched '{state.path}' to {type(new_value).__name__ if new_value is not None else 'None'}"
        )
        return True

    # ========== NESTED MEMBERS ==========

    def _render_children(self, state: FieldStateBase) -> None:
        expanded = self.surface.foldout(state.key, state.expanded)
        if expanded != state.expanded:
            self.view.set_expanded(state.path, expanded)
            state.expanded = expanded

        if not expanded or state.value is None:
            return

        depth_limit = state.depth + 1
        for child in self.view.iter_descendants(state):
            if child.depth > depth_limit:
                continue
            self._render_isolated(child)

    # ========== VALUE FIELDS ==========

    def _render_value(self, state: ValueFieldState, label: FieldLabel, enabled: bool) -> bool:
        new_value = self.surface.value_field(
            state.key, label, state.depth, state.value, state.value_type, enabled
        )
        if not enabled or _same_value(new_value, state.value):
            return False

        self.view.set_value(state.path, new_value)
        state.value = new_value
        return True

    # ========== PROXY ACCESSORS ==========

    def _synchronize(self, state: FieldStateBase) -> SyncAction:
        self.view.commit()
        owner = self.view.resolve_owner(state.path)
        return self.synchronizer.synchronize(
            owner, state.name, state.config.proxy_accessor_name, state.declared_type
        )


def _same_value(left: Any, right: Any) -> bool:
    if left is right:
        return True
    return type(left) is type(right) and left == right
