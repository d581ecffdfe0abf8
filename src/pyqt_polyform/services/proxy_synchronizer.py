"""
Raw field / proxy accessor synchronization.

A field may name a derived ``property`` on its owner (its proxy accessor).
After an edit, and on every render pass for read-only fields, the field and
the accessor are reconciled according to what the accessor can do:

    readable + writable  ->  setter(getter())   normalize through the setter
    readable only        ->  field = getter()   accessor is authoritative
    writable only        ->  setter(field)      push the edit into the accessor
    neither              ->  nothing

Example:
    @dataclass
    class Player:
        health: Annotated[int, FieldConfig(proxy_accessor_name="hp")] = 0

        @property
        def hp(self) -> int:
            return self.health

        @hp.setter
        def hp(self, value: int) -> None:
            self.health = max(0, min(100, value))

Editing ``health`` to 150 normalizes both the field and ``hp`` to 100.
"""

import inspect
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any
import logging

from pyqt_polyform.core.exceptions import ProxyBindingError
from pyqt_polyform.core.type_utils import FieldTypeUtils

logger = logging.getLogger(__name__)


class SyncAction(Enum):
    """What a synchronization attempt did."""
    NORMALIZE = "normalize"
    PULL = "pull"
    PUSH = "push"
    NONE = "none"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ProxyBinding:
    """Capabilities of a proxy accessor, resolved fresh for every attempt."""
    name: str
    readable: bool
    writable: bool
    value_type: Any
    accessor: property


class ProxySynchronizer:
    """Stateless reconciler between fields and their proxy accessors."""

    def resolve_binding(self, owner: Any, accessor_name: str, field_type: Any) -> ProxyBinding:
        """
        Validate and describe the proxy accessor of a field.

        Args:
            owner: Object holding both the field and the accessor
            accessor_name: Name of the property on the owner's runtime type
            field_type: Declared type of the field

        Returns:
            ProxyBinding for the accessor

        Raises:
            ProxyBindingError: If the accessor is missing, is not a property, or
                its declared type does not accept the field's type
        """
        owner_type = type(owner)
        accessor = inspect.getattr_static(owner_type, accessor_name, None)
        if accessor is None:
            raise ProxyBindingError(
                f"In \"{owner_type.__qualname__}\" cannot find property \"{accessor_name}\""
            )
        if not isinstance(accessor, property):
            raise ProxyBindingError(
                f"\"{owner_type.__qualname__}.{accessor_name}\" is a "
                f"{type(accessor).__name__}, not a property"
            )

        value_type = self._accessor_type(accessor)
        if not FieldTypeUtils.is_assignable(value_type, field_type):
            raise ProxyBindingError(
                f"property \"{accessor_name}\" type \"{_type_label(value_type)}\" "
                f"does not accept field type \"{_type_label(field_type)}\""
            )

        return ProxyBinding(
            name=accessor_name,
            readable=accessor.fget is not None,
            writable=accessor.fset is not None,
            value_type=value_type,
            accessor=accessor,
        )

    @staticmethod
    def _accessor_type(accessor: property) -> Any:
        if accessor.fget is not None:
            hints = _safe_hints(accessor.fget)
            if 'return' in hints:
                return hints['return']
        if accessor.fset is not None:
            hints = _safe_hints(accessor.fset)
            hints.pop('return', None)
            if hints:
                return next(iter(hints.values()))
        return Any

    def synchronize(self, owner: Any, field_name: str, accessor_name: str, field_type: Any) -> SyncAction:
        """
        Reconcile ``owner.<field_name>`` with ``owner.<accessor_name>``.

        An invalid binding, or an accessor that raises, is logged and skipped;
        the field keeps its committed value.

        Returns:
            The action performed
        """
        try:
            binding = self.resolve_binding(owner, accessor_name, field_type)
        except ProxyBindingError as e:
            logger.error(f"Proxy synchronization skipped for '{field_name}': {e}")
            return SyncAction.SKIPPED

        accessor = binding.accessor
        try:
            if binding.readable and binding.writable:
                accessor.fset(owner, accessor.fget(owner))
                action = SyncAction.NORMALIZE
            elif binding.readable:
                setattr(owner, field_name, accessor.fget(owner))
                action = SyncAction.PULL
            elif binding.writable:
                accessor.fset(owner, getattr(owner, field_name))
                action = SyncAction.PUSH
            else:
                action = SyncAction.NONE
        except Exception as e:
            # The field keeps whatever was committed
            logger.error(
                f"Proxy accessor \"{accessor_name}\" of {type(owner).__name__} raised "
                f"{type(e).__name__}: {e}; synchronization of '{field_name}' skipped"
            )
            return SyncAction.SKIPPED

        logger.debug(f"Proxy sync {type(owner).__name__}.{field_name} <-> {accessor_name}: {action.value}")
        return action


def _safe_hints(func) -> dict:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError) as e:
        logger.debug(f"Unresolvable annotations on {getattr(func, '__qualname__', func)}: {e}")
        return {}


def _type_label(hint: Any) -> str:
    return getattr(hint, '__qualname__', None) or repr(hint)
