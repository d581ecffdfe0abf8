"""
Per-field inspector configuration.

A FieldConfig is attached to a member either through ``typing.Annotated``
or through dataclass field metadata:

    @dataclass
    class Player:
        health: Annotated[int, FieldConfig(display_name="HP", proxy_accessor_name="hp")] = 0
        person: IPerson = inspector_field(default=None, can_switch_variant=True)

Members without a config are rendered with ``FieldConfig()``.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from pyqt_polyform.core.type_utils import FieldTypeUtils

FIELD_CONFIG_METADATA_KEY = "pyqt_polyform"


@dataclass(frozen=True)
class FieldConfig:
    """
    Inspector options for one member.

    Attributes:
        display_name: Overrides the shown label
        tooltip: Overrides the shown tooltip
        order: Priority when several configs are attached; lowest wins
        can_write: Whether edits are permitted (also forces proxy refresh every pass)
        proxy_accessor_name: Property on the owner to synchronize after edits
        can_switch_variant: Whether the variant selector is interactive
    """
    display_name: Optional[str] = None
    tooltip: Optional[str] = None
    order: int = 0
    can_write: bool = True
    proxy_accessor_name: Optional[str] = None
    can_switch_variant: bool = True

    def for_element(self) -> 'FieldConfig':
        """Config applied to each element of a configured sequence member."""
        return dataclasses.replace(self, display_name=None, proxy_accessor_name=None)


DEFAULT_FIELD_CONFIG = FieldConfig()


def inspector_field(*, default: Any = dataclasses.MISSING,
                    default_factory: Callable[[], Any] = dataclasses.MISSING,
                    display_name: Optional[str] = None,
                    tooltip: Optional[str] = None,
                    order: int = 0,
                    can_write: bool = True,
                    proxy_accessor_name: Optional[str] = None,
                    can_switch_variant: bool = True,
                    **field_kwargs) -> Any:
    """
    ``dataclasses.field`` carrying a FieldConfig in its metadata.

    Extra keyword arguments are forwarded to ``dataclasses.field``.
    """
    config = FieldConfig(
        display_name=display_name,
        tooltip=tooltip,
        order=order,
        can_write=can_write,
        proxy_accessor_name=proxy_accessor_name,
        can_switch_variant=can_switch_variant,
    )
    metadata = dict(field_kwargs.pop('metadata', None) or {})
    metadata[FIELD_CONFIG_METADATA_KEY] = config
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata, **field_kwargs
    )


def select_config(configs: Iterable[FieldConfig]) -> FieldConfig:
    """Pick the config with the lowest order, first declared on ties."""
    candidates: List[FieldConfig] = list(configs)
    if not candidates:
        return DEFAULT_FIELD_CONFIG
    return min(candidates, key=lambda config: config.order)


def get_field_config(owner: Any, name: str, hint: Any = None) -> FieldConfig:
    """
    Collect the FieldConfig attached to member ``name`` of ``owner``.

    Args:
        owner: The object holding the member
        name: Member name
        hint: The member's type hint with Annotated extras preserved, if known

    Returns:
        The effective FieldConfig (``DEFAULT_FIELD_CONFIG`` if none attached)
    """
    _, extras = FieldTypeUtils.strip_annotated(hint)
    configs = [extra for extra in extras if isinstance(extra, FieldConfig)]

    dataclass_fields = getattr(type(owner), '__dataclass_fields__', {})
    if name in dataclass_fields:
        config = dataclass_fields[name].metadata.get(FIELD_CONFIG_METADATA_KEY)
        if config is not None:
            configs.append(config)

    return select_config(configs)
