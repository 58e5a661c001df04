"""
Nested form component action resolution.

A request to act on a form component action is either a single level
(``component="email", name="verify"``) or a chain of nested levels, where
each deeper component lives inside the modal form of the action mounted one
level up::

    component=["contacts", "phone"], name=["edit", "editNested"]

resolves to the state paths ``form.contacts`` and
``mountedActions.0.data.phone``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from .harness.components import Action, SchemaComponent
from .harness.exceptions import NestingMismatchError
from .harness.paths import StatePath

if TYPE_CHECKING:
    from .harness.core import HostTestable

KeyOrKeys = Union[str, Sequence[str]]
Arguments = Union[Dict[str, Any], Sequence[Dict[str, Any]]]


class NestedActionTarget(NamedTuple):
    """Index-aligned component paths and action names, one pair per nesting level."""

    components: Tuple[StatePath, ...]
    names: Tuple[str, ...]

    @property
    def depth(self) -> int:
        return len(self.names)


def wrap(value: KeyOrKeys) -> List[str]:
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def parse_nested_action_name(name: KeyOrKeys) -> List[str]:
    """Split ``"edit.confirm"`` style names into one name per nesting level."""
    if isinstance(name, str):
        return name.split(".")
    return [str(item) for item in name]


def parse_nested_form_component_action(
    testable: HostTestable,
    component: KeyOrKeys,
    name: KeyOrKeys,
    form_name: str = "form",
) -> NestedActionTarget:
    testable.assert_form_exists(form_name)

    keys = wrap(component)
    names = parse_nested_action_name(name)
    if len(keys) != len(names):
        raise NestingMismatchError(
            f"Cannot pair {len(keys)} component key(s) {keys} with {len(names)} action name(s) {names}."
        )

    components: List[StatePath] = []
    for index, key in enumerate(keys):
        if index:
            components.append(StatePath.of("mountedActions", index - 1, "data", key))
            continue
        components.append(StatePath.of(form_name, key))

    return NestedActionTarget(tuple(components), tuple(names))


def get_nested_form_component_action(
    testable: HostTestable,
    component: KeyOrKeys,
    name: KeyOrKeys,
    form_name: str = "form",
    arguments: Optional[Arguments] = None,
) -> Tuple[Optional[SchemaComponent], Optional[Action]]:
    """Walk every nesting level and return the innermost component and action."""
    is_singular = isinstance(component, str)
    target = parse_nested_form_component_action(testable, component, name, form_name)
    host = testable.instance()

    schema_component: Optional[SchemaComponent] = None
    action: Optional[Action] = None
    for index, path in enumerate(target.components):
        schema_component = host.get_schema_component(path)
        if schema_component is None and index and action is not None:
            # the enclosing action is not mounted yet, so look inside its modal schema
            schema_component = action.get_schema_component(path.last)
        action = schema_component.get_action(target.names[index]) if schema_component is not None else None
        if action is not None:
            action.arguments(level_arguments(arguments, index, is_singular))

    return schema_component, action


def level_arguments(arguments: Optional[Arguments], index: int, is_singular: bool) -> Dict[str, Any]:
    if not arguments:
        return {}
    if is_singular:
        return dict(arguments) if isinstance(arguments, dict) else {}
    if isinstance(arguments, dict):
        level = arguments.get(index, {})
        return dict(level) if isinstance(level, dict) else {}
    if index < len(arguments):
        return dict(arguments[index])
    return {}
