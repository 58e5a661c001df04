"""
Schema component and action model used by the reference host.

Actions carry the presentation state that the fluent assertions inspect
(visibility, icon, label, color, URL) plus an optional modal schema whose
components may register further actions, which is how nesting arises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .exceptions import ActionHalted

ArgumentCheck = Union[bool, Callable[[Dict[str, Any]], bool]]
Color = Union[str, Dict[int, str]]
Rule = Callable[[Any], Optional[str]]


@dataclass
class ActionCall:
    """What an action callback receives when it runs."""

    data: Dict[str, Any]
    arguments: Dict[str, Any]
    redirect_to: Optional[str] = None

    def halt(self) -> None:
        raise ActionHalted()

    def redirect(self, url: str) -> None:
        self.redirect_to = url


@dataclass
class Action:
    name: str
    label: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[Color] = None
    url: Optional[str] = None
    open_url_in_new_tab: bool = False
    hidden: ArgumentCheck = False
    disabled: ArgumentCheck = False
    requires_confirmation: bool = False
    schema: List["SchemaComponent"] = field(default_factory=list)
    rules: Dict[str, Rule] = field(default_factory=dict)
    fill: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None
    callback: Optional[Callable[[ActionCall], Any]] = None
    _arguments: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def arguments(self, arguments: Optional[Dict[str, Any]]) -> Action:
        self._arguments = dict(arguments or {})
        return self

    def get_arguments(self) -> Dict[str, Any]:
        return dict(self._arguments)

    def is_hidden(self) -> bool:
        return _evaluate(self.hidden, self._arguments)

    def is_visible(self) -> bool:
        return not self.is_hidden()

    def is_disabled(self) -> bool:
        return _evaluate(self.disabled, self._arguments)

    def is_enabled(self) -> bool:
        return not self.is_disabled()

    def get_label(self) -> str:
        if self.label is not None:
            return self.label
        words = re.sub(r"(?<!^)(?=[A-Z])", " ", self.name).replace("_", " ").replace("-", " ")
        return words[:1].upper() + words[1:].lower()

    def get_icon(self) -> Optional[str]:
        return self.icon

    def get_color(self) -> Optional[Color]:
        return self.color

    def get_url(self) -> Optional[str]:
        return self.url

    def should_open_url_in_new_tab(self) -> bool:
        return self.open_url_in_new_tab

    def has_modal(self) -> bool:
        return bool(self.schema) or self.requires_confirmation

    def get_schema_component(self, key: str) -> Optional[SchemaComponent]:
        return find_component(self.schema, key)

    def default_data(self) -> Dict[str, Any]:
        if self.fill is None:
            return {}
        return dict(self.fill(self.get_arguments()) or {})

    def validate(self, data: Dict[str, Any]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for key, rule in self.rules.items():
            message = rule(data.get(key))
            if message:
                errors[key] = message
        return errors


@dataclass
class SchemaComponent:
    """A keyed form component that can host actions and child components."""

    key: str
    actions: List[Action] = field(default_factory=list)
    children: List["SchemaComponent"] = field(default_factory=list)

    def get_key(self) -> str:
        return self.key

    def get_action(self, name: str) -> Optional[Action]:
        for action in self.actions:
            if action.name == name:
                return action
        return None


def find_component(components: Iterable[SchemaComponent], key: str) -> Optional[SchemaComponent]:
    """Depth-first search for a component key among components and their children."""
    for component in components:
        if component.key == key:
            return component
        found = find_component(component.children, key)
        if found is not None:
            return found
    return None


def _evaluate(check: ArgumentCheck, arguments: Dict[str, Any]) -> bool:
    if callable(check):
        return bool(check(dict(arguments)))
    return bool(check)
