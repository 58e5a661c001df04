"""
Reference host and testable wrapper for schema component actions.

``SchemaHost`` plays the part of a live component instance: it owns the forms,
the property store holding ``mountedActions`` records, the dispatched-event log
and the validation error bag. ``HostTestable`` wraps a host with the generic
set/assert/dispatch operations that the fluent action helpers build on.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..configuration import get_testing_config
from ..reporting.allure_helpers import attach_json
from .components import Action, ActionCall, SchemaComponent, find_component
from .exceptions import (
    ActionHalted,
    ActionNotFoundError,
    ComponentNotFoundError,
    FormNotFoundError,
    UnknownHostMethodError,
)
from .paths import PathLike, StatePath, as_path
from .store import PropertyStore

_LOGGER = logging.getLogger(__name__)

MOUNTED_ACTIONS = StatePath.of("mountedActions")
OPEN_MODAL_EVENT = "queue-open-modal"
CLOSE_MODAL_EVENT = "close-modal"

ErrorKeys = Union[Iterable[str], Mapping[str, Any]]


class SchemaHost:
    """In-memory stand-in for a component instance that hosts forms."""

    def __init__(
        self,
        forms: Mapping[str, Iterable[SchemaComponent]],
        *,
        host_id: Optional[str] = None,
    ) -> None:
        self._forms: Dict[str, List[SchemaComponent]] = {name: list(components) for name, components in forms.items()}
        self._id = host_id or uuid.uuid4().hex[:20]
        self._live_actions: List[Action] = []
        self.store = PropertyStore({"mountedActions": []})
        self.dispatched: List[Tuple[str, Dict[str, Any]]] = []
        self.errors: Dict[str, List[str]] = {}
        self.redirect_to: Optional[str] = None

    def get_id(self) -> str:
        return self._id

    @property
    def mounted_actions(self) -> List[Dict[str, Any]]:
        return self.store.get(MOUNTED_ACTIONS, [])

    def has_form(self, name: str) -> bool:
        return name in self._forms

    def get_mounted_action(self) -> Optional[Action]:
        return self._live_actions[-1] if self._live_actions else None

    def get_schema_component(self, path: PathLike) -> Optional[SchemaComponent]:
        """Resolve ``{form}.{key}`` or ``mountedActions.{i}.data.{key}`` to a component."""
        target = as_path(path)
        segments = target.segments
        if len(segments) == 4 and target.startswith(MOUNTED_ACTIONS) and segments[2] == "data":
            try:
                action = self._live_actions[int(segments[1])]
            except (ValueError, IndexError):
                return None
            return action.get_schema_component(segments[3])
        if len(segments) != 2 or segments[0] not in self._forms:
            return None
        return find_component(self._forms[segments[0]], segments[1])

    def dispatch(self, event: str, **params: Any) -> None:
        _LOGGER.debug("Dispatched %s %r", event, params)
        self.dispatched.append((event, params))

    def mount_action(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        component_path = (context or {}).get("schemaComponent")
        if component_path is None:
            raise ComponentNotFoundError(f"Action [{name}] must be mounted on a schema component.")
        component = self.get_schema_component(component_path)
        if component is None:
            raise ComponentNotFoundError(f"No schema component found at [{component_path}].")
        action = component.get_action(name)
        if action is None:
            raise ActionNotFoundError(f"No action [{name}] registered to [{component.get_key()}].")
        action.arguments(arguments)
        if action.is_hidden() or action.is_disabled():
            _LOGGER.debug("Ignoring mount of unavailable action %s on %s", name, component_path)
            return

        index = len(self._live_actions)
        self._live_actions.append(action)
        self.store.set(
            MOUNTED_ACTIONS.child(index),
            {
                "name": name,
                "arguments": action.get_arguments(),
                "context": {"schemaComponent": as_path(component_path)},
                "data": action.default_data(),
            },
        )
        _LOGGER.debug("Mounted action %s at nesting index %d", name, index)

        if not action.has_modal():
            self.call_mounted_action()
            return
        self.dispatch(OPEN_MODAL_EVENT, id=f"{self._id}-action-{index}")

    def call_mounted_action(self, arguments: Optional[Dict[str, Any]] = None) -> None:
        action = self.get_mounted_action()
        if action is None:
            return
        index = len(self._live_actions) - 1
        data_path = MOUNTED_ACTIONS.child(index, "data")
        record = self.store.get(MOUNTED_ACTIONS.child(index), {})
        data = dict(record.get("data") or {})
        action.arguments({**record.get("arguments", {}), **(arguments or {})})

        failures = action.validate(data)
        self.errors = {str(data_path.child(key)): [message] for key, message in failures.items()}
        if failures:
            _LOGGER.debug("Validation failed for %s: %r", action.name, failures)
            return

        call = ActionCall(data=data, arguments=action.get_arguments())
        if action.callback is not None:
            try:
                action.callback(call)
            except ActionHalted:
                _LOGGER.debug("Action %s halted", action.name)
                return
        if call.redirect_to is not None:
            # navigating away discards every open modal without closing them
            self.redirect_to = call.redirect_to
            self._live_actions.clear()
            self.store.set(MOUNTED_ACTIONS, [])
            return
        self.unmount_action()

    def unmount_action(self) -> None:
        if not self._live_actions:
            return
        index = len(self._live_actions) - 1
        action = self._live_actions.pop()
        self.store.forget(MOUNTED_ACTIONS.child(index))
        if not self._live_actions and action.has_modal():
            self.dispatch(CLOSE_MODAL_EVENT, id=f"{self._id}-action-{index}")


class HostTestable:
    """Generic call/set/assert surface over a ``SchemaHost``."""

    _METHODS = {
        "mountAction": "mount_action",
        "callMountedAction": "call_mounted_action",
        "unmountAction": "unmount_action",
    }

    def __init__(self, host: SchemaHost) -> None:
        self._host = host

    def instance(self) -> SchemaHost:
        return self._host

    def call(self, method: str, *args: Any) -> HostTestable:
        attribute = self._METHODS.get(method)
        if attribute is None:
            raise UnknownHostMethodError(f"Method [{method}] does not exist on [{type(self._host).__name__}].")
        _LOGGER.debug("Calling %s%r", method, args)
        getattr(self._host, attribute)(*args)
        return self

    def get(self, path: PathLike) -> Any:
        return self._host.store.get(path)

    def set(self, path: PathLike, value: Any) -> HostTestable:
        self._host.store.set(path, value)
        return self

    def assert_set(self, path: PathLike, value: Any) -> HostTestable:
        actual = self._host.store.get(path)
        if actual != value:
            self._fail(f"Failed asserting that [{as_path(path)}] is set to [{value!r}], found [{actual!r}].")
        return self

    def assert_not_set(self, path: PathLike, value: Any) -> HostTestable:
        if self._host.store.get(path) == value:
            self._fail(f"Failed asserting that [{as_path(path)}] is not set to [{value!r}].")
        return self

    def assert_dispatched(self, event: str, **params: Any) -> HostTestable:
        for name, payload in self._host.dispatched:
            if name == event and all(payload.get(key) == expected for key, expected in params.items()):
                return self
        self._fail(f"Failed asserting that an event [{event}] was dispatched with {params!r}.")
        return self

    def assert_not_dispatched(self, event: str) -> HostTestable:
        if any(name == event for name, _ in self._host.dispatched):
            self._fail(f"Failed asserting that an event [{event}] was not dispatched.")
        return self

    def assert_has_errors(self, keys: ErrorKeys = ()) -> HostTestable:
        errors = self._host.errors
        if isinstance(keys, Mapping):
            expected_messages = dict(keys)
        else:
            expected_messages = {key: None for key in keys}
        if not expected_messages and not errors:
            self._fail("Failed asserting that the component has validation errors.")
        for key, expected in expected_messages.items():
            if key not in errors:
                self._fail(f"Failed asserting that [{key}] has a validation error.")
            if expected is None:
                continue
            for message in [expected] if isinstance(expected, str) else expected:
                if message not in errors[key]:
                    self._fail(f"Failed asserting that [{key}] has the validation error [{message}].")
        return self

    def assert_has_no_errors(self, keys: ErrorKeys = ()) -> HostTestable:
        errors = self._host.errors
        names = list(keys.keys()) if isinstance(keys, Mapping) else list(keys)
        if not names and errors:
            self._fail(f"Failed asserting that the component has no validation errors, found {sorted(errors)}.")
        for key in names:
            if key in errors:
                self._fail(f"Failed asserting that [{key}] has no validation errors.")
        return self

    def assert_form_exists(self, name: str = "form") -> HostTestable:
        if not self._host.has_form(name):
            raise FormNotFoundError(f"Form [{name}] does not exist on the [{type(self._host).__name__}] component.")
        return self

    def _fail(self, message: str) -> None:
        _LOGGER.info("%s", message)
        if get_testing_config().attach_allure:
            attach_json(
                "host state",
                {
                    "mountedActions": self._host.store.get(MOUNTED_ACTIONS, []),
                    "dispatched": self._host.dispatched,
                    "errors": self._host.errors,
                },
            )
        raise AssertionError(message)
