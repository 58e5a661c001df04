"""
Fluent test helpers for actions attached to form components.

Every helper resolves the (possibly nested) component/action request through
:mod:`schema_testing.resolver`, then drives or inspects the host through the
generic call/set/assert operations of :class:`HostTestable`. All helpers
return the testable so that calls chain::

    ComponentTestable(EditUser(forms)).call_form_component_action("email", "verify", data={"code": "1234"})
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from .configuration import get_testing_config
from .harness.components import Action, Color, SchemaComponent
from .harness.core import CLOSE_MODAL_EVENT, MOUNTED_ACTIONS, OPEN_MODAL_EVENT, ErrorKeys, HostTestable
from .harness.paths import StatePath, flatten_data
from .resolver import (
    Arguments,
    KeyOrKeys,
    NestedActionTarget,
    get_nested_form_component_action,
    level_arguments,
    parse_nested_action_name,
    parse_nested_form_component_action,
    wrap,
)

_LOGGER = logging.getLogger(__name__)


def _pretty_component(component: KeyOrKeys) -> str:
    return ".".join(wrap(component))


def _pretty_name(name: KeyOrKeys) -> str:
    return " > ".join(parse_nested_action_name(name))


class TestsFormComponentActions(HostTestable):
    """Mixin adding form component action helpers to a host testable."""

    __test__ = False

    def parse_nested_form_component_action(
        self, component: KeyOrKeys, name: KeyOrKeys, form_name: Optional[str] = None
    ) -> NestedActionTarget:
        return parse_nested_form_component_action(self, component, name, self._form_name(form_name))

    def get_nested_form_component_action(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        form_name: Optional[str] = None,
        arguments: Optional[Arguments] = None,
    ) -> Tuple[Optional[SchemaComponent], Optional[Action]]:
        return get_nested_form_component_action(self, component, name, self._form_name(form_name), arguments)

    # Driving actions

    def mount_form_component_action(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        target = self.parse_nested_form_component_action(component, name, form_name)
        is_singular = isinstance(component, str)

        for index, action_name in enumerate(target.names):
            _LOGGER.debug("Mounting %s on %s", action_name, target.components[index])
            self.call(
                "mountAction",
                action_name,
                level_arguments(arguments, index, is_singular),
                {"schemaComponent": target.components[index]},
            )

        host = self.instance()
        if host.redirect_to is not None:
            return self

        if not host.mounted_actions:
            self.assert_not_dispatched(OPEN_MODAL_EVENT)
            return self

        for index, action_name in enumerate(target.names):
            self.assert_set(MOUNTED_ACTIONS.child(index, "name"), action_name)
            self.assert_set(MOUNTED_ACTIONS.child(index, "context", "schemaComponent"), target.components[index])

        self.assert_dispatched(OPEN_MODAL_EVENT, id=f"{host.get_id()}-action-{len(host.mounted_actions) - 1}")
        return self

    def unmount_form_component_action(self) -> TestsFormComponentActions:
        self.call("unmountAction")
        return self

    def set_form_component_action_data(self, data: Mapping[str, Any]) -> TestsFormComponentActions:
        for path, value in flatten_data(data, self._mounted_data_path()).items():
            self.set(path, value)
        return self

    def assert_form_component_action_data_set(self, data: Mapping[str, Any]) -> TestsFormComponentActions:
        for path, value in flatten_data(data, self._mounted_data_path()).items():
            self.assert_set(path, value)
        return self

    def call_form_component_action(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        data: Optional[Mapping[str, Any]] = None,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        self.assert_form_component_action_visible(component, name, arguments, form_name)
        self.mount_form_component_action(component, name, arguments, form_name)

        if self.instance().get_mounted_action() is None:
            return self

        self.set_form_component_action_data(data or {})
        self.call_mounted_form_component_action()
        return self

    def call_mounted_form_component_action(self, arguments: Optional[Dict[str, Any]] = None) -> TestsFormComponentActions:
        host = self.instance()
        if host.get_mounted_action() is None:
            return self

        self.call("callMountedAction", arguments or {})

        if host.redirect_to is not None:
            return self

        if not host.mounted_actions:
            self.assert_dispatched(CLOSE_MODAL_EVENT, id=f"{host.get_id()}-action-0")
        return self

    # Registration

    def assert_form_component_action_exists(
        self, component: KeyOrKeys, name: KeyOrKeys, form_name: Optional[str] = None
    ) -> TestsFormComponentActions:
        schema_component, action = self.get_nested_form_component_action(component, name, form_name)
        host_class = self._host_class()

        if schema_component is None:
            self._fail(
                f"Failed asserting that a form component with key [{_pretty_component(component)}] "
                f"exists on the [{host_class}] component."
            )
        if action is None:
            self._fail(
                f"Failed asserting that a form component action with name [{_pretty_name(name)}] "
                f"is registered to [{schema_component.get_key()}] on the [{host_class}] component."
            )
        return self

    def assert_form_component_action_does_not_exist(
        self, component: KeyOrKeys, name: KeyOrKeys, form_name: Optional[str] = None
    ) -> TestsFormComponentActions:
        schema_component, action = self.get_nested_form_component_action(component, name, form_name)
        if action is not None:
            key = schema_component.get_key() if schema_component is not None else _pretty_component(component)
            self._fail(
                f"Failed asserting that a form component action with name [{_pretty_name(name)}] "
                f"is not registered to [{key}] on the [{self._host_class()}] component."
            )
        return self

    # Presentation

    def assert_form_component_action_visible(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(not action.is_hidden(), component, name, arguments, form_name, "is visible")
        return self

    def assert_form_component_action_hidden(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(action.is_hidden(), component, name, arguments, form_name, "is hidden")
        return self

    def assert_form_component_action_enabled(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(not action.is_disabled(), component, name, arguments, form_name, "is enabled")
        return self

    def assert_form_component_action_disabled(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(not action.is_enabled(), component, name, arguments, form_name, "is disabled")
        return self

    def assert_form_component_action_has_icon(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        icon: str,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(action.get_icon() == icon, component, name, arguments, form_name, f"has icon [{icon}]")
        return self

    def assert_form_component_action_does_not_have_icon(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        icon: str,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(action.get_icon() != icon, component, name, arguments, form_name, f"does not have icon [{icon}]")
        return self

    def assert_form_component_action_has_label(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        label: str,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(action.get_label() == label, component, name, arguments, form_name, f"has label [{label}]")
        return self

    def assert_form_component_action_does_not_have_label(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        label: str,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(action.get_label() != label, component, name, arguments, form_name, f"does not have label [{label}]")
        return self

    def assert_form_component_action_has_color(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        color: Color,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        color_name = color if isinstance(color, str) else "custom"
        self._check(action.get_color() == color, component, name, arguments, form_name, f"has [{color_name}] color")
        return self

    def assert_form_component_action_does_not_have_color(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        color: Color,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        color_name = color if isinstance(color, str) else "custom"
        self._check(
            action.get_color() != color, component, name, arguments, form_name, f"does not have [{color_name}] color"
        )
        return self

    def assert_form_component_action_has_url(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        url: str,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(action.get_url() == url, component, name, arguments, form_name, f"has URL [{url}]")
        return self

    def assert_form_component_action_does_not_have_url(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        url: str,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(action.get_url() != url, component, name, arguments, form_name, f"does not have URL [{url}]")
        return self

    def assert_form_component_action_should_open_url_in_new_tab(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(
            action.should_open_url_in_new_tab(), component, name, arguments, form_name, "should open url in new tab"
        )
        return self

    def assert_form_component_action_should_not_open_url_in_new_tab(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments] = None,
        form_name: Optional[str] = None,
    ) -> TestsFormComponentActions:
        action = self._existing_action(component, name, arguments, form_name)
        self._check(
            not action.should_open_url_in_new_tab(), component, name, arguments, form_name, "should not open url in new tab"
        )
        return self

    # Mount state

    def assert_form_component_action_mounted(
        self, component: KeyOrKeys, name: KeyOrKeys, form_name: Optional[str] = None
    ) -> TestsFormComponentActions:
        self.assert_form_component_action_exists(component, name, form_name)
        target = self.parse_nested_form_component_action(component, name, form_name)
        for index, action_name in enumerate(target.names):
            self.assert_set(MOUNTED_ACTIONS.child(index, "name"), action_name)
        return self

    def assert_form_component_action_not_mounted(
        self, component: KeyOrKeys, name: KeyOrKeys, form_name: Optional[str] = None
    ) -> TestsFormComponentActions:
        self.assert_form_component_action_exists(component, name, form_name)
        target = self.parse_nested_form_component_action(component, name, form_name)
        if all(
            self.get(MOUNTED_ACTIONS.child(index, "name")) == action_name for index, action_name in enumerate(target.names)
        ):
            self._fail(
                f"Failed asserting that a form component action with name [{_pretty_name(name)}] "
                f"is not mounted on the [{self._host_class()}] component."
            )
        return self

    assert_form_component_action_halted = assert_form_component_action_mounted

    # Validation

    def assert_has_form_component_action_errors(self, keys: ErrorKeys = ()) -> TestsFormComponentActions:
        self.assert_has_errors(self._rooted_error_keys(keys))
        return self

    def assert_has_no_form_component_action_errors(self, keys: ErrorKeys = ()) -> TestsFormComponentActions:
        self.assert_has_no_errors(self._rooted_error_keys(keys))
        return self

    # Internals

    def _form_name(self, form_name: Optional[str]) -> str:
        return form_name or get_testing_config().default_form_name

    def _host_class(self) -> str:
        return type(self.instance()).__name__

    def _mounted_data_path(self) -> StatePath:
        mounted = self.instance().mounted_actions
        if not mounted:
            self._fail(
                f"Failed asserting that an action is mounted: no action is mounted on the [{self._host_class()}] component."
            )
        return MOUNTED_ACTIONS.child(len(mounted) - 1, "data")

    def _rooted_error_keys(self, keys: ErrorKeys) -> ErrorKeys:
        prefix = self._mounted_data_path()
        if isinstance(keys, Mapping):
            return {str(prefix.child(key)): messages for key, messages in keys.items()}
        return [str(prefix.child(key)) for key in keys]

    def _existing_action(
        self,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments],
        form_name: Optional[str],
    ) -> Action:
        self.assert_form_component_action_exists(component, name, form_name)
        _, action = self.get_nested_form_component_action(component, name, form_name, arguments)
        return action

    def _check(
        self,
        condition: bool,
        component: KeyOrKeys,
        name: KeyOrKeys,
        arguments: Optional[Arguments],
        form_name: Optional[str],
        expectation: str,
    ) -> None:
        if condition:
            return
        schema_component, _ = self.get_nested_form_component_action(component, name, form_name, arguments)
        self._fail(
            f"Failed asserting that a form component action with name [{_pretty_name(name)}], "
            f"registered to [{schema_component.get_key()}], {expectation} on the [{self._host_class()}] component."
        )
