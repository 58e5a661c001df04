from __future__ import annotations

import pytest

from schema_testing.harness import (
    ActionNotFoundError,
    ComponentNotFoundError,
    FormNotFoundError,
    StatePath,
    UnknownHostMethodError,
)


def test_mount_records_action_and_opens_modal(host) -> None:
    host.mount_action("verify", {}, {"schemaComponent": StatePath.of("form", "email")})
    assert host.mounted_actions == [
        {
            "name": "verify",
            "arguments": {},
            "context": {"schemaComponent": StatePath.of("form", "email")},
            "data": {},
        }
    ]
    assert host.dispatched == [("queue-open-modal", {"id": "abc123-action-0"})]


def test_mount_fills_default_data_from_arguments(host) -> None:
    host.mount_action("edit", {"label": "Work"}, {"schemaComponent": "form.contacts"})
    assert host.store.get("mountedActions.0.data") == {"label": "Work"}


def test_nested_components_resolve_through_live_actions(host) -> None:
    assert host.get_schema_component("mountedActions.0.data.phone") is None
    host.mount_action("edit", {}, {"schemaComponent": "form.contacts"})
    assert host.get_schema_component("mountedActions.0.data.phone").get_key() == "phone"


def test_actions_without_modal_run_immediately(host, calls) -> None:
    host.mount_action("copy", {}, {"schemaComponent": "form.email"})
    assert host.mounted_actions == []
    assert calls == [{"action": "copy", "data": {}, "arguments": {}}]


def test_hidden_and_disabled_actions_are_not_mounted(host) -> None:
    host.mount_action("secret", {}, {"schemaComponent": "form.email"})
    host.mount_action("archive", {"locked": True}, {"schemaComponent": "form.email"})
    assert host.mounted_actions == []
    assert host.dispatched == []


def test_mount_rejects_unknown_targets(host) -> None:
    with pytest.raises(ComponentNotFoundError):
        host.mount_action("verify", {}, {"schemaComponent": "form.missing"})
    with pytest.raises(ComponentNotFoundError):
        host.mount_action("verify", {}, {})
    with pytest.raises(ActionNotFoundError):
        host.mount_action("missing", {}, {"schemaComponent": "form.email"})


def test_validation_errors_keep_action_mounted(host, calls) -> None:
    host.mount_action("edit", {}, {"schemaComponent": "form.contacts"})
    host.mount_action("editNested", {}, {"schemaComponent": "mountedActions.0.data.phone"})
    host.call_mounted_action()
    assert host.errors == {"mountedActions.1.data.number": ["This field is required."]}
    assert len(host.mounted_actions) == 2
    assert calls == []


def test_closing_last_action_dispatches_close_modal(host) -> None:
    host.mount_action("verify", {}, {"schemaComponent": "form.email"})
    host.call_mounted_action()
    assert host.mounted_actions == []
    assert host.dispatched[-1] == ("close-modal", {"id": "abc123-action-0"})


def test_testable_call_rejects_unknown_methods(testable) -> None:
    with pytest.raises(UnknownHostMethodError):
        testable.call("deleteEverything")


def test_testable_property_assertions(testable) -> None:
    testable.set("form.email", "dan@example.com").assert_set("form.email", "dan@example.com")
    testable.assert_not_set("form.email", "other@example.com")
    with pytest.raises(AssertionError, match=r"\[form.email\] is set to"):
        testable.assert_set("form.email", "other@example.com")


def test_testable_event_assertions(testable) -> None:
    testable.assert_not_dispatched("queue-open-modal")
    testable.call("mountAction", "verify", {}, {"schemaComponent": "form.email"})
    testable.assert_dispatched("queue-open-modal", id="abc123-action-0")
    with pytest.raises(AssertionError):
        testable.assert_dispatched("queue-open-modal", id="abc123-action-9")
    with pytest.raises(AssertionError):
        testable.assert_not_dispatched("queue-open-modal")


def test_testable_error_assertions(testable, host) -> None:
    testable.assert_has_no_errors()
    with pytest.raises(AssertionError):
        testable.assert_has_errors()
    host.errors = {"mountedActions.0.data.number": ["This field is required."]}
    testable.assert_has_errors(["mountedActions.0.data.number"])
    testable.assert_has_errors({"mountedActions.0.data.number": "This field is required."})
    testable.assert_has_no_errors(["mountedActions.0.data.label"])
    with pytest.raises(AssertionError):
        testable.assert_has_errors({"mountedActions.0.data.number": ["Too short."]})


def test_assert_form_exists(testable) -> None:
    testable.assert_form_exists("form").assert_form_exists("profileForm")
    with pytest.raises(FormNotFoundError, match="missing"):
        testable.assert_form_exists("missing")
