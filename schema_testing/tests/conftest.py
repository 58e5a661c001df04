from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from schema_testing.configuration import reset_testing_config
from schema_testing.harness import Action, ActionCall, SchemaComponent, SchemaHost
from schema_testing.testable import ComponentTestable


class EditUser(SchemaHost):
    pass


def _required(value: Any) -> Optional[str]:
    if value in (None, ""):
        return "This field is required."
    return None


@pytest.fixture(autouse=True)
def _quiet_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SCHEMA_TESTING_ATTACH_ALLURE", "0")
    monkeypatch.delenv("SCHEMA_TESTING_DEFAULT_FORM_NAME", raising=False)
    reset_testing_config()
    yield
    reset_testing_config()


@pytest.fixture
def calls() -> List[Dict[str, Any]]:
    return []


@pytest.fixture
def host(calls: List[Dict[str, Any]]) -> EditUser:
    def record(name: str):
        def callback(call: ActionCall) -> None:
            calls.append({"action": name, "data": dict(call.data), "arguments": dict(call.arguments)})

        return callback

    def halt_unless_confirmed(call: ActionCall) -> None:
        if not call.data.get("confirmed"):
            call.halt()
        calls.append({"action": "publish", "data": dict(call.data)})

    def redirect_home(call: ActionCall) -> None:
        call.redirect("/users")

    edit_phone = Action(
        name="editNested",
        label="Edit phone",
        schema=[SchemaComponent("number")],
        rules={"number": _required},
        callback=record("editNested"),
    )
    edit_contact = Action(
        name="edit",
        icon="heroicon-o-pencil",
        color="primary",
        schema=[SchemaComponent("phone", actions=[edit_phone]), SchemaComponent("label")],
        fill=lambda arguments: {"label": arguments.get("label", "Home")},
        callback=record("edit"),
    )
    email = SchemaComponent(
        "email",
        actions=[
            Action(name="verify", requires_confirmation=True, callback=record("verify")),
            Action(name="lookup", url="https://example.com/lookup", open_url_in_new_tab=True),
            Action(name="secret", hidden=True),
            Action(name="archive", disabled=lambda arguments: arguments.get("locked", False)),
            Action(name="copy", color={500: "#336699"}, callback=record("copy")),
            Action(name="publish", requires_confirmation=True, callback=halt_unless_confirmed),
            Action(name="leave", requires_confirmation=True, callback=redirect_home),
        ],
    )
    contacts = SchemaComponent("contacts", actions=[edit_contact])
    section = SchemaComponent("details", children=[SchemaComponent("nickname", actions=[Action(name="suggest")])])
    return EditUser(
        {
            "form": [email, contacts, section],
            "profileForm": [SchemaComponent("avatar", actions=[Action(name="crop", schema=[SchemaComponent("x")])])],
        },
        host_id="abc123",
    )


@pytest.fixture
def testable(host: EditUser) -> ComponentTestable:
    return ComponentTestable(host)
