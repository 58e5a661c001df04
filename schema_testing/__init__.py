"""Fluent test helpers for schema form component actions."""

from .configuration import TestingConfig, get_testing_config, load_testing_config, reset_testing_config
from .form_actions import TestsFormComponentActions
from .harness import (
    Action,
    ActionNotFoundError,
    ComponentNotFoundError,
    FormNotFoundError,
    NestingMismatchError,
    SchemaComponent,
    SchemaHost,
    StatePath,
)
from .resolver import NestedActionTarget, get_nested_form_component_action, parse_nested_action_name, parse_nested_form_component_action
from .testable import ComponentTestable

__all__ = [
    "Action",
    "ActionNotFoundError",
    "ComponentNotFoundError",
    "ComponentTestable",
    "FormNotFoundError",
    "NestedActionTarget",
    "NestingMismatchError",
    "SchemaComponent",
    "SchemaHost",
    "StatePath",
    "TestingConfig",
    "TestsFormComponentActions",
    "get_nested_form_component_action",
    "get_testing_config",
    "load_testing_config",
    "parse_nested_action_name",
    "parse_nested_form_component_action",
    "reset_testing_config",
]
