"""Public exports for the schema testing harness."""

from .components import Action, ActionCall, SchemaComponent, find_component
from .core import CLOSE_MODAL_EVENT, MOUNTED_ACTIONS, OPEN_MODAL_EVENT, HostTestable, SchemaHost
from .exceptions import (
    ActionHalted,
    ActionNotFoundError,
    ComponentNotFoundError,
    FormNotFoundError,
    NestingMismatchError,
    SchemaTestingError,
    UnknownHostMethodError,
)
from .paths import StatePath, as_path, flatten_data
from .store import PropertyStore

__all__ = [
    "Action",
    "ActionCall",
    "SchemaComponent",
    "find_component",
    "CLOSE_MODAL_EVENT",
    "MOUNTED_ACTIONS",
    "OPEN_MODAL_EVENT",
    "HostTestable",
    "SchemaHost",
    "ActionHalted",
    "ActionNotFoundError",
    "ComponentNotFoundError",
    "FormNotFoundError",
    "NestingMismatchError",
    "SchemaTestingError",
    "UnknownHostMethodError",
    "StatePath",
    "as_path",
    "flatten_data",
    "PropertyStore",
]
