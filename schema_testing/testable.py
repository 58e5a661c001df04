"""Concrete testable combining the host operations with the action helpers."""

from __future__ import annotations

from .form_actions import TestsFormComponentActions


class ComponentTestable(TestsFormComponentActions):
    """Wrap a ``SchemaHost`` for fluent action assertions."""

    def __repr__(self) -> str:
        return f"ComponentTestable({type(self.instance()).__name__}#{self.instance().get_id()})"
