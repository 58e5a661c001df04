"""In-memory property store addressed by structured state paths."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, MutableMapping, Optional

from .paths import PathLike, StatePath, as_path

_LOGGER = logging.getLogger(__name__)

_MISSING = object()


class PropertyStore:
    """Nested dict/list state with get/set by ``StatePath``."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._state: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, path: PathLike, default: Any = None) -> Any:
        value = self._lookup(as_path(path))
        return default if value is _MISSING else value

    def has(self, path: PathLike) -> bool:
        return self._lookup(as_path(path)) is not _MISSING

    def set(self, path: PathLike, value: Any) -> None:
        target = as_path(path)
        if not len(target):
            raise KeyError("Cannot set the store root.")
        container: Any = self._state
        for segment in target.parent:
            child = _child(container, segment)
            if child is _MISSING or not isinstance(child, (dict, list)):
                child = {}
                _assign(container, segment, child)
            container = child
        _assign(container, target.last, value)
        _LOGGER.debug("Set %s = %r", target, value)

    def forget(self, path: PathLike) -> None:
        target = as_path(path)
        container = self._lookup(target.parent) if len(target) > 1 else self._state
        if isinstance(container, dict):
            container.pop(target.last, None)
        elif isinstance(container, list):
            index = _index(target.last)
            if index is not None and index < len(container):
                del container[index]

    def snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy(self._state)

    def _lookup(self, path: StatePath) -> Any:
        current: Any = self._state
        for segment in path:
            current = _child(current, segment)
            if current is _MISSING:
                return _MISSING
        return current


def _index(segment: str) -> Optional[int]:
    try:
        index = int(segment)
    except ValueError:
        return None
    return index if index >= 0 else None


def _child(container: Any, segment: str) -> Any:
    if isinstance(container, MutableMapping):
        return container.get(segment, _MISSING)
    if isinstance(container, list):
        index = _index(segment)
        if index is None or not 0 <= index < len(container):
            return _MISSING
        return container[index]
    return _MISSING


def _assign(container: Any, segment: str, value: Any) -> None:
    if isinstance(container, list):
        index = _index(segment)
        items: List[Any] = container
        if index is None or index > len(items):
            raise KeyError(f"Invalid list index [{segment}].")
        if index == len(items):
            items.append(value)
        else:
            items[index] = value
        return
    container[segment] = value
