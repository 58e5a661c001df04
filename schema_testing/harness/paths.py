"""
Structured state paths for addressing host properties.

A ``StatePath`` is an ordered tuple of string keys. Paths are only rendered as
dotted strings for display; the store walks the segments directly, so a key
that itself contains a dot is never re-split.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Tuple, Union

PathLike = Union["StatePath", str]


@dataclass(frozen=True, slots=True)
class StatePath:
    """Ordered sequence of keys into the host state."""

    segments: Tuple[str, ...] = ()

    @classmethod
    def of(cls, *segments: Any) -> StatePath:
        return cls(tuple(str(segment) for segment in segments))

    @classmethod
    def parse(cls, dotted: str) -> StatePath:
        """Build a path from a dotted string, e.g. ``mountedActions.0.data``."""
        if not dotted:
            return cls()
        return cls(tuple(dotted.split(".")))

    def child(self, *segments: Any) -> StatePath:
        return StatePath(self.segments + tuple(str(segment) for segment in segments))

    @property
    def parent(self) -> StatePath:
        return StatePath(self.segments[:-1])

    @property
    def last(self) -> str:
        return self.segments[-1]

    def startswith(self, prefix: StatePath) -> bool:
        return self.segments[: len(prefix.segments)] == prefix.segments

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return ".".join(self.segments)


def as_path(value: PathLike) -> StatePath:
    if isinstance(value, StatePath):
        return value
    return StatePath.parse(str(value))


def flatten_data(data: Mapping[str, Any], prefix: StatePath) -> Dict[StatePath, Any]:
    """
    Flatten nested mappings into leaf paths rooted at ``prefix``.

    Empty mappings are kept as leaves so that ``{"tags": {}}`` still sets
    ``tags`` to an empty value.
    """
    flattened: Dict[StatePath, Any] = {}
    for key, value in data.items():
        path = prefix.child(key)
        if isinstance(value, Mapping) and value:
            flattened.update(flatten_data(value, path))
        else:
            flattened[path] = value
    return flattened
