"""
Metavariable capture environment.

An Environment is persistent: `bind` returns a new environment sharing the
previous bindings, so a failed matching branch just drops its copy.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple, Union

from ..core.exceptions import UnboundCaptureError

if TYPE_CHECKING:
    from ..core.tree.node import Node

Capture = Union["Node", Tuple["Node", ...]]


class Environment:
    """Mapping from metavariable name to a captured node or node run."""

    __slots__ = ("_name", "_value", "_parent", "_size")

    def __init__(self):
        self._name: Optional[str] = None
        self._value: Optional[Capture] = None
        self._parent: Optional[Environment] = None
        self._size = 0

    def bind(self, name: str, value: Capture) -> Environment:
        """Return a new environment with `name` bound to `value`."""
        env = Environment.__new__(Environment)
        env._name = name
        env._value = value
        env._parent = self
        env._size = self._size + 1
        return env

    def lookup(self, name: str) -> Optional[Capture]:
        env: Optional[Environment] = self
        while env is not None:
            if env._name == name:
                return env._value
            env = env._parent
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __len__(self) -> int:
        return self._size

    def names(self) -> List[str]:
        """Bound names in binding order."""
        out: List[str] = []
        env: Optional[Environment] = self
        while env is not None:
            if env._name is not None:
                out.append(env._name)
            env = env._parent
        out.reverse()
        return out

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def get_match(self, name: str) -> Optional[Node]:
        """Node captured by a single metavariable, or None."""
        value = self.lookup(name)
        if isinstance(value, tuple):
            return None
        return value

    def get_multiple_matches(self, name: str) -> List[Node]:
        """Nodes captured by a variadic metavariable (empty if unbound)."""
        value = self.lookup(name)
        if value is None:
            return []
        if isinstance(value, tuple):
            return list(value)
        return [value]

    def get_text(self, name: str) -> str:
        """
        Source text of a capture.

        A node run yields the source from its first node's start to its last
        node's end, so separators between the nodes are kept.

        Raises:
            UnboundCaptureError: If `name` is not bound
        """
        value = self.lookup(name)
        if value is None:
            raise UnboundCaptureError(f"Metavariable ${name} is not bound", name=name)
        if not isinstance(value, tuple):
            return value.text()
        if not value:
            return ""
        first, last = value[0], value[-1]
        return first.root.source.slice(first.range()[0], last.range()[1])

    def to_dict(self) -> Dict[str, Capture]:
        return {name: self.lookup(name) for name in self.names()}

    def __repr__(self) -> str:
        return f"Environment({', '.join(self.names())})"
