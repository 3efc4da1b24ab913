"""
Borrowed, read-only node views over a Root.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple, Union, overload

from .models import Point, Root

if TYPE_CHECKING:
    from ...pattern.compiler import Pattern
    from ...pattern.environment import Environment
    from ...replacer.template import ReplacerLike
    from ..edit import Edit


class Node:
    """
    A view of one node in a Root's tree.

    Holds the Root, an arena index and the Root generation at creation time.
    Every accessor checks the generation, so a Node never reads a closed Root.
    """

    __slots__ = ("_root", "_index", "_generation")

    def __init__(self, root: Root, index: int):
        self._root = root
        self._index = index
        self._generation = root.generation

    def _arena(self):
        self._root.check_alive(self._generation)
        return self._root.arena

    def _make(self, index: int) -> Node:
        return Node(self._root, index)

    @property
    def root(self) -> Root:
        return self._root

    @property
    def index(self) -> int:
        return self._index

    # ------------------------------------------------------------------
    # Node attributes
    # ------------------------------------------------------------------

    def kind(self) -> str:
        return self._arena().kinds[self._index]

    def kind_id(self) -> int:
        return self._arena().kind_ids[self._index]

    def is_named(self) -> bool:
        return self._arena().named[self._index]

    def is_leaf(self) -> bool:
        return not self._arena().children[self._index]

    def range(self) -> Tuple[int, int]:
        """Byte span [start, end)."""
        arena = self._arena()
        return arena.starts[self._index], arena.ends[self._index]

    def start_point(self) -> Point:
        """Zero-based (row, column) of the first byte."""
        return self._arena().start_points[self._index]

    def end_point(self) -> Point:
        return self._arena().end_points[self._index]

    def text(self) -> str:
        """
        Exact source text of this node.

        Raises:
            EncodingError: If the span is not valid text in the Root's source
        """
        start, end = self.range()
        return self._root.source.slice(start, end)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def children(self) -> ChildNodes:
        return ChildNodes(self)

    def parent(self) -> Optional[Node]:
        parent = self._arena().parents[self._index]
        if parent < 0:
            return None
        return self._make(parent)

    def ancestors(self) -> Iterator[Node]:
        """Walk strictly upward to the root."""
        parent = self._arena().parents[self._index]
        while parent >= 0:
            yield self._make(parent)
            parent = self._arena().parents[parent]

    def _siblings(self) -> List[int]:
        arena = self._arena()
        parent = arena.parents[self._index]
        if parent < 0:
            return [self._index]
        return arena.children[parent]

    def next(self) -> Optional[Node]:
        siblings = self._siblings()
        pos = self._arena().sibling_index[self._index] + 1
        if pos >= len(siblings):
            return None
        return self._make(siblings[pos])

    def prev(self) -> Optional[Node]:
        siblings = self._siblings()
        pos = self._arena().sibling_index[self._index] - 1
        if pos < 0:
            return None
        return self._make(siblings[pos])

    def next_all(self) -> Iterator[Node]:
        """All following siblings, left to right."""
        siblings = self._siblings()
        for pos in range(self._arena().sibling_index[self._index] + 1, len(siblings)):
            yield self._make(siblings[pos])

    def prev_all(self) -> Iterator[Node]:
        """All preceding siblings, nearest first."""
        siblings = self._siblings()
        for pos in range(self._arena().sibling_index[self._index] - 1, -1, -1):
            yield self._make(siblings[pos])

    def field(self, name: str) -> Optional[Node]:
        """First child stored under grammar field `name`."""
        arena = self._arena()
        for child in arena.children[self._index]:
            if arena.field_names[child] == name:
                return self._make(child)
        return None

    def dfs(self) -> Iterator[Node]:
        """Pre-order walk of this node and all its descendants."""
        end = self._arena().subtree_end[self._index]
        for index in range(self._index, end):
            self._root.check_alive(self._generation)
            yield self._make(index)

    # ------------------------------------------------------------------
    # Search and rewrite
    # ------------------------------------------------------------------

    def _pattern(self, pattern: Union[str, Pattern]) -> Pattern:
        from ...pattern.compiler import Pattern

        if isinstance(pattern, Pattern):
            return pattern
        return Pattern(pattern, self._root.language)

    def matches(self, pattern: Union[str, Pattern]) -> bool:
        """True if this node itself matches `pattern`."""
        from ...pattern.matcher import match_one

        return match_one(self._pattern(pattern), self) is not None

    def find(self, pattern: Union[str, Pattern]) -> Optional[NodeMatch]:
        """First match in pre-order within this subtree, or None."""
        from ...pattern.matcher import find_node

        return find_node(self._pattern(pattern), self)

    def find_all(self, pattern: Union[str, Pattern]) -> List[NodeMatch]:
        """Every match within this subtree in pre-order (matches may nest)."""
        from ...pattern.matcher import find_all_nodes

        return find_all_nodes(self._pattern(pattern), self)

    def replace(self, pattern: Union[str, Pattern], replacer: ReplacerLike) -> Optional[Edit]:
        """Edit replacing the first match of `pattern`, or None if absent."""
        from ...replacer.rewrite import replace_first

        return replace_first(self, pattern, replacer)

    def replace_all(self, pattern: Union[str, Pattern], replacer: ReplacerLike) -> List[Edit]:
        """Edits replacing every outermost match of `pattern`."""
        from ...replacer.rewrite import replace_all

        return replace_all(self, pattern, replacer)

    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._root is other._root and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._root), self._index))

    def __repr__(self) -> str:
        if self._root.closed:
            return f"<{type(self).__name__} stale #{self._index}>"
        start, end = self.range()
        return f"<{type(self).__name__} {self.kind()} [{start}, {end})>"


class NodeMatch(Node):
    """A matched Node together with the Environment its match produced."""

    __slots__ = ("_env",)

    def __init__(self, node: Node, env: Environment):
        super().__init__(node.root, node.index)
        self._generation = node._generation
        self._env = env

    @property
    def env(self) -> Environment:
        return self._env

    def get_match(self, name: str) -> Optional[Node]:
        return self._env.get_match(name)

    def get_multiple_matches(self, name: str) -> List[Node]:
        return self._env.get_multiple_matches(name)


class ChildNodes(Sequence):
    """
    Immediate children of a node.

    Length is known up front; every iteration starts again from the first child.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node):
        self._node = node

    def _indices(self) -> List[int]:
        return self._node._arena().children[self._node.index]

    def __len__(self) -> int:
        return len(self._indices())

    @overload
    def __getitem__(self, item: int) -> Node: ...

    @overload
    def __getitem__(self, item: slice) -> List[Node]: ...

    def __getitem__(self, item):
        indices = self._indices()
        if isinstance(item, slice):
            return [self._node._make(i) for i in indices[item]]
        return self._node._make(indices[item])

    def __iter__(self) -> Iterator[Node]:
        for index in self._indices():
            yield self._node._make(index)
