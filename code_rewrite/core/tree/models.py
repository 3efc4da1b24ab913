"""
Parsed tree storage owned by a Root.

The tree-sitter tree is flattened once into a pre-order arena. Nodes are
plain indices into that arena, so a node's subtree is the contiguous index
range [index, subtree_end[index]).

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from tree_sitter import Tree

from ..config import get_config
from ..edit import Edit, apply_edits
from ..exceptions import StaleNodeError
from ..languages import get_language_spec, parse_tree
from ..source_text import SourceText

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


@dataclass
class TreeArena:
    """Column-oriented storage for every node of one parsed tree."""

    kinds: List[str] = field(default_factory=list)
    kind_ids: List[int] = field(default_factory=list)
    starts: List[int] = field(default_factory=list)
    ends: List[int] = field(default_factory=list)
    start_points: List[Point] = field(default_factory=list)
    end_points: List[Point] = field(default_factory=list)
    named: List[bool] = field(default_factory=list)
    field_names: List[Optional[str]] = field(default_factory=list)
    parents: List[int] = field(default_factory=list)
    sibling_index: List[int] = field(default_factory=list)
    children: List[List[int]] = field(default_factory=list)
    subtree_end: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.kinds)

    def add(self, ts_node, parent: int, field_name: Optional[str]) -> int:
        """Append one tree-sitter node and link it under `parent` (-1 for root)."""
        index = len(self.kinds)
        self.kinds.append(ts_node.type)
        self.kind_ids.append(ts_node.kind_id)
        self.starts.append(ts_node.start_byte)
        self.ends.append(ts_node.end_byte)
        self.start_points.append(tuple(ts_node.start_point))
        self.end_points.append(tuple(ts_node.end_point))
        self.named.append(ts_node.is_named)
        self.field_names.append(field_name)
        self.parents.append(parent)
        self.children.append([])
        self.subtree_end.append(index + 1)
        if parent >= 0:
            siblings = self.children[parent]
            self.sibling_index.append(len(siblings))
            siblings.append(index)
        else:
            self.sibling_index.append(0)
        return index

    @classmethod
    def from_tree(cls, tree: Tree) -> TreeArena:
        """Flatten a tree-sitter tree in pre-order using a tree cursor."""
        arena = cls()
        cursor = tree.walk()
        stack: List[int] = []
        while True:
            parent = stack[-1] if stack else -1
            index = arena.add(cursor.node, parent, cursor.field_name)
            if cursor.goto_first_child():
                stack.append(index)
                continue
            while not cursor.goto_next_sibling():
                if not stack:
                    return arena
                cursor.goto_parent()
                closed = stack.pop()
                arena.subtree_end[closed] = len(arena.kinds)


class Root:
    """
    Owner of one program text and its parsed tree.

    Nodes handed out by a Root are only valid while the Root is open;
    `close()` bumps the generation tag and every older Node raises
    StaleNodeError on use.
    """

    def __init__(self, source: Union[str, SourceText], tree: Tree, language: str):
        """
        Build a Root from text and a tree parsed over exactly that text.

        Args:
            source: Program text
            tree: tree-sitter tree produced from `source` encoded as UTF-8
            language: Registered language identifier used to parse `tree`
        """
        get_language_spec(language)
        self._source = source if isinstance(source, SourceText) else SourceText(source)
        self._language = language
        self._has_error = tree.root_node.has_error
        self._arena = TreeArena.from_tree(tree)
        self._generation = 0
        self._closed = False

    @classmethod
    def parse(cls, source: Union[str, SourceText], language: Optional[str] = None) -> Root:
        """Parse `source` with a registered grammar (default from config)."""
        text = source if isinstance(source, SourceText) else SourceText(source)
        lang = language or get_config().default_language
        tree = parse_tree(text.data, lang)
        return cls(text, tree, lang)

    @property
    def source(self) -> SourceText:
        return self._source

    @property
    def language(self) -> str:
        return self._language

    @property
    def has_error(self) -> bool:
        """True if the parse contains syntax errors or missing nodes."""
        return self._has_error

    @property
    def arena(self) -> TreeArena:
        return self._arena

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    def root(self):
        """Return the root Node."""
        from .node import Node

        self.check_alive(self._generation)
        return Node(self, 0)

    def check_alive(self, generation: int) -> None:
        """Raise StaleNodeError if `generation` no longer matches this Root."""
        if self._closed or generation != self._generation:
            raise StaleNodeError(
                "Node used after its Root was closed",
                details={"node_generation": generation, "root_generation": self._generation},
            )

    def close(self) -> None:
        """Invalidate every Node handed out so far."""
        if not self._closed:
            self._generation += 1
            self._closed = True

    def __enter__(self) -> Root:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def apply_edits(self, edits: Iterable[Edit], strategy: Optional[str] = None) -> SourceText:
        """Apply a batch of edits to this Root's text; the Root is unchanged."""
        return apply_edits(self._source, edits, strategy=strategy)

    def commit(self, edits: Iterable[Edit], strategy: Optional[str] = None) -> Root:
        """Apply edits and parse the result into a new Root (full re-parse)."""
        new_source = self.apply_edits(edits, strategy=strategy)
        logger.debug(
            f"Re-parsing {self._language} source after edits "
            f"({len(self._source)} -> {len(new_source)} bytes)"
        )
        return Root.parse(new_source, self._language)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Root(language={self._language!r}, nodes={len(self._arena)}, {state})"
