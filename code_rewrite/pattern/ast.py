"""
Pattern AST models.

These data structures represent a compiled structural query.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from ..core.constants import ANONYMOUS_METAVAR_PREFIX


class MetaVarKind(str, Enum):
    """How many sibling nodes a metavariable absorbs."""

    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True)
class MetaVariable:
    """
    A named placeholder like $X or $$$ARGS.

    `name` is None for the bare `$$$` wildcard.
    """

    kind: MetaVarKind
    name: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        """Anonymous metavariables match but never capture."""
        return self.name is None or self.name.startswith(ANONYMOUS_METAVAR_PREFIX)

    @property
    def is_multi(self) -> bool:
        return self.kind == MetaVarKind.MULTI


@dataclass(frozen=True)
class PatternNode:
    """
    One node of a compiled pattern.

    Literal nodes carry the grammar kind and (for leaves) the token text.
    Metavariable nodes carry `meta` and match regardless of kind.
    """

    kind: str
    kind_id: int
    text: str
    children: tuple[PatternNode, ...] = ()
    meta: Optional[MetaVariable] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_meta(self) -> bool:
        return self.meta is not None

    def walk(self) -> Iterator[PatternNode]:
        """Pre-order walk of this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()
