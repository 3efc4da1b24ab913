"""
Structural matcher.

Compares a compiled Pattern with candidate nodes. A mismatch anywhere only
fails the current branch; nothing is reported except the overall result.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.exceptions import LanguageMismatchError
from ..core.tree import Node, NodeMatch
from .ast import MetaVariable, PatternNode
from .compiler import Pattern
from .environment import Capture, Environment

logger = logging.getLogger(__name__)


def _as_run(value: Capture) -> Tuple[Node, ...]:
    return value if isinstance(value, tuple) else (value,)


def _same_capture(left: Capture, right: Capture) -> bool:
    """Captures agree when every node has the same kind and text."""
    a, b = _as_run(left), _as_run(right)
    if len(a) != len(b):
        return False
    return all(x.kind() == y.kind() and x.text() == y.text() for x, y in zip(a, b))


def _bind(meta: MetaVariable, value: Capture, env: Environment) -> Optional[Environment]:
    if meta.is_anonymous:
        return env
    previous = env.lookup(meta.name)
    if previous is None:
        return env.bind(meta.name, value)
    return env if _same_capture(previous, value) else None


def _same_kind(pnode: PatternNode, candidate: Node) -> bool:
    # aliased grammar symbols may share a name under different ids
    return pnode.kind_id == candidate.kind_id() or pnode.kind == candidate.kind()


def _match_node(pnode: PatternNode, candidate: Node, env: Environment) -> Optional[Environment]:
    meta = pnode.meta
    if meta is not None:
        return _bind(meta, (candidate,) if meta.is_multi else candidate, env)
    if not _same_kind(pnode, candidate):
        return None
    if pnode.is_leaf:
        return env if candidate.text() == pnode.text else None
    return _match_children(pnode.children, 0, list(candidate.children()), 0, env)


def _match_children(
    patterns: Sequence[PatternNode],
    pi: int,
    candidates: List[Node],
    ci: int,
    env: Environment,
) -> Optional[Environment]:
    if pi == len(patterns):
        return env if ci == len(candidates) else None

    head = patterns[pi]
    if head.meta is not None and head.meta.is_multi:
        # shortest run first, backtrack on failure of the remainder
        for stop in range(ci, len(candidates) + 1):
            bound = _bind(head.meta, tuple(candidates[ci:stop]), env)
            if bound is None:
                continue
            result = _match_children(patterns, pi + 1, candidates, stop, bound)
            if result is not None:
                return result
        return None

    if ci == len(candidates):
        return None
    bound = _match_node(head, candidates[ci], env)
    if bound is None:
        return None
    return _match_children(patterns, pi + 1, candidates, ci + 1, bound)


def _check_language(pattern: Pattern, candidate: Node) -> None:
    if pattern.language != candidate.root.language:
        raise LanguageMismatchError(
            f"Pattern for {pattern.language!r} used on a {candidate.root.language!r} tree",
            pattern_language=pattern.language,
            tree_language=candidate.root.language,
        )


def match_one(pattern: Pattern, candidate: Node) -> Optional[Environment]:
    """
    Match `pattern` against `candidate` itself (not its descendants).

    A candidate of one of the pattern's stripped wrapper kinds also matches
    when its own chain of single children covering the same text reaches a
    node matching the pattern, so a pattern compiled from a node's text
    always matches that node.

    Returns:
        Environment with the captures, or None if the node does not match
    """
    _check_language(pattern, candidate)
    env = _match_node(pattern.node, candidate, Environment())
    node = candidate
    while env is None and node.kind() in pattern.wrappers:
        children = node.children()
        # queries are compiled from stripped text
        if len(children) != 1 or children[0].text() != node.text().strip():
            return None
        node = children[0]
        env = _match_node(pattern.node, node, Environment())
    return env


def iter_matches(pattern: Pattern, node: Node) -> Iterator[NodeMatch]:
    """Try every node of the subtree in pre-order, yielding each match."""
    _check_language(pattern, node)
    for candidate in node.dfs():
        env = _match_node(pattern.node, candidate, Environment())
        if env is not None:
            yield NodeMatch(candidate, env)


def find_node(pattern: Pattern, node: Node) -> Optional[NodeMatch]:
    """First match in pre-order: earliest in the document, shallower first."""
    return next(iter_matches(pattern, node), None)


def find_all_nodes(pattern: Pattern, node: Node) -> List[NodeMatch]:
    """Every match in pre-order; matches may overlap or nest."""
    found = list(iter_matches(pattern, node))
    logger.debug(f"Pattern {pattern.query!r} matched {len(found)} nodes")
    return found
