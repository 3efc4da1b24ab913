"""
Turn matches into edits.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from ..core.config import get_config
from ..core.edit import Edit
from ..core.tree import Node, NodeMatch
from ..pattern.compiler import Pattern
from ..pattern.matcher import find_node, iter_matches
from .template import Replacer, ReplacerLike, as_replacer

logger = logging.getLogger(__name__)


def _prepare(node: Node, pattern: Union[str, Pattern], replacer: ReplacerLike):
    language = node.root.language
    compiled = pattern if isinstance(pattern, Pattern) else Pattern(pattern, language)
    check_language = language if get_config().validate_templates else None
    return compiled, as_replacer(replacer, check_language)


def edit_for_match(match: NodeMatch, replacer: Replacer) -> Edit:
    """Edit replacing the matched node's span with the replacer output."""
    start, end = match.range()
    return Edit(
        position=start,
        deleted_length=end - start,
        inserted_text=replacer.generate_replacement(match.env),
    )


def replace_first(
    node: Node, pattern: Union[str, Pattern], replacer: ReplacerLike
) -> Optional[Edit]:
    """
    Edit for the first match of `pattern` under `node`.

    Returns:
        Edit, or None when nothing matches
    """
    compiled, rep = _prepare(node, pattern, replacer)
    match = find_node(compiled, node)
    if match is None:
        return None
    return edit_for_match(match, rep)


def replace_all(
    node: Node, pattern: Union[str, Pattern], replacer: ReplacerLike
) -> List[Edit]:
    """
    Edits for every outermost match under `node`, in document order.

    Matches nested inside an earlier match are skipped, so the result is a
    conflict-free batch.
    """
    compiled, rep = _prepare(node, pattern, replacer)
    edits: List[Edit] = []
    covered_until = -1
    for match in iter_matches(compiled, node):
        start, end = match.range()
        if start < covered_until:
            continue
        edits.append(edit_for_match(match, rep))
        covered_until = end
    logger.debug(f"Pattern {compiled.query!r} produced {len(edits)} edits")
    return edits
