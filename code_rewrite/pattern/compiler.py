"""
Pattern compiler.

A query is a code snippet in the target language. It is parsed with the same
grammar as the searched tree, and every node whose whole text is a
metavariable token becomes a metavariable:

- `$NAME`     matches any single node and captures it as NAME
- `$$$NAME`   matches a run of zero or more sibling nodes
- `$_`, `$_X`, `$$$` match without capturing

NAME is upper-case letters, digits and underscores. For grammars where `$` is
not an identifier character the sigil is swapped for the language's expando
character before parsing.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import List, Optional, Tuple

from ..core.config import get_config
from ..core.constants import METAVAR_NAME_PATTERN, METAVAR_SIGIL
from ..core.exceptions import PatternSyntaxError
from ..core.languages import LanguageSpec, get_language_spec
from ..core.tree import Node, Root
from .ast import MetaVariable, MetaVarKind, PatternNode

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _metavar_regexes(expando_char: str) -> Tuple[re.Pattern, re.Pattern]:
    sigil = re.escape(expando_char)
    single = re.compile(rf"^{sigil}({METAVAR_NAME_PATTERN})$")
    multi = re.compile(rf"^{sigil}{{3}}({METAVAR_NAME_PATTERN})?$")
    return single, multi


def extract_metavariable(text: str, spec: LanguageSpec) -> Optional[MetaVariable]:
    """Classify a node text as a metavariable token, or None for literals."""
    single, multi = _metavar_regexes(spec.expando_char)
    found = multi.match(text)
    if found:
        return MetaVariable(MetaVarKind.MULTI, found.group(1))
    found = single.match(text)
    if found:
        return MetaVariable(MetaVarKind.SINGLE, found.group(1))
    return None


class _QueryText:
    """
    Literal text of the query for spans of its pre-processed form.

    Expando substitution changes byte lengths, so spans of the parsed query
    are shifted back before slicing the text as written.
    """

    def __init__(self, query: str, spec: LanguageSpec):
        self._data = query.encode("utf-8")
        width = len(spec.expando_char.encode("utf-8"))
        growth = width - len(METAVAR_SIGIL.encode("utf-8"))
        # (end of a substituted run in the parsed text, total growth up to it)
        self._shifts: List[Tuple[int, int]] = []
        extra = 0
        for found in spec.sigil_runs(query):
            start = len(query[: found.start()].encode("utf-8")) + extra
            run = found.end() - found.start()
            extra += run * growth
            self._shifts.append((start + run * width, extra))

    def _original(self, offset: int) -> int:
        shift = 0
        for end, extra in self._shifts:
            if end > offset:
                break
            shift = extra
        return offset - shift

    def slice(self, start: int, end: int) -> str:
        return self._data[self._original(start) : self._original(end)].decode("utf-8")


def _effective_node(root: Node) -> Tuple[Node, Tuple[str, ...]]:
    """
    Descend through single-child wrappers that cover the same text.

    Returns:
        The innermost node and the kinds of the wrappers above it, outermost first
    """
    node = root
    wrappers: List[str] = []
    while True:
        children = node.children()
        if len(children) != 1:
            return node, tuple(wrappers)
        child = children[0]
        if child.text() != node.text():
            return node, tuple(wrappers)
        wrappers.append(node.kind())
        node = child


def _select_node(root: Node, selector: str) -> Optional[Node]:
    for node in root.dfs():
        if node.kind() == selector:
            return node
    return None


def _convert(node: Node, spec: LanguageSpec, query: _QueryText) -> PatternNode:
    meta = extract_metavariable(node.text(), spec)
    text = query.slice(*node.range())
    if meta is not None:
        return PatternNode(kind=node.kind(), kind_id=node.kind_id(), text=text, meta=meta)
    return PatternNode(
        kind=node.kind(),
        kind_id=node.kind_id(),
        text=text,
        children=tuple(_convert(child, spec, query) for child in node.children()),
    )


class Pattern:
    """
    Immutable compiled query, reusable across many match attempts.

    Args:
        query: Pattern source, e.g. "let $X = $Y"
        language: Registered language identifier (default from config)
        selector: Optional node kind. The query is then parsed as surrounding
            context and the first node of that kind becomes the pattern.

    Raises:
        PatternSyntaxError: If the query is empty, does not parse, or the
            selector kind does not occur in it
    """

    __slots__ = ("_query", "_language", "_selector", "_node", "_wrappers")

    def __init__(self, query: str, language: Optional[str] = None, selector: Optional[str] = None):
        lang = language or get_config().default_language
        spec = get_language_spec(lang)
        if not query or not query.strip():
            raise PatternSyntaxError("Pattern must not be empty", source=query, language=lang)

        text = query.strip()
        wrappers: Tuple[str, ...] = ()
        with Root.parse(spec.pre_process_pattern(text), lang) as root:
            if root.has_error:
                raise PatternSyntaxError(
                    f"Pattern does not parse as {lang}: {query!r}", source=query, language=lang
                )
            if selector is None:
                target, wrappers = _effective_node(root.root())
            else:
                target = _select_node(root.root(), selector)
                if target is None:
                    raise PatternSyntaxError(
                        f"Selector {selector!r} not found in pattern context {query!r}",
                        source=query,
                        language=lang,
                    )
            node = _convert(target, spec, _QueryText(text, spec))

        self._query = query
        self._language = lang
        self._selector = selector
        self._node = node
        self._wrappers = wrappers
        logger.debug(
            f"Compiled {lang} pattern {query!r} -> {node.kind} "
            f"({len(self.metavariables())} metavariables)"
        )

    @property
    def query(self) -> str:
        return self._query

    @property
    def language(self) -> str:
        return self._language

    @property
    def selector(self) -> Optional[str]:
        return self._selector

    @property
    def node(self) -> PatternNode:
        return self._node

    @property
    def wrappers(self) -> Tuple[str, ...]:
        """Kinds of the same-text wrappers stripped above `node`, outermost first."""
        return self._wrappers

    def metavariables(self) -> Tuple[MetaVariable, ...]:
        """Distinct named metavariables in order of first appearance."""
        seen = {}
        for pnode in self._node.walk():
            meta = pnode.meta
            if meta is not None and not meta.is_anonymous and meta.name not in seen:
                seen[meta.name] = meta
        return tuple(seen.values())

    def __repr__(self) -> str:
        return f"Pattern({self._query!r}, language={self._language!r})"


def compile_pattern(query: str, language: Optional[str] = None, selector: Optional[str] = None) -> Pattern:
    """Compile a query string into a Pattern."""
    return Pattern(query, language, selector)
