"""
Language registry backed by tree-sitter grammars.

Each language is identified by a short name and knows how to load its
tree-sitter grammar, which file extensions it covers and which character
stands in for the `$` metavariable sigil when `$` is not an identifier
character in that grammar.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import importlib
import logging
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from tree_sitter import Language, Parser, Tree

from .constants import METAVAR_NAME_PATTERN, METAVAR_SIGIL, MULTI_METAVAR_PREFIX
from .exceptions import UnknownLanguageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageSpec:
    """
    Registration entry for one grammar.

    `loader` returns the raw language pointer exposed by a tree-sitter grammar
    package (e.g. `tree_sitter_javascript.language`).
    """

    name: str
    loader: Callable[[], object]
    extensions: Tuple[str, ...] = ()
    expando_char: str = METAVAR_SIGIL

    def sigil_runs(self, query: str) -> List[re.Match]:
        """Sigil runs in `query` that the expando character stands in for."""
        if self.expando_char == METAVAR_SIGIL:
            return []
        return list(_SIGIL_RUN.finditer(query))

    def pre_process_pattern(self, query: str) -> str:
        """
        Replace metavariable sigils with the expando character.

        Only a run of `$` directly before a name, or a bare `$$$`, is replaced;
        any other `$` (e.g. inside a string literal) is kept.
        """
        runs = self.sigil_runs(query)
        if not runs:
            return query
        parts: List[str] = []
        cursor = 0
        for found in runs:
            parts.append(query[cursor : found.start()])
            parts.append(self.expando_char * (found.end() - found.start()))
            cursor = found.end()
        parts.append(query[cursor:])
        return "".join(parts)


_SIG = re.escape(METAVAR_SIGIL)
_SIGIL_RUN = re.compile(
    rf"{_SIG}+(?={METAVAR_NAME_PATTERN})"
    rf"|(?<!{_SIG}){re.escape(MULTI_METAVAR_PREFIX)}(?!{_SIG})"
)


def _module_loader(module_name: str, attr: str = "language") -> Callable[[], object]:
    def load() -> object:
        module = importlib.import_module(module_name)
        return getattr(module, attr)()

    return load


_registry: Dict[str, LanguageSpec] = {}
_compiled: Dict[str, Language] = {}
_lock = threading.Lock()


def register_language(spec: LanguageSpec) -> None:
    """Register (or replace) a language under `spec.name`."""
    with _lock:
        _registry[spec.name] = spec
        _compiled.pop(spec.name, None)
    logger.debug(f"Registered language {spec.name!r} (extensions={spec.extensions})")


def registered_languages() -> Tuple[str, ...]:
    """Return names of all registered languages."""
    return tuple(sorted(_registry))


def get_language_spec(name: str) -> LanguageSpec:
    """Return the registration for `name`."""
    spec = _registry.get(name)
    if spec is None:
        raise UnknownLanguageError(
            f"Unknown language: {name!r}. Registered: {', '.join(registered_languages())}",
            language=name,
        )
    return spec


def get_language(name: str) -> Language:
    """Return the tree-sitter Language for `name`, loading the grammar once."""
    spec = get_language_spec(name)
    with _lock:
        language = _compiled.get(name)
        if language is None:
            try:
                language = Language(spec.loader())
            except ImportError as e:
                raise UnknownLanguageError(
                    f"Grammar package for {name!r} is not installed: {e}",
                    language=name,
                ) from e
            _compiled[name] = language
    return language


def language_for_path(path: str) -> Optional[str]:
    """Guess the language name from a file extension."""
    suffix = Path(path).suffix.lower()
    for spec in _registry.values():
        if suffix in spec.extensions:
            return spec.name
    return None


def parse_tree(source: bytes, language: str) -> Tree:
    """Parse raw bytes with the grammar registered as `language`."""
    parser = Parser(get_language(language))
    return parser.parse(source)


register_language(
    LanguageSpec(
        name="javascript",
        loader=_module_loader("tree_sitter_javascript"),
        extensions=(".js", ".mjs", ".cjs", ".jsx"),
    )
)
register_language(
    LanguageSpec(
        name="python",
        loader=_module_loader("tree_sitter_python"),
        extensions=(".py", ".pyi"),
        expando_char="µ",
    )
)
