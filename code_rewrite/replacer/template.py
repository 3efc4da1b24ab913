"""
Replacement templates (Lark).

Template syntax:
- `$NAME` is replaced by the text of the node captured as NAME
- `$$$NAME` is replaced by the source text covering a captured node run
- everything else, including a `$` not followed by a name, is copied verbatim

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple, Union, runtime_checkable

from lark import Lark, Token, UnexpectedInput

from ..core.constants import METAVAR_SIGIL, MULTI_METAVAR_PREFIX
from ..core.exceptions import PatternSyntaxError
from ..core.languages import get_language_spec
from ..core.tree import Root
from ..pattern.environment import Environment

logger = logging.getLogger(__name__)


_GRAMMAR = r"""
start: (MULTI_VAR | SINGLE_VAR | SIGIL | TEXT)*

MULTI_VAR.3: /\$\$\$[A-Z_][A-Z0-9_]*/
SINGLE_VAR.2: /\$[A-Z_][A-Z0-9_]*/
SIGIL: "$"
TEXT: /[^$]+/
"""


_parser = Lark(_GRAMMAR, parser="lalr", start="start")


@runtime_checkable
class Replacer(Protocol):
    """Anything that can turn a capture environment into replacement text."""

    def generate_replacement(self, env: Environment) -> str: ...


ReplacerLike = Union[str, Replacer, Callable[[Environment], str]]


@dataclass(frozen=True)
class TemplateSegment:
    """Literal text (name is None) or a metavariable reference."""

    text: str
    name: Optional[str] = None
    multi: bool = False

    @property
    def is_reference(self) -> bool:
        return self.name is not None


def _segment_from_token(token: Token) -> TemplateSegment:
    raw = str(token)
    if token.type == "MULTI_VAR":
        return TemplateSegment(text=raw, name=raw[len(MULTI_METAVAR_PREFIX) :], multi=True)
    if token.type == "SINGLE_VAR":
        return TemplateSegment(text=raw, name=raw[len(METAVAR_SIGIL) :])
    return TemplateSegment(text=raw)


def _merge_literals(segments: list[TemplateSegment]) -> Tuple[TemplateSegment, ...]:
    merged: list[TemplateSegment] = []
    for seg in segments:
        if merged and not seg.is_reference and not merged[-1].is_reference:
            merged[-1] = TemplateSegment(text=merged[-1].text + seg.text)
        else:
            merged.append(seg)
    return tuple(merged)


def parse_template(source: str) -> Tuple[TemplateSegment, ...]:
    """
    Split a template into literal and reference segments.

    Raises:
        PatternSyntaxError
    """
    try:
        tree = _parser.parse(source)
    except UnexpectedInput as e:
        raise PatternSyntaxError(f"Invalid template: {e}", source=source) from e
    return _merge_literals([_segment_from_token(tok) for tok in tree.children])


class Template:
    """
    Compiled replacement template.

    Args:
        source: Template text, e.g. "let $Y = $X"
        language: If given, the template must also parse under this grammar

    Raises:
        PatternSyntaxError: If the template does not parse
    """

    __slots__ = ("_source", "_segments", "_language")

    def __init__(self, source: str, language: Optional[str] = None):
        self._source = source
        self._segments = parse_template(source)
        self._language = language
        if language is not None and source.strip():
            _check_grammar(source, language)

    @property
    def source(self) -> str:
        return self._source

    @property
    def segments(self) -> Tuple[TemplateSegment, ...]:
        return self._segments

    @property
    def language(self) -> Optional[str]:
        return self._language

    def references(self) -> Tuple[str, ...]:
        """Referenced metavariable names in order of first use."""
        names: dict = {}
        for seg in self._segments:
            if seg.is_reference:
                names.setdefault(seg.name, None)
        return tuple(names)

    def generate_replacement(self, env: Environment) -> str:
        """
        Substitute captures into the template.

        Raises:
            UnboundCaptureError: If a referenced metavariable is not in `env`
        """
        parts = []
        for seg in self._segments:
            parts.append(env.get_text(seg.name) if seg.is_reference else seg.text)
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Template({self._source!r})"


def _check_grammar(source: str, language: str) -> None:
    spec = get_language_spec(language)
    with Root.parse(spec.pre_process_pattern(source.strip()), language) as root:
        if root.has_error:
            raise PatternSyntaxError(
                f"Template does not parse as {language}: {source!r}",
                source=source,
                language=language,
            )


class FunctionReplacer:
    """Adapter turning a plain callable into a Replacer."""

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[Environment], str]):
        self._func = func

    def generate_replacement(self, env: Environment) -> str:
        result = self._func(env)
        if not isinstance(result, str):
            raise TypeError(f"Replacement function must return str, got {type(result).__name__}")
        return result


def as_replacer(replacer: ReplacerLike, language: Optional[str] = None) -> Replacer:
    """
    Normalize a template string, Replacer or callable into a Replacer.

    Strings are compiled as Templates, checked against `language` when given.
    """
    if isinstance(replacer, str):
        return Template(replacer, language)
    if isinstance(replacer, Replacer):
        return replacer
    if callable(replacer):
        return FunctionReplacer(replacer)
    raise TypeError(f"Unsupported replacer: {replacer!r}")
