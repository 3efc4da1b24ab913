"""
code_rewrite - structural code search and rewrite over tree-sitter trees.

Typical use:

    root = Root.parse("let a = 123", "javascript")
    edit = root.root().replace("let $X = $Y", "let $Y = $X")
    new_text = root.apply_edits([edit])

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .core.config import EngineConfig, get_config, load_config, set_config
from .core.edit import Edit, apply_edit, apply_edits, sort_edits
from .core.exceptions import (
    ConfigurationError,
    EditConflictError,
    EncodingError,
    LanguageMismatchError,
    PatternSyntaxError,
    RewriteError,
    StaleNodeError,
    UnboundCaptureError,
    UnknownLanguageError,
)
from .core.languages import LanguageSpec, language_for_path, register_language
from .core.source_text import SourceText
from .core.tree import Node, NodeMatch, Root
from .pattern import Environment, Pattern, compile_pattern, match_one
from .replacer import FunctionReplacer, Template

__version__ = "0.1.0"

__all__ = [
    "EngineConfig",
    "get_config",
    "load_config",
    "set_config",
    "Edit",
    "apply_edit",
    "apply_edits",
    "sort_edits",
    "ConfigurationError",
    "EditConflictError",
    "EncodingError",
    "LanguageMismatchError",
    "PatternSyntaxError",
    "RewriteError",
    "StaleNodeError",
    "UnboundCaptureError",
    "UnknownLanguageError",
    "LanguageSpec",
    "language_for_path",
    "register_language",
    "SourceText",
    "Node",
    "NodeMatch",
    "Root",
    "Environment",
    "Pattern",
    "compile_pattern",
    "match_one",
    "FunctionReplacer",
    "Template",
]
