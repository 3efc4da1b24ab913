"""
Structural patterns: compile code snippets with metavariables and match them.

Public API:
  - Pattern / compile_pattern(query, language) -> Pattern
  - match_one(pattern, node) -> Environment | None
  - find_node / find_all_nodes / iter_matches
  - Environment

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .ast import MetaVariable, MetaVarKind, PatternNode
from .compiler import Pattern, compile_pattern, extract_metavariable
from .environment import Environment
from .matcher import find_all_nodes, find_node, iter_matches, match_one

__all__ = [
    "MetaVariable",
    "MetaVarKind",
    "PatternNode",
    "Pattern",
    "compile_pattern",
    "extract_metavariable",
    "Environment",
    "find_all_nodes",
    "find_node",
    "iter_matches",
    "match_one",
]
