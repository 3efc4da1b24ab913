"""
Project-wide constants.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from typing import Set

# ============================================================================
# Metavariable syntax
# ============================================================================

# Sigil that marks a metavariable in patterns and templates.
METAVAR_SIGIL: str = "$"

# Prefix of a variadic metavariable ($$$NAME).
MULTI_METAVAR_PREFIX: str = METAVAR_SIGIL * 3

# Metavariable names: upper-case letters, digits and underscores.
METAVAR_NAME_PATTERN: str = r"[A-Z_][A-Z0-9_]*"

# Names starting with this prefix match but are never captured.
ANONYMOUS_METAVAR_PREFIX: str = "_"


# ============================================================================
# Edit application
# ============================================================================

BATCH_STRATEGY_DESCENDING: str = "descending"
BATCH_STRATEGY_ASCENDING: str = "ascending"

BATCH_STRATEGIES: Set[str] = {
    BATCH_STRATEGY_DESCENDING,
    BATCH_STRATEGY_ASCENDING,
}


# ============================================================================
# Defaults
# ============================================================================

DEFAULT_LANGUAGE: str = "javascript"
DEFAULT_LOG_LEVEL: str = "WARNING"
