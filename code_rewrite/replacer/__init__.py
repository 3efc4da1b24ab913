"""
Replacement templates and match-to-edit conversion.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .rewrite import edit_for_match, replace_all, replace_first
from .template import (
    FunctionReplacer,
    Replacer,
    ReplacerLike,
    Template,
    TemplateSegment,
    as_replacer,
    parse_template,
)

__all__ = [
    "FunctionReplacer",
    "Replacer",
    "ReplacerLike",
    "Template",
    "TemplateSegment",
    "as_replacer",
    "parse_template",
    "edit_for_match",
    "replace_all",
    "replace_first",
]
