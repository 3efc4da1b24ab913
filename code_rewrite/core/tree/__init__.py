"""
Read-only tree views over parsed programs.

Provides Root (owner of source text and parsed tree) and Node (borrowed view).

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .models import Root, TreeArena
from .node import ChildNodes, Node, NodeMatch

__all__ = [
    "Root",
    "TreeArena",
    "Node",
    "NodeMatch",
    "ChildNodes",
]
