"""
Pytest fixtures for structural search and rewrite tests.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import pytest

from code_rewrite.core import config as config_module
from code_rewrite.core.tree import Root


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run every test against a fresh default configuration."""
    monkeypatch.setattr(config_module, "_active", None)
    yield config_module.get_config()


@pytest.fixture
def js_root():
    """Factory parsing JavaScript sources; roots are closed after the test."""
    roots = []

    def make(source: str) -> Root:
        root = Root.parse(source, "javascript")
        roots.append(root)
        return root

    yield make
    for root in roots:
        root.close()


@pytest.fixture
def py_root():
    """Factory parsing Python sources."""
    roots = []

    def make(source: str) -> Root:
        root = Root.parse(source, "python")
        roots.append(root)
        return root

    yield make
    for root in roots:
        root.close()
