"""
Tests for the pattern compiler.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import pytest

from code_rewrite import Pattern, PatternSyntaxError
from code_rewrite.core.languages import get_language_spec
from code_rewrite.pattern import MetaVarKind, compile_pattern, extract_metavariable


@pytest.mark.parametrize(
    "text,kind,name",
    [
        ("$X", MetaVarKind.SINGLE, "X"),
        ("$ARG_1", MetaVarKind.SINGLE, "ARG_1"),
        ("$_", MetaVarKind.SINGLE, "_"),
        ("$$$ARGS", MetaVarKind.MULTI, "ARGS"),
        ("$$$", MetaVarKind.MULTI, None),
    ],
)
def test_extract_metavariable(text, kind, name) -> None:
    meta = extract_metavariable(text, get_language_spec("javascript"))
    assert meta.kind == kind
    assert meta.name == name


@pytest.mark.parametrize("text", ["X", "$x", "$1", "$$X", "a$X", "$X.y"])
def test_extract_metavariable_rejects_literals(text) -> None:
    assert extract_metavariable(text, get_language_spec("javascript")) is None


def test_anonymous_metavariables() -> None:
    spec = get_language_spec("javascript")
    assert extract_metavariable("$_", spec).is_anonymous
    assert extract_metavariable("$_TMP", spec).is_anonymous
    assert extract_metavariable("$$$", spec).is_anonymous
    assert not extract_metavariable("$A", spec).is_anonymous


def test_pattern_strips_single_child_wrappers() -> None:
    pattern = Pattern("let $X = $Y", "javascript")
    assert pattern.node.kind == "lexical_declaration"
    assert [c.kind for c in pattern.node.children] == ["let", "variable_declarator"]
    name, eq, value = pattern.node.children[1].children
    assert name.is_meta and name.meta.name == "X"
    assert not eq.is_meta and eq.text == "="
    assert value.is_meta and value.meta.name == "Y"


def test_pattern_call_expression() -> None:
    pattern = Pattern("foo($A)", "javascript")
    assert pattern.node.kind == "call_expression"


def test_metavariables_in_order() -> None:
    pattern = compile_pattern("foo($A, $$$REST, $_, $A)", "javascript")
    names = [m.name for m in pattern.metavariables()]
    assert names == ["A", "REST"]
    assert pattern.metavariables()[1].is_multi


def test_default_language_comes_from_config(default_config) -> None:
    pattern = Pattern("$X")
    assert pattern.language == default_config.default_language


def test_empty_pattern_fails() -> None:
    with pytest.raises(PatternSyntaxError):
        Pattern("   ", "javascript")


def test_invalid_pattern_fails() -> None:
    with pytest.raises(PatternSyntaxError) as exc_info:
        Pattern("let = = ;", "javascript")
    assert exc_info.value.language == "javascript"
    assert exc_info.value.code == "PATTERN_SYNTAX_ERROR"


def test_selector_picks_node_from_context() -> None:
    pattern = Pattern("let a = $V", "javascript", selector="variable_declarator")
    assert pattern.node.kind == "variable_declarator"
    assert pattern.selector == "variable_declarator"


def test_selector_missing_fails() -> None:
    with pytest.raises(PatternSyntaxError):
        Pattern("let a = 1", "javascript", selector="class_declaration")


def test_python_uses_expando_character() -> None:
    pattern = Pattern("$X = $Y", "python")
    assert pattern.node.kind == "assignment"
    left, _, right = pattern.node.children
    assert left.meta.name == "X"
    assert right.meta.name == "Y"


def test_expando_replaces_only_metavariable_sigils() -> None:
    spec = get_language_spec("python")
    processed = spec.pre_process_pattern('f($A, "$5", $$$, $$$REST, $_, "$$")')
    assert processed == 'f(µA, "$5", µµµ, µµµREST, µ_, "$$")'
    assert get_language_spec("javascript").pre_process_pattern("f($A)") == "f($A)"


def test_python_literal_text_is_kept_as_written() -> None:
    pattern = Pattern('x = "cost $A" + $B', "python")
    assert [m.name for m in pattern.metavariables()] == ["B"]
    left, _, right = pattern.node.children
    assert left.text == "x"
    assert right.text == '"cost $A" + $B'
    assert right.children[0].text == '"cost $A"'
