"""
Tests for replacement templates.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import pytest

from code_rewrite import FunctionReplacer, PatternSyntaxError, Template, UnboundCaptureError
from code_rewrite.pattern import Environment
from code_rewrite.replacer import as_replacer, parse_template


def test_parse_segments() -> None:
    segments = parse_template("let $Y = $X")
    assert [(s.text, s.name) for s in segments] == [
        ("let ", None),
        ("$Y", "Y"),
        (" = ", None),
        ("$X", "X"),
    ]


def test_parse_multi_reference() -> None:
    segments = parse_template("f($$$ARGS)")
    ref = segments[1]
    assert ref.name == "ARGS"
    assert ref.multi


def test_lone_sigils_are_literal() -> None:
    assert [s.text for s in parse_template("cost: $5")] == ["cost: $5"]
    segments = parse_template("$$X")
    assert [(s.text, s.name) for s in segments] == [("$", None), ("$X", "X")]
    assert "".join(s.text for s in parse_template("$$$")) == "$$$"
    assert all(not s.is_reference for s in parse_template("$$$"))


def test_empty_template() -> None:
    template = Template("")
    assert template.segments == ()
    assert template.generate_replacement(Environment()) == ""


def test_references_in_order() -> None:
    assert Template("$B + $A + $B").references() == ("B", "A")


def test_generate_replacement(js_root) -> None:
    match = js_root("let a = 123").root().find("let $X = $Y")
    assert Template("let $Y = $X").generate_replacement(match.env) == "let 123 = a"


def test_generate_multi_replacement(js_root) -> None:
    match = js_root("foo(1, 2)").root().find("foo($$$ARGS)")
    assert Template("bar($$$ARGS, 3)").generate_replacement(match.env) == "bar(1, 2, 3)"


def test_unbound_reference_raises(js_root) -> None:
    match = js_root("let a = 123").root().find("let $X = $Y")
    with pytest.raises(UnboundCaptureError) as exc_info:
        Template("$Z").generate_replacement(match.env)
    assert exc_info.value.name == "Z"


def test_anonymous_reference_is_unbound(js_root) -> None:
    match = js_root("let a = 123").root().find("let $_ = $Y")
    with pytest.raises(UnboundCaptureError):
        Template("$_").generate_replacement(match.env)


def test_grammar_check_rejects_invalid_template() -> None:
    with pytest.raises(PatternSyntaxError):
        Template("let = = ;", "javascript")


def test_grammar_check_accepts_metavariables() -> None:
    assert Template("let $Y = $X", "javascript").language == "javascript"
    assert Template("$Y = $X", "python").language == "python"


def test_function_replacer(js_root) -> None:
    match = js_root("let a = 123").root().find("let $X = $Y")
    replacer = FunctionReplacer(lambda env: env.get_text("X").upper())
    assert replacer.generate_replacement(match.env) == "A"


def test_function_replacer_requires_str(js_root) -> None:
    match = js_root("let a = 123").root().find("let $X = $Y")
    with pytest.raises(TypeError):
        FunctionReplacer(lambda env: 42).generate_replacement(match.env)


def test_as_replacer() -> None:
    template = Template("x")
    assert as_replacer(template) is template
    assert isinstance(as_replacer("x"), Template)
    assert isinstance(as_replacer(lambda env: "x"), FunctionReplacer)
    with pytest.raises(TypeError):
        as_replacer(42)
