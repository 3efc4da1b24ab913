"""
Tests for edits and batch application.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import pytest

from code_rewrite import (
    Edit,
    EditConflictError,
    EncodingError,
    SourceText,
    apply_edit,
    apply_edits,
    set_config,
    sort_edits,
)
from code_rewrite.core.config import EngineConfig


def test_edit_rejects_negative_values() -> None:
    with pytest.raises(ValueError):
        Edit(position=-1, deleted_length=0, inserted_text="")
    with pytest.raises(ValueError):
        Edit(position=0, deleted_length=-2, inserted_text="")


def test_edit_properties() -> None:
    edit = Edit(position=4, deleted_length=3, inserted_text="é")
    assert edit.end == 7
    assert edit.delta == -1
    assert edit.to_dict() == {"position": 4, "deleted_length": 3, "inserted_text": "é"}


@pytest.mark.parametrize(
    "inserted,expected",
    [
        ("x", "let x = 123"),
        ("longer", "let longer = 123"),
        ("", "let  = 123"),
    ],
)
def test_apply_single_edit(inserted, expected) -> None:
    source = SourceText("let a = 123")
    result = apply_edit(source, Edit(position=4, deleted_length=1, inserted_text=inserted))
    assert result.text == expected
    assert source.text == "let a = 123"


def test_apply_edit_shifts_later_offsets() -> None:
    source = SourceText("ab|cd")
    edit = Edit(position=0, deleted_length=2, inserted_text="xyz")
    result = apply_edit(source, edit)
    assert result.data.index(b"|") == source.data.index(b"|") + edit.delta


def test_batch_strategies_agree() -> None:
    source = SourceText("héllo wörld, foo bar")
    edits = [
        Edit(position=len("héllo wörld, foo ".encode()), deleted_length=3, inserted_text="BAZ!"),
        Edit(position=0, deleted_length=len("héllo".encode()), inserted_text="hi"),
        Edit(position=len("héllo ".encode()), deleted_length=0, inserted_text="big "),
    ]
    descending = apply_edits(source, edits, strategy="descending")
    ascending = apply_edits(source, edits, strategy="ascending")
    assert descending.text == ascending.text == "hi big wörld, foo BAZ!"


def test_insertions_at_same_position_keep_input_order() -> None:
    source = SourceText("ac")
    edits = [
        Edit(position=1, deleted_length=0, inserted_text="b"),
        Edit(position=1, deleted_length=0, inserted_text="B"),
        Edit(position=1, deleted_length=1, inserted_text="C"),
    ]
    for strategy in ("descending", "ascending"):
        assert apply_edits(source, edits, strategy=strategy).text == "abBC"


def test_adjacent_edits_do_not_conflict() -> None:
    source = SourceText("abcd")
    edits = [
        Edit(position=2, deleted_length=2, inserted_text="Y"),
        Edit(position=0, deleted_length=2, inserted_text="X"),
    ]
    assert apply_edits(source, edits).text == "XY"
    assert [e.position for e in sort_edits(source, edits)] == [0, 2]


def test_overlapping_edits_conflict() -> None:
    source = SourceText("abcdef")
    first = Edit(position=0, deleted_length=4, inserted_text="x")
    second = Edit(position=3, deleted_length=2, inserted_text="y")
    with pytest.raises(EditConflictError) as exc_info:
        apply_edits(source, [second, first])
    assert exc_info.value.edits == (first, second)
    assert exc_info.value.code == "EDIT_CONFLICT_ERROR"


def test_out_of_bounds_edit_conflicts() -> None:
    with pytest.raises(EditConflictError):
        apply_edits(SourceText("abc"), [Edit(position=2, deleted_length=5, inserted_text="")])
    with pytest.raises(EditConflictError):
        apply_edit(SourceText("abc"), Edit(position=9, deleted_length=0, inserted_text="x"))


def test_edit_inside_character_is_encoding_error() -> None:
    with pytest.raises(EncodingError):
        apply_edits(SourceText("é"), [Edit(position=1, deleted_length=0, inserted_text="x")])


def test_unknown_strategy() -> None:
    with pytest.raises(ValueError):
        apply_edits(SourceText("a"), [], strategy="sideways")


def test_default_strategy_from_config() -> None:
    set_config(EngineConfig(batch_strategy="ascending"))
    source = SourceText("abc")
    edits = [Edit(position=1, deleted_length=1, inserted_text="B")]
    assert apply_edits(source, edits).text == "aBc"


def test_empty_batch_returns_equal_text() -> None:
    source = SourceText("unchanged")
    assert apply_edits(source, []).text == "unchanged"
