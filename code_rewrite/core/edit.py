"""
Byte-range edits and their application to SourceText.

An Edit deletes `deleted_length` bytes at `position` and inserts
`inserted_text` there. Batches are validated as a whole before any text is
produced, so a conflicting batch never partially applies.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .config import get_config
from .constants import BATCH_STRATEGIES, BATCH_STRATEGY_ASCENDING
from .exceptions import EditConflictError, EncodingError
from .source_text import SourceText

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edit:
    """A single byte-range splice."""

    position: int
    deleted_length: int
    inserted_text: str

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError(f"Edit position must be >= 0, got {self.position}")
        if self.deleted_length < 0:
            raise ValueError(f"Edit deleted_length must be >= 0, got {self.deleted_length}")

    @property
    def end(self) -> int:
        """First byte after the deleted range."""
        return self.position + self.deleted_length

    @property
    def inserted_bytes(self) -> bytes:
        return self.inserted_text.encode("utf-8")

    @property
    def delta(self) -> int:
        """Shift applied to offsets after the edited range."""
        return len(self.inserted_bytes) - self.deleted_length

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "position": self.position,
            "deleted_length": self.deleted_length,
            "inserted_text": self.inserted_text,
        }


def _check_bounds(source: SourceText, edit: Edit) -> None:
    if edit.end > len(source):
        raise EditConflictError(
            f"Edit [{edit.position}, {edit.end}) exceeds source of {len(source)} bytes",
            edits=(edit,),
        )
    for offset in (edit.position, edit.end):
        if not source.is_char_boundary(offset):
            raise EncodingError(
                f"Edit offset {offset} is not on a character boundary",
                start=edit.position,
                end=edit.end,
            )


def sort_edits(source: SourceText, edits: Iterable[Edit]) -> List[Edit]:
    """
    Order a batch by position and validate it against `source`.

    Ties on position keep pure insertions ahead of deletions, then input order.

    Raises:
        EditConflictError: If two edits overlap or an edit is out of bounds
        EncodingError: If an edit cuts a multi-byte character
    """
    ordered = sorted(edits, key=lambda e: (e.position, e.deleted_length))
    previous: Optional[Edit] = None
    for edit in ordered:
        _check_bounds(source, edit)
        if previous is not None and edit.position < previous.end:
            raise EditConflictError(
                f"Edit at {edit.position} overlaps edit [{previous.position}, {previous.end})",
                edits=(previous, edit),
            )
        previous = edit
    return ordered


def apply_edit(source: SourceText, edit: Edit) -> SourceText:
    """Return a new SourceText with one edit applied."""
    _check_bounds(source, edit)
    data = source.data
    return SourceText.from_bytes(data[: edit.position] + edit.inserted_bytes + data[edit.end :])


def _apply_descending(source: SourceText, ordered: List[Edit]) -> bytes:
    data = bytearray(source.data)
    for edit in reversed(ordered):
        data[edit.position : edit.end] = edit.inserted_bytes
    return bytes(data)


def _apply_ascending(source: SourceText, ordered: List[Edit]) -> bytes:
    data = source.data
    segments: List[bytes] = []
    cursor = 0
    for edit in ordered:
        segments.append(data[cursor : edit.position])
        segments.append(edit.inserted_bytes)
        cursor = edit.end
    segments.append(data[cursor:])
    return b"".join(segments)


def apply_edits(
    source: SourceText, edits: Iterable[Edit], strategy: Optional[str] = None
) -> SourceText:
    """
    Apply a batch of non-overlapping edits computed against `source`.

    Args:
        source: Text all edit offsets refer to
        edits: Edits in any order
        strategy: "descending" (splice from the end) or "ascending"
            (concatenate segments of the source); defaults to config

    Returns:
        New SourceText; `source` is not modified
    """
    strategy = strategy or get_config().batch_strategy
    if strategy not in BATCH_STRATEGIES:
        raise ValueError(f"Unknown batch strategy: {strategy!r}")

    edits = list(edits)
    try:
        ordered = sort_edits(source, edits)
    except (EditConflictError, EncodingError) as e:
        logger.error(f"Rejected batch of {len(edits)} edits: {e}")
        raise

    if strategy == BATCH_STRATEGY_ASCENDING:
        result = _apply_ascending(source, ordered)
    else:
        result = _apply_descending(source, ordered)
    logger.debug(
        f"Applied {len(ordered)} edits ({strategy}): {len(source)} -> {len(result)} bytes"
    )
    return SourceText.from_bytes(result)
