"""Editor-facing helpers: ranges, edits and width handling around `reflow`.

Rows are the document split on ``\\n``; a document ending with a newline has a
final empty row, as in most editors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import DEFAULT_WIDTH, MAX_HOST_WIDTH, MIN_HOST_WIDTH
from .exceptions import InvalidRangeError
from .reflow import reflow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextEdit:
    """Replacement of whole rows.

    Attributes:
        start_line: Zero-based first row replaced.
        end_line: Zero-based last row replaced (inclusive).
        new_text: Replacement text, without a trailing row terminator.
    """

    start_line: int
    end_line: int
    new_text: str


def clamp_width(width: int, lower: int = MIN_HOST_WIDTH, upper: int = MAX_HOST_WIDTH) -> int:
    """Clamp a user-supplied width into ``[lower, upper]``."""
    return max(lower, min(upper, width))


def _rows(document: str) -> list[str]:
    return document.split("\n")


def paragraph_range_at(rows: list[str], line_number: int) -> tuple[int, int]:
    """Find the run of non-blank rows around a row.

    Args:
        rows: Document rows.
        line_number: Zero-based row; clamped into the document.

    Returns:
        tuple[int, int]: Inclusive start and end rows. A blank row is its
            own range.

    Examples:
        paragraph_range_at(["a", "b", "", "c"], 1)  # (0, 1)
        paragraph_range_at(["a", "b", "", "c"], 2)  # (2, 2)
    """
    last = max(0, len(rows) - 1)
    start = end = max(0, min(line_number, last))
    if not rows[start].strip():
        return start, end
    while start > 0 and rows[start - 1].strip():
        start -= 1
    while end < last and rows[end + 1].strip():
        end += 1
    return start, end


def apply_edit(document: str, edit: TextEdit) -> str:
    """Return the document with one edit applied."""
    rows = _rows(document)
    rows[edit.start_line : edit.end_line + 1] = _rows(edit.new_text)
    return "\n".join(rows)


def format_document(document: str, width: int) -> list[TextEdit]:
    """Reflow a whole document.

    Args:
        document: Full document text.
        width: Target width.

    Returns:
        list[TextEdit]: One edit covering every row, or no edit when reflowing
            changes nothing.
    """
    formatted = reflow(document, width)
    if formatted == document:
        return []
    return [TextEdit(0, len(_rows(document)) - 1, formatted)]


def _restore_crlf(text: str, last_row_terminated: bool) -> str:
    # Rows of a CRLF document keep their "\r"; the last one only if it had it.
    rows = text.split("\n")
    rows[:-1] = [row + "\r" for row in rows[:-1]]
    if last_row_terminated:
        rows[-1] += "\r"
    return "\n".join(rows)


def format_range(document: str, start_line: int, end_line: int, width: int) -> list[TextEdit]:
    """Reflow whole rows ``start_line`` through ``end_line``.

    Args:
        document: Full document text.
        start_line: Zero-based first row.
        end_line: Zero-based last row (inclusive).
        width: Target width.

    Returns:
        list[TextEdit]: One edit for the range, or no edit when reflowing
            changes nothing.

    Raises:
        InvalidRangeError: If the rows are reversed or outside the document.
    """
    rows = _rows(document)
    if start_line < 0 or end_line < start_line or end_line >= len(rows):
        raise InvalidRangeError(start_line, end_line, len(rows))

    selected = rows[start_line : end_line + 1]
    original = "\n".join(selected)
    formatted = reflow("\n".join(row.removesuffix("\r") for row in selected), width)
    if any(row.endswith("\r") for row in selected):
        formatted = _restore_crlf(formatted, selected[-1].endswith("\r"))
    if formatted == original:
        logger.debug("Rows %d-%d already formatted", start_line + 1, end_line + 1)
        return []
    return [TextEdit(start_line, end_line, formatted)]


def reflow_selection(
    document: str, start_line: int, end_line: int | None = None, width: int = DEFAULT_WIDTH
) -> str:
    """Reflow a selection, or the paragraph under the cursor.

    Args:
        document: Full document text.
        start_line: Zero-based first selected row, or the cursor row.
        end_line: Zero-based last selected row; None selects the paragraph
            around ``start_line``.
        width: Target width.

    Returns:
        str: The updated document.

    Raises:
        InvalidRangeError: If an explicit range does not fit the document.

    Examples:
        reflow_selection("a\\nb\\n\\nc\\n", 0, width=40)  # "a b\\n\\nc\\n"
    """
    if end_line is None:
        start_line, end_line = paragraph_range_at(_rows(document), start_line)

    for edit in format_range(document, start_line, end_line, width):
        document = apply_edit(document, edit)
    return document
