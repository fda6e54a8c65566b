"""Line classification for AsciiDoc-style markup."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .constants import (
    ADMONITION_PATTERN,
    ANCHOR_PATTERN,
    BLOCK_ATTRIBUTE_PATTERN,
    BLOCK_MACRO_PATTERN,
    BLOCK_TITLE_PATTERN,
    COMMENT_BLOCK_PATTERN,
    CONDITIONAL_PATTERN,
    CONTINUATION_PATTERN,
    DEFINITION_ITEM_PATTERN,
    DOCUMENT_ATTRIBUTE_PATTERN,
    GENERIC_FENCE_PATTERN,
    HEADING_PATTERN,
    HORIZONTAL_RULE_PATTERN,
    INCLUDE_PATTERN,
    INDENTED_CODE_PATTERN,
    LINE_COMMENT_PATTERN,
    LIST_ITEM_PATTERN,
    LITERAL_LINE_PATTERN,
    OPEN_BLOCK_PATTERN,
    PAGE_BREAK_PATTERN,
    TABLE_FENCE_PATTERN,
)
from .models import LineKind


@dataclass(frozen=True)
class LineRule:
    """A single classification rule.

    Attributes:
        kind: Kind assigned when the rule matches.
        matches: Predicate receiving the raw line and its stripped form.
        paragraph_start_only: Whether the rule applies only to the first line
            of a new paragraph.
    """

    kind: LineKind
    matches: Callable[[str, str], bool]
    paragraph_start_only: bool = False


def _raw(pattern) -> Callable[[str, str], bool]:
    return lambda line, stripped: pattern.match(line) is not None


def _stripped(pattern) -> Callable[[str, str], bool]:
    return lambda line, stripped: pattern.match(stripped) is not None


# First match wins. Several categories overlap textually (``[NOTE]`` is a block
# attribute, ``NOTE: x`` an admonition, ``* [x] y`` a list item), so the order
# is part of the contract.
LINE_RULES: tuple[LineRule, ...] = (
    LineRule(LineKind.COMMENT_BLOCK_FENCE, _stripped(COMMENT_BLOCK_PATTERN)),
    LineRule(LineKind.LINE_COMMENT, _raw(LINE_COMMENT_PATTERN)),
    LineRule(LineKind.BLOCK_TITLE, _raw(BLOCK_TITLE_PATTERN)),
    LineRule(LineKind.BLOCK_ATTRIBUTE, _raw(BLOCK_ATTRIBUTE_PATTERN)),
    LineRule(LineKind.ANCHOR, _raw(ANCHOR_PATTERN)),
    LineRule(LineKind.CONDITIONAL, _raw(CONDITIONAL_PATTERN)),
    LineRule(LineKind.INCLUDE, _raw(INCLUDE_PATTERN)),
    LineRule(LineKind.BLOCK_MACRO, _raw(BLOCK_MACRO_PATTERN)),
    LineRule(LineKind.HORIZONTAL_RULE, _stripped(HORIZONTAL_RULE_PATTERN)),
    LineRule(LineKind.PAGE_BREAK, _stripped(PAGE_BREAK_PATTERN)),
    LineRule(LineKind.TABLE_FENCE, _stripped(TABLE_FENCE_PATTERN)),
    LineRule(LineKind.GENERIC_FENCE, _stripped(GENERIC_FENCE_PATTERN)),
    LineRule(LineKind.OPEN_BLOCK_FENCE, _stripped(OPEN_BLOCK_PATTERN)),
    LineRule(LineKind.HEADING, _raw(HEADING_PATTERN)),
    LineRule(LineKind.DOCUMENT_ATTRIBUTE, _raw(DOCUMENT_ATTRIBUTE_PATTERN)),
    LineRule(LineKind.BLANK, lambda line, stripped: not stripped),
    LineRule(
        LineKind.LITERAL_PARAGRAPH_START,
        _raw(LITERAL_LINE_PATTERN),
        paragraph_start_only=True,
    ),
    LineRule(LineKind.ADMONITION, _raw(ADMONITION_PATTERN)),
    LineRule(LineKind.CONTINUATION_MARKER, _raw(CONTINUATION_PATTERN)),
    LineRule(LineKind.LIST_ITEM_START, _raw(LIST_ITEM_PATTERN)),
    LineRule(LineKind.DEF_LIST_ITEM_START, _raw(DEFINITION_ITEM_PATTERN)),
    LineRule(LineKind.INDENTED_CODE, _raw(INDENTED_CODE_PATTERN)),
)


def classify_line(line: str, starts_paragraph: bool = False) -> LineKind:
    """Assign exactly one `LineKind` to a line.

    Classification never looks at block state; callers decide whether the
    kind matters.

    Args:
        line: Raw line without its terminator.
        starts_paragraph: True when no paragraph or literal paragraph is open,
            which enables literal-paragraph detection.

    Returns:
        LineKind: Kind of the first matching rule, or ``LineKind.PROSE``.

    Examples:
        classify_line("----")  # LineKind.GENERIC_FENCE
        classify_line(" literal", starts_paragraph=True)  # LITERAL_PARAGRAPH_START
        classify_line("M. Glushkov wrote")  # LineKind.PROSE
    """
    stripped = line.strip()
    for rule in LINE_RULES:
        if rule.paragraph_start_only and not starts_paragraph:
            continue
        if rule.matches(line, stripped):
            return rule.kind
    return LineKind.PROSE
