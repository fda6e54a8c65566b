"""Data models for adoc-reflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class LineKind(Enum):
    """Kinds assigned to a single line by the classifier.

    The order of members has no meaning; precedence lives in
    ``classifier.LINE_RULES``.
    """

    BLOCK_TITLE = auto()
    BLOCK_ATTRIBUTE = auto()
    ANCHOR = auto()
    CONDITIONAL = auto()
    INCLUDE = auto()
    BLOCK_MACRO = auto()
    TABLE_FENCE = auto()
    GENERIC_FENCE = auto()
    OPEN_BLOCK_FENCE = auto()
    HORIZONTAL_RULE = auto()
    PAGE_BREAK = auto()
    HEADING = auto()
    DOCUMENT_ATTRIBUTE = auto()
    LINE_COMMENT = auto()
    COMMENT_BLOCK_FENCE = auto()
    ADMONITION = auto()
    LIST_ITEM_START = auto()
    DEF_LIST_ITEM_START = auto()
    CONTINUATION_MARKER = auto()
    INDENTED_CODE = auto()
    LITERAL_PARAGRAPH_START = auto()
    BLANK = auto()
    PROSE = auto()


class BlockState(Enum):
    """Verbatim region currently open while scanning.

    Attributes:
        NONE: No verbatim region; lines are classified normally.
        FENCE: Inside a delimited block such as ``----`` or ``====``.
        OPEN_BLOCK: Inside an open block delimited by ``--``.
        TABLE: Inside a ``|===`` table.
        COMMENT_BLOCK: Inside a ``////`` comment block.
    """

    NONE = auto()
    FENCE = auto()
    OPEN_BLOCK = auto()
    TABLE = auto()
    COMMENT_BLOCK = auto()


# Lines that only ever toggle a verbatim region, keyed to the region they open.
TOGGLE_STATES: dict[LineKind, BlockState] = {
    LineKind.COMMENT_BLOCK_FENCE: BlockState.COMMENT_BLOCK,
    LineKind.TABLE_FENCE: BlockState.TABLE,
    LineKind.GENERIC_FENCE: BlockState.FENCE,
    LineKind.OPEN_BLOCK_FENCE: BlockState.OPEN_BLOCK,
}

# Lines that end the current paragraph and are copied through unchanged.
STRUCTURAL_KINDS = frozenset(
    {
        LineKind.LINE_COMMENT,
        LineKind.BLOCK_TITLE,
        LineKind.BLOCK_ATTRIBUTE,
        LineKind.ANCHOR,
        LineKind.CONDITIONAL,
        LineKind.INCLUDE,
        LineKind.BLOCK_MACRO,
        LineKind.HORIZONTAL_RULE,
        LineKind.PAGE_BREAK,
        LineKind.HEADING,
        LineKind.DOCUMENT_ATTRIBUTE,
    }
)

LIST_KINDS = frozenset({LineKind.LIST_ITEM_START, LineKind.DEF_LIST_ITEM_START})


@dataclass
class ListItem:
    """A list or definition-list item gathered by the collector.

    Attributes:
        indent: Leading whitespace before the marker or term.
        marker: Bullet run, ``1.``, ``a.``, ``•``, or the term of a
            definition-list item.
        first_fragment: Text following the marker, with any checklist token
            removed.
        lines: Source lines of the item, exactly as read.
        checklist: Checklist token such as ``[x]``, or None.
        complex: Whether the item holds nested items, a continuation, or
            indented code and must be copied verbatim.
        definition: Whether the item is a ``Term::`` entry.
    """

    indent: str
    marker: str
    first_fragment: str
    lines: list[str] = field(default_factory=list)
    checklist: str | None = None
    complex: bool = False
    definition: bool = False

    @property
    def indent_width(self) -> int:
        return len(self.indent)


@dataclass
class ReflowContext:
    """Scan state threaded through a single ``reflow`` call.

    Attributes:
        width: Target column width.
        block_state: Verbatim region currently open.
        paragraph: Prose lines waiting to be wrapped.
        in_literal: Whether a literal paragraph is being copied through.
        output: Lines emitted so far.
    """

    width: int
    block_state: BlockState = BlockState.NONE
    paragraph: list[str] = field(default_factory=list)
    in_literal: bool = False
    output: list[str] = field(default_factory=list)
