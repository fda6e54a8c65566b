"""Reflow engine: a single forward scan over the document lines."""

from __future__ import annotations

import logging
import re

from .blocks import advance_block_state
from .classifier import classify_line
from .collector import collect_list_item
from .constants import ADMONITION_PATTERN
from .models import (
    LIST_KINDS,
    STRUCTURAL_KINDS,
    BlockState,
    LineKind,
    ReflowContext,
)
from .wrapper import reflow_paragraph, render_admonition, render_list_item

logger = logging.getLogger(__name__)

# Copied through unchanged, ending any open paragraph.
_PASSTHROUGH_KINDS = STRUCTURAL_KINDS | {LineKind.INDENTED_CODE, LineKind.CONTINUATION_MARKER}

_LINE_BREAK = re.compile(r"\r?\n")


def split_document(document: str) -> tuple[list[str], bool]:
    """Split text into lines on ``\\n`` or ``\\r\\n``.

    Args:
        document: Text to split.

    Returns:
        tuple[list[str], bool]: Lines without terminators, and whether the text
            ended with a line terminator.

    Examples:
        split_document("a\\r\\nb\\n")  # (["a", "b"], True)
        split_document("")  # ([""], False)
    """
    ends_with_newline = document.endswith("\n")
    if ends_with_newline:
        document = document[:-2] if document.endswith("\r\n") else document[:-1]
    return _LINE_BREAK.split(document), ends_with_newline


def _flush_paragraph(ctx: ReflowContext) -> None:
    if not ctx.paragraph:
        return
    ctx.output.extend(reflow_paragraph(ctx.paragraph, ctx.width))
    ctx.paragraph = []


def _try_pass_block_line(ctx: ReflowContext, line: str) -> bool:
    """Copy a line belonging to an open verbatim block.

    Args:
        ctx: Scan context.
        line: Current line.

    Returns:
        bool: True when a block was open and the line was consumed.
    """
    if ctx.block_state is BlockState.NONE:
        return False

    ctx.block_state, verbatim = advance_block_state(ctx.block_state, classify_line(line))
    if verbatim:
        ctx.output.append(line)
    return verbatim


def _try_toggle_block(ctx: ReflowContext, kind: LineKind, line: str) -> bool:
    """Open a verbatim block when the line is a block delimiter."""
    state, verbatim = advance_block_state(ctx.block_state, kind)
    if not verbatim:
        return False

    _flush_paragraph(ctx)
    ctx.block_state = state
    ctx.output.append(line)
    return True


def _try_end_paragraph(ctx: ReflowContext, kind: LineKind) -> bool:
    """Close the paragraph (normal or literal) on a blank line."""
    if kind is not LineKind.BLANK:
        return False

    _flush_paragraph(ctx)
    ctx.in_literal = False
    ctx.output.append("")
    return True


def _try_continue_literal(ctx: ReflowContext, line: str) -> bool:
    if not ctx.in_literal:
        return False
    ctx.output.append(line)
    return True


def _try_pass_structural(ctx: ReflowContext, kind: LineKind, line: str) -> bool:
    if kind not in _PASSTHROUGH_KINDS:
        return False
    _flush_paragraph(ctx)
    ctx.output.append(line)
    return True


def _try_start_literal(ctx: ReflowContext, kind: LineKind, line: str) -> bool:
    if kind is not LineKind.LITERAL_PARAGRAPH_START:
        return False
    ctx.in_literal = True
    ctx.output.append(line)
    return True


def _try_admonition(ctx: ReflowContext, kind: LineKind, line: str) -> bool:
    if kind is not LineKind.ADMONITION:
        return False
    _flush_paragraph(ctx)
    match = ADMONITION_PATTERN.match(line)
    ctx.output.extend(render_admonition(match.group(1), match.group(2), ctx.width))
    return True


def reflow(document: str, width: int) -> str:
    """Rewrap the prose of an AsciiDoc document to a column width.

    Prose paragraphs, simple list items, definition-list items and single-line
    admonitions are rewrapped. Delimited blocks, tables, comments, literal
    paragraphs, structural lines and complex list items are copied unchanged.
    An unterminated block swallows the rest of the document verbatim.

    Args:
        document: Document text; ``\\n`` and ``\\r\\n`` are both accepted.
        width: Target column width. Continuation lines of hanging-indent
            constructs never get less than 20 columns.

    Returns:
        str: Reflowed text using ``\\n`` line endings, with a trailing newline
            only if the input had one.

    Examples:
        reflow("[source,python]\\n----\\nprint(1)\\n----\\n", 40)  # unchanged
        reflow("* a long item that wraps", 20)  # "* a long item that\\n  wraps"
    """
    lines, ends_with_newline = split_document(document)
    ctx = ReflowContext(width=width)

    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1

        if _try_pass_block_line(ctx, line):
            continue

        starts_paragraph = not ctx.paragraph and not ctx.in_literal
        kind = classify_line(line, starts_paragraph=starts_paragraph)

        if _try_end_paragraph(ctx, kind):
            continue
        if _try_continue_literal(ctx, line):
            continue
        if _try_toggle_block(ctx, kind, line):
            continue
        if _try_pass_structural(ctx, kind, line):
            continue
        if _try_start_literal(ctx, kind, line):
            continue
        if _try_admonition(ctx, kind, line):
            continue

        if kind in LIST_KINDS:
            _flush_paragraph(ctx)
            item, index = collect_list_item(lines, index - 1)
            ctx.output.extend(render_list_item(item, width))
            continue

        ctx.paragraph.append(line)

    _flush_paragraph(ctx)

    if ctx.block_state is not BlockState.NONE:
        logger.debug("Unterminated %s block consumed the rest of the document", ctx.block_state.name)

    return "\n".join(ctx.output) + ("\n" if ends_with_newline else "")
