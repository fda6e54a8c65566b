"""
adoc-reflow: rewrap AsciiDoc prose to a column width.

Only prose is touched: paragraphs, simple list items, definition-list items and
single-line admonitions. Delimited blocks, tables, comments and structural
lines are copied through byte for byte.

CLI Usage:
    adoc-reflow README.adoc --width 72 --in-place

Library Usage:
    from pathlib import Path
    from adoc_reflow import reflow

    content = Path("README.adoc").read_text()
    print(reflow(content, 72), end="")
"""

from .blocks import advance_block_state
from .classifier import LINE_RULES, classify_line
from .collector import collect_list_item, marker_depth
from .editor import TextEdit, format_document, format_range, reflow_selection
from .exceptions import DocumentDecodeError, InvalidRangeError, ReflowError
from .models import BlockState, LineKind, ListItem
from .reflow import reflow
from .wrapper import wrap_text

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "reflow",
    "classify_line",
    "advance_block_state",
    "collect_list_item",
    "wrap_text",
    "marker_depth",
    "LINE_RULES",
    # Editor integration
    "TextEdit",
    "format_document",
    "format_range",
    "reflow_selection",
    # Data models
    "BlockState",
    "LineKind",
    "ListItem",
    # Exceptions
    "ReflowError",
    "DocumentDecodeError",
    "InvalidRangeError",
    # Version
    "__version__",
]
