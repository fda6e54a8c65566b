"""List and definition-list item collection."""

from __future__ import annotations

import string
from collections.abc import Sequence

from .classifier import classify_line
from .constants import CHECKLIST_PATTERN, DEFINITION_ITEM_PATTERN, LIST_ITEM_PATTERN
from .models import STRUCTURAL_KINDS, TOGGLE_STATES, LineKind, ListItem

# Lines that end an item without being consumed by it.
_ITEM_BOUNDARIES = STRUCTURAL_KINDS | frozenset(TOGGLE_STATES) | {LineKind.BLANK}


def marker_depth(marker: str) -> int:
    """Return the nesting depth implied by a list marker.

    Args:
        marker: Marker text such as ``"**"``, ``"1."``, or ``"a."``.

    Returns:
        int: Length of a repeated ``*``, ``+`` or ``-`` run; 1 for ordered,
            lettered and ``•`` markers; 0 for anything else.

    Examples:
        marker_depth("***")  # 3
        marker_depth("12.")  # 1
    """
    if not marker:
        return 0
    if marker[0] in "*+-" and marker == marker[0] * len(marker):
        return len(marker)
    if marker.endswith(".") and marker[:-1].isdigit():
        return 1
    if len(marker) == 2 and marker[0] in string.ascii_lowercase and marker[1] == ".":
        return 1
    if marker == "•":
        return 1
    return 0


def parse_list_head(line: str) -> ListItem | None:
    """Parse the first line of a list or definition-list item.

    A checklist token directly after a list marker is split off the first
    fragment and kept on the item.

    Args:
        line: Candidate item line.

    Returns:
        ListItem | None: Item holding only its head line, or None when the
            line starts neither kind of item.
    """
    match = LIST_ITEM_PATTERN.match(line)
    if match:
        text = match.group("text")
        checklist = None
        checklist_match = CHECKLIST_PATTERN.match(text)
        if checklist_match:
            checklist = f"[{checklist_match.group('state')}]"
            text = text[checklist_match.end() :]
        return ListItem(
            indent=match.group("indent"),
            marker=match.group("marker"),
            first_fragment=text,
            lines=[line],
            checklist=checklist,
        )

    match = DEFINITION_ITEM_PATTERN.match(line)
    if match:
        return ListItem(
            indent=match.group("indent"),
            marker=match.group("term").strip(),
            first_fragment=match.group("text"),
            lines=[line],
            definition=True,
        )

    return None


def _item_depth(item: ListItem) -> int:
    return 0 if item.definition else marker_depth(item.marker)


def collect_list_item(lines: Sequence[str], start: int) -> tuple[ListItem, int]:
    """Gather one list item starting at ``lines[start]``.

    The scan stops, without consuming the line, at a blank line, a block
    delimiter, a structural line, or a sibling item. A continuation marker is
    consumed as the last line of the item. Nested items and indented code are
    consumed and make the item complex.

    Args:
        lines: All document lines.
        start: Index of the item's first line.

    Returns:
        tuple[ListItem, int]: The item and the index of the first line after it.

    Examples:
        item, next_index = collect_list_item(["* a", "** b", "text"], 0)
        # item.complex is True, next_index == 3
    """
    item = parse_list_head(lines[start])
    if item is None:
        line = lines[start]
        return ListItem(indent="", marker="", first_fragment=line, lines=[line]), start + 1

    top_indent = item.indent_width
    top_depth = _item_depth(item)
    index = start + 1

    while index < len(lines):
        line = lines[index]
        kind = classify_line(line)

        if kind in _ITEM_BOUNDARIES:
            break

        if kind is LineKind.CONTINUATION_MARKER:
            item.complex = True
            item.lines.append(line)
            index += 1
            break

        if kind is LineKind.LIST_ITEM_START or kind is LineKind.DEF_LIST_ITEM_START:
            child = parse_list_head(line)
            if child.indent_width <= top_indent:
                if child.definition or _item_depth(child) <= top_depth:
                    break
            item.complex = True
            item.lines.append(line)
            index += 1
            continue

        if kind is LineKind.INDENTED_CODE:
            item.complex = True

        item.lines.append(line)
        index += 1

    return item, index
