"""Width-constrained wrapping of paragraphs, list items and admonitions."""

from __future__ import annotations

from .classifier import classify_line
from .constants import (
    CHECKLIST_MIN_HANGING,
    HARD_BREAK_PATTERN,
    MIN_WRAP_WIDTH,
    SHORT_WORD_LENGTH,
    URL_TOKEN_PATTERN,
)
from .models import LineKind, ListItem

# Kinds a wrapped continuation line may take without changing the structure.
_TEXT_KINDS = frozenset({LineKind.PROSE, LineKind.INDENTED_CODE})


def is_url_token(token: str) -> bool:
    """Return True for ``scheme://rest`` tokens, which are never split."""
    return URL_TOKEN_PATTERN.match(token) is not None


def _split_long_words(words: list[str], width: int) -> list[str]:
    chunk = max(1, width)
    tokens: list[str] = []
    for word in words:
        if is_url_token(word) or len(word) < width:
            tokens.append(word)
        else:
            tokens.extend(word[index : index + chunk] for index in range(0, len(word), chunk))
    return tokens


def _fits(tokens: list[str], start: int, end: int, width: int) -> bool:
    return len(" ".join(tokens[start:end])) <= width


def _greedy_end(tokens: list[str], start: int, width: int) -> int:
    """Return the index just past the last token packed on a line from `start`.

    A line always takes at least one token. When the line is closed on a
    token of at most two characters, that token moves down to the next line
    if it fits there together with the token that did not fit.
    """
    end = start + 1
    length = len(tokens[start])
    while end < len(tokens) and length + 1 + len(tokens[end]) <= width:
        length += 1 + len(tokens[end])
        end += 1

    if end < len(tokens) and end - start > 1:
        short, following = tokens[end - 1], tokens[end]
        if len(short) <= SHORT_WORD_LENGTH and len(short) + 1 + len(following) <= width:
            end -= 1
    return end


class _LinePacker:
    """Greedy packer that keeps every wrapped line readable as plain text.

    A continuation line must classify as prose (or indented code, under a deep
    hanging indent); otherwise a leading ``-``, ``*`` or ``1.`` would turn it
    into a list item the next time the document is read. When a greedy break
    produces such a line the break is moved: the leading token goes up to the
    previous line, or words come down from it, or the token is left alone on
    its own line. A break that cannot be moved is kept.
    """

    def __init__(self, tokens: list[str], width: int, hanging: str, paragraph_start: bool):
        self.tokens = tokens
        self.width = width
        self.hanging = hanging
        self.paragraph_start = paragraph_start
        self.bounds: list[tuple[int, int]] = []

    def reads_as_text(self, index: int, start: int, end: int) -> bool:
        line = " ".join(self.tokens[start:end])
        if index == 0:
            if not self.paragraph_start:
                return True
            return classify_line(line, starts_paragraph=True) is LineKind.PROSE
        return classify_line(self.hanging + line) in _TEXT_KINDS

    def pack(self) -> list[str]:
        start = 0
        while start < len(self.tokens):
            end = _greedy_end(self.tokens, start, self.width)
            if not self.reads_as_text(len(self.bounds), start, end):
                start, end = self._move_break(start, end)
            if start < end:
                self.bounds.append((start, end))
            start = end
        return [" ".join(self.tokens[start:end]) for start, end in self.bounds]

    def _move_break(self, start: int, end: int) -> tuple[int, int]:
        if self.bounds:
            settled = self._pull_up(start) or self._push_down(start)
            if settled is not None:
                return settled
        if end - start > 1 and self.reads_as_text(len(self.bounds), start, start + 1):
            return start, start + 1
        return start, end

    def _settle(self, start: int) -> tuple[int, int] | None:
        """Try breaking before `start`, extending or shortening the previous line."""
        index = len(self.bounds)
        previous_start = self.bounds[-1][0]
        if not self.reads_as_text(index - 1, previous_start, start):
            return None
        if start == len(self.tokens):
            self.bounds[-1] = (previous_start, start)
            return start, start
        end = _greedy_end(self.tokens, start, self.width)
        if not self.reads_as_text(index, start, end):
            return None
        self.bounds[-1] = (previous_start, start)
        return start, end

    def _pull_up(self, start: int) -> tuple[int, int] | None:
        previous_start, _ = self.bounds[-1]
        for moved in range(start + 1, len(self.tokens) + 1):
            if not _fits(self.tokens, previous_start, moved, self.width):
                return None
            settled = self._settle(moved)
            if settled is not None:
                return settled
        return None

    def _push_down(self, start: int) -> tuple[int, int] | None:
        previous_start, _ = self.bounds[-1]
        for moved in range(start - 1, previous_start, -1):
            settled = self._settle(moved)
            if settled is not None:
                return settled
        return None


def wrap_text(
    text: str, width: int, hanging: str = "", paragraph_start: bool = False
) -> list[str]:
    """Greedily pack whitespace-separated tokens into lines.

    Rules applied while packing:

    * a URL token is never split, and sits alone on its line when it does not
      fit;
    * any other token at least ``width`` long is cut into ``width``-sized
      chunks;
    * when a line is closed on a token of at most two characters, that token
      moves to the start of the next line, provided it is not the only token
      and the pair still fits;
    * no continuation line may start like a list item, a comment or any other
      structural line.

    Args:
        text: Text to wrap; runs of whitespace are collapsed.
        width: Maximum line length, excluding the hanging prefix.
        hanging: Prefix added to every line after the first.
        paragraph_start: Whether the first line also starts a paragraph and
            must read back as prose.

    Returns:
        list[str]: Wrapped lines. Empty when ``text`` holds no tokens.

    Examples:
        wrap_text("one two three", 8)  # ["one two", "three"]
        wrap_text("alpha beta gamma", 11, "  ")  # ["alpha beta", "  gamma"]
        wrap_text("see the list - it wraps", 14)  # ["see the list -", "it wraps"]
    """
    tokens = _split_long_words(text.split(), width)
    lines = _LinePacker(tokens, width, hanging, paragraph_start).pack()
    return [entry if index == 0 else hanging + entry for index, entry in enumerate(lines)]


def _join_body(first: str, rest: list[str]) -> str:
    return " ".join([first, *(line.strip() for line in rest)])


def _render_with_head(head: str, body: str, hanging_width: int, width: int) -> list[str]:
    wrapped = wrap_text(body, max(MIN_WRAP_WIDTH, width - hanging_width), " " * hanging_width)
    if not wrapped:
        return [head.rstrip()]
    return [head + wrapped[0], *wrapped[1:]]


def render_list_item(item: ListItem, width: int) -> list[str]:
    """Render a collected list item.

    Complex items come back as their source lines. Simple items are rewrapped
    under a hanging indent as wide as the head (``indent + marker + " "``,
    plus the checklist token, with at least 8 columns for checklist items) or
    ``indent + term + ":: "`` for definition lists.

    Args:
        item: Item produced by the collector.
        width: Target width.

    Returns:
        list[str]: Output lines.

    Examples:
        render_list_item(parse_list_head("* [x] done"), 40)  # ["* [x] done"]
    """
    if item.complex:
        return list(item.lines)

    body = _join_body(item.first_fragment, item.lines[1:])

    if item.definition:
        head = f"{item.indent}{item.marker}:: "
        return _render_with_head(head, body, len(head), width)

    head = f"{item.indent}{item.marker} "
    hanging_width = len(head)
    if item.checklist:
        head += f"{item.checklist} "
        hanging_width = max(len(head), CHECKLIST_MIN_HANGING)
    return _render_with_head(head, body, hanging_width, width)


def render_admonition(label: str, body: str, width: int) -> list[str]:
    """Wrap a single-line admonition under its ``LABEL: `` prefix.

    Args:
        label: Admonition label such as ``NOTE``.
        body: Text after the label.
        width: Target width.

    Returns:
        list[str]: Output lines; just ``LABEL:`` when the body is empty.
    """
    head = f"{label}: "
    return _render_with_head(head, body, len(head), width)


def has_hard_breaks(lines: list[str]) -> bool:
    """Return True when any line ends in a `` +`` hard line break."""
    return any(HARD_BREAK_PATTERN.search(line) for line in lines)


def reflow_paragraph(lines: list[str], width: int) -> list[str]:
    """Rewrap a run of prose lines.

    Paragraphs containing a hard line break are returned unchanged.

    Args:
        lines: Prose lines of one paragraph.
        width: Target width.

    Returns:
        list[str]: Output lines.

    Examples:
        reflow_paragraph(["Line one +", "line two"], 20)  # unchanged
    """
    if not lines:
        return []
    if has_hard_breaks(lines):
        return list(lines)
    return wrap_text(" ".join(lines), width, paragraph_start=True)
