"""Constants used across the adoc-reflow package."""

from __future__ import annotations

import re

# Delimited blocks
GENERIC_FENCE_PATTERN = re.compile(r"^([._=*+\-])\1{3,}\s*$")
OPEN_BLOCK_PATTERN = re.compile(r"^--\s*$")
TABLE_FENCE_PATTERN = re.compile(r"^\|===\s*$")
COMMENT_BLOCK_PATTERN = re.compile(r"^////\s*$")

# Single-line structure
LINE_COMMENT_PATTERN = re.compile(r"^\s*//(?!//)\s?.*$")
HEADING_PATTERN = re.compile(r"^=+\s")
DOCUMENT_ATTRIBUTE_PATTERN = re.compile(r"^:[^:\s][^:]*:\s?.*$")
# "...." is a literal block delimiter, not a title.
BLOCK_TITLE_PATTERN = re.compile(r"^\.(?!\.{3,}\s*$)\S.*$")
BLOCK_ATTRIBUTE_PATTERN = re.compile(r"^\[[^\]]+\]\s*$")
ANCHOR_PATTERN = re.compile(r"^\s*\[\[[^\]]+\]\]\s*$")
CONDITIONAL_PATTERN = re.compile(r"^(ifdef|ifndef|ifeval|endif)::.*$")
INCLUDE_PATTERN = re.compile(r"^include::\S+\[.*\]\s*$")
BLOCK_MACRO_PATTERN = re.compile(
    r"^[a-z][\w+-]*:(?::)?(?:\S+)?\[[^\]]*\]\s*$", re.IGNORECASE | re.ASCII
)
HORIZONTAL_RULE_PATTERN = re.compile(r"^'{3,}\s*$")
PAGE_BREAK_PATTERN = re.compile(r"^<<<\s*$")

# Paragraph-level constructs
ADMONITION_PATTERN = re.compile(r"^(NOTE|TIP|IMPORTANT|WARNING|CAUTION):\s*(.*)$")
# Uppercase letters are left out so initials such as "M. Glushkov" stay prose.
LIST_ITEM_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)(?P<marker>\*{1,6}|\+{1,6}|-{1,6}|[0-9]+\.|[a-z]\.|•)\s+(?P<text>.*)$"
)
DEFINITION_ITEM_PATTERN = re.compile(r"^(?P<indent>[ \t]*)(?P<term>[^:]+)::\s*(?P<text>.*)$")
CONTINUATION_PATTERN = re.compile(r"^[ \t]*\+[ \t]*$")
CHECKLIST_PATTERN = re.compile(r"^\[(?P<state>[ xX-])\]\s+")
INDENTED_CODE_PATTERN = re.compile(r"^(\t| {4,})")
LITERAL_LINE_PATTERN = re.compile(r"^ \S.*$")

# Inline
HARD_BREAK_PATTERN = re.compile(r"\s\+$")
URL_TOKEN_PATTERN = re.compile(r"^[a-z]+://\S+$", re.IGNORECASE)

# Wrapping
MIN_WRAP_WIDTH = 20
CHECKLIST_MIN_HANGING = 8
SHORT_WORD_LENGTH = 2

# Host-facing defaults
DEFAULT_WIDTH = 80
MIN_HOST_WIDTH = 20
MAX_HOST_WIDTH = 200
CORPUS_WIDTH = 72
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
ASCIIDOC_EXTENSIONS = (".adoc", ".asciidoc", ".asc", ".ad", ".txt")
