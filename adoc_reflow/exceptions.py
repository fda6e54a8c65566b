"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class ReflowError(ValueError):
    """Base class for errors raised around the reflow engine.

    The engine itself accepts any string; these errors come from reading
    documents and addressing ranges inside them.
    """


class DocumentDecodeError(ReflowError):
    """Raised when a document is not valid UTF-8.

    Args:
        filepath: Path of the document.
        reason: Decoder message.
    """

    def __init__(self, filepath: Path, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"Invalid UTF-8 sequence in {filepath}: {reason}")


class InvalidRangeError(ReflowError):
    """Raised when a row range does not fit the document.

    Args:
        start_line: Zero-based first row.
        end_line: Zero-based last row (inclusive).
        line_count: Number of rows in the document.
    """

    def __init__(self, start_line: int, end_line: int, line_count: int):
        self.start_line = start_line
        self.end_line = end_line
        self.line_count = line_count
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Invalid line range {self.start_line + 1}-{self.end_line + 1} "
            f"for a document of {self.line_count} lines"
        )
