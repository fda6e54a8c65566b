"""Golden corpus: input/expected document pairs checked against `reflow`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .constants import CORPUS_WIDTH
from .reflow import reflow

INPUT_PREFIX = "input-"
EXPECTED_PREFIX = "expected-"
CORPUS_SUFFIX = ".adoc"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorpusCase:
    """One fixture pair.

    Attributes:
        name: Fixture name, e.g. ``lists`` for ``input-lists.adoc``.
        input_path: Source document.
        expected_path: Expected reflow output.
    """

    name: str
    input_path: Path
    expected_path: Path


@dataclass(frozen=True)
class CorpusMismatch:
    """First difference between reflow output and the expected file.

    Attributes:
        name: Fixture name.
        line_number: One-based line of the first difference.
        got: Line produced by `reflow`.
        want: Line from the expected file.
    """

    name: str
    line_number: int
    got: str
    want: str

    def describe(self) -> str:
        return (
            f"Mismatch in '{self.name}' at line {self.line_number}\n"
            f"got : {self.got!r}\n"
            f"want: {self.want!r}"
        )


def discover_cases(directory: Path) -> list[CorpusCase]:
    """List the fixture pairs in a directory, sorted by name.

    Inputs without an expected file are still listed so that
    `update_corpus` can create it.
    """
    cases = []
    for input_path in sorted(directory.glob(f"{INPUT_PREFIX}*{CORPUS_SUFFIX}")):
        name = input_path.name[len(INPUT_PREFIX) : -len(CORPUS_SUFFIX)]
        expected_path = directory / f"{EXPECTED_PREFIX}{name}{CORPUS_SUFFIX}"
        cases.append(CorpusCase(name, input_path, expected_path))
    return cases


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def check_case(case: CorpusCase, width: int = CORPUS_WIDTH) -> CorpusMismatch | None:
    """Compare `reflow` output for one fixture against its expected file.

    Args:
        case: Fixture pair to check.
        width: Width passed to `reflow`.

    Returns:
        CorpusMismatch | None: The first differing line, or None on a match.

    Raises:
        OSError: If either file cannot be read.
    """
    got = reflow(_read(case.input_path), width)
    want = _read(case.expected_path)
    if got == want:
        return None

    got_lines = got.replace("\r\n", "\n").split("\n")
    want_lines = want.replace("\r\n", "\n").split("\n")
    for index in range(max(len(got_lines), len(want_lines))):
        got_line = got_lines[index] if index < len(got_lines) else ""
        want_line = want_lines[index] if index < len(want_lines) else ""
        if got_line != want_line:
            return CorpusMismatch(case.name, index + 1, got_line, want_line)

    # Only line endings differ.
    return CorpusMismatch(case.name, len(got_lines), got_lines[-1], want_lines[-1])


def update_corpus(directory: Path, width: int = CORPUS_WIDTH) -> list[Path]:
    """Regenerate every expected file from its input.

    Args:
        directory: Corpus directory.
        width: Width passed to `reflow`.

    Returns:
        list[Path]: Expected files written.
    """
    written = []
    for case in discover_cases(directory):
        case.expected_path.write_text(reflow(_read(case.input_path), width), encoding="utf-8")
        logger.debug("Updated %s", case.expected_path.name)
        written.append(case.expected_path)
    return written
