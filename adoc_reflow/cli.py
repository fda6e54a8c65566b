"""
Reflows the prose of an AsciiDoc file to a column width.
Prints the result to stdout, rewrites the file with --in-place, or only reports
with --check.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config, effective_width
from .corpus import check_case, discover_cases, update_corpus
from .constants import CORPUS_WIDTH
from .editor import reflow_selection
from .exceptions import ReflowError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    read_document,
    write_document,
)
from .reflow import reflow

__all__ = ["cli", "corpus_cli"]

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_line_range(value: str) -> tuple[int, int]:
    start, sep, end = value.partition(":")
    if not sep:
        raise click.BadParameter("expected START:END", param_hint="--lines")
    try:
        start_line, end_line = int(start), int(end)
    except ValueError as error:
        raise click.BadParameter("START and END must be integers", param_hint="--lines") from error
    if start_line < 1 or end_line < start_line:
        raise click.BadParameter(
            "START must be >= 1 and END must be >= START", param_hint="--lines"
        )
    return start_line - 1, end_line - 1


@click.command()
@click.version_option()
@click.option("--width", type=int, help="Wrap column (clamped to the configured bounds)")
@click.option(
    "--line",
    "line_number",
    type=click.IntRange(min=1),
    help="Reflow only the paragraph containing this 1-based line",
)
@click.option("--lines", "line_range", help="Reflow only lines START:END (1-based, inclusive)")
@click.option("--in-place", is_flag=True, help="Rewrite the file instead of printing")
@click.option("--check", is_flag=True, help="Exit with status 1 if the file would change")
@click.option("--verbose", "-v", is_flag=True, help="Print debug messages to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    width: int | None = None,
    line_number: int | None = None,
    line_range: str | None = None,
    in_place: bool = False,
    check: bool = False,
    verbose: bool = False,
):
    """
    Entry point for reflowing an AsciiDoc document.

    Args:
        filepath: Path to the AsciiDoc file to process.
        width: Override for the configured wrap column.
        line_number: Reflow only the paragraph around this 1-based line.
        line_range: Reflow only the given ``START:END`` lines.
        in_place: Rewrite the file when the result differs.
        check: Report whether the file would change without writing it.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths, ranges
            or configuration values.
        click.ClickException: If the file cannot be read or rewritten safely.

    Examples:
        adoc-reflow docs/index.adoc --width 72 --in-place
    """
    _configure_logging(verbose)

    if line_number is not None and line_range is not None:
        raise click.BadParameter("--line and --lines are mutually exclusive")
    if in_place and check:
        raise click.BadParameter("--in-place and --check are mutually exclusive")

    base_dir = Path.cwd().resolve()
    try:
        path = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(path.parent, width=width)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error
    target_width = effective_width(config)

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(path)
        enforce_file_size(initial_stat, max_file_size, path)
        original = read_document(path)
    except (IOError, ReflowError) as error:
        raise click.ClickException(str(error)) from error

    logger.debug("Reflowing %s at width %d", path, target_width)
    try:
        if line_number is not None:
            result = reflow_selection(original, line_number - 1, width=target_width)
        elif line_range is not None:
            start_line, end_line = _parse_line_range(line_range)
            result = reflow_selection(original, start_line, end_line, width=target_width)
        else:
            result = reflow(original, target_width)
    except ReflowError as error:
        raise click.BadParameter(str(error)) from error

    changed = result != original

    if check:
        if changed:
            click.echo(f"{path.name} would be reflowed", err=True)
            click.get_current_context().exit(1)
        return

    if in_place:
        if not changed:
            click.echo(f"{path.name} is already formatted", err=True)
            return
        try:
            write_document(
                path,
                result,
                initial_stat,
                warn=lambda message: click.echo(message, err=True),
            )
        except IOError as error:
            raise click.ClickException(str(error)) from error
        return

    click.echo(result, nl=False)


@click.command()
@click.option("--width", type=int, default=CORPUS_WIDTH, show_default=True, help="Wrap column")
@click.option("--update", is_flag=True, help="Regenerate expected files from the inputs")
@click.option("--verbose", "-v", is_flag=True, help="Print debug messages to stderr")
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
def corpus_cli(directory: str, width: int = CORPUS_WIDTH, update: bool = False, verbose: bool = False):
    """
    Check (or regenerate with --update) a golden corpus of
    ``input-<name>.adoc`` / ``expected-<name>.adoc`` pairs.

    Examples:
        adoc-reflow-corpus tests/corpus
        adoc-reflow-corpus tests/corpus --update
    """
    _configure_logging(verbose)
    corpus_dir = Path(directory)

    if update:
        for written in update_corpus(corpus_dir, width):
            click.echo(f"Updated {written.name}")
        return

    cases = discover_cases(corpus_dir)
    if not cases:
        raise click.ClickException(f"No input-*.adoc files in {corpus_dir}")

    failures = 0
    for case in cases:
        try:
            mismatch = check_case(case, width)
        except OSError as error:
            raise click.ClickException(str(error)) from error
        if mismatch is None:
            click.echo(f"ok   {case.name}")
        else:
            failures += 1
            click.echo(f"FAIL {mismatch.describe()}")

    if failures:
        raise click.ClickException(f"{failures} of {len(cases)} corpus cases failed")


if __name__ == "__main__":
    cli()
