"""Safe reading and rewriting of AsciiDoc documents.

Every document passes through the same guards before the engine sees it: it
must resolve inside the working directory without symlinks, carry an AsciiDoc
extension, be a regular file, and stay under the size limit. Rewrites go
through a temporary file in the same directory and are refused when the
document changed after it was read.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .constants import ASCIIDOC_EXTENSIONS, DEFAULT_MAX_FILE_SIZE
from .exceptions import DocumentDecodeError

MAX_FILE_SIZE_ENV_VAR = "ADOC_REFLOW_MAX_FILE_SIZE"

logger = logging.getLogger(__name__)


def _positive_int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default

    try:
        value = int(raw)
    except ValueError as error:
        raise ValueError(f"Invalid value for {name}: {raw} (expected positive integer)") from error

    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}.")
    return value


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the size limit in bytes, honouring ``ADOC_REFLOW_MAX_FILE_SIZE``.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["ADOC_REFLOW_MAX_FILE_SIZE"] = "204800"
        get_max_file_size()  # 204800
    """
    return _positive_int_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def _is_symlink(path: Path) -> bool:
    try:
        return path.is_symlink()
    except OSError:
        return False


def contains_symlink(path: Path) -> bool:
    """Return True when `path` or any of its parents is a symlink."""
    return any(_is_symlink(candidate) for candidate in (path, *path.parents))


def _resolve_existing(path: Path) -> Path:
    try:
        return path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve a user-supplied document path and check it may be processed.

    Args:
        raw_path: Absolute or relative path, ``~`` allowed.
        base_dir: Directory the document must live under.

    Returns:
        Path: Resolved absolute path.

    Raises:
        ValueError: If the path traverses a symlink, does not exist, is not a
            regular file, lies outside `base_dir`, or lacks an AsciiDoc
            extension.

    Examples:
        normalize_filepath("docs/index.adoc", Path.cwd())
    """
    path = Path(raw_path).expanduser()
    if contains_symlink(path):
        raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    resolved = _resolve_existing(path)
    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")

    if resolved.suffix.lower() not in ASCIIDOC_EXTENSIONS:
        supported = ", ".join(ASCIIDOC_EXTENSIONS)
        raise ValueError(
            f"{resolved} is not an AsciiDoc file.\nSupported extensions are: {supported}"
        )
    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Stat a document without following symlinks.

    Raises:
        IOError: If the path cannot be read, is a symlink, or is not a
            regular file.
    """
    try:
        snapshot = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(snapshot.st_mode):
        raise IOError(f"Symlinks are not supported: {filepath}.")
    if not stat.S_ISREG(snapshot.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    return snapshot


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Raise IOError when the document is larger than `max_size` bytes."""
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")


def _fingerprint(snapshot: os.stat_result) -> tuple:
    return (
        getattr(snapshot, "st_ino", None),
        getattr(snapshot, "st_dev", None),
        snapshot.st_size,
        snapshot.st_mtime_ns,
    )


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Raise IOError when two snapshots of a document differ.

    Inode, device, size and modification time are compared.
    """
    if _fingerprint(expected_stat) != _fingerprint(current_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def safe_read(filepath: Path) -> TextIO:
    """Open a document as UTF-8 without newline translation.

    ``\\r\\n`` reaches the engine as written; the engine normalises it.

    Raises:
        IOError: If the document cannot be opened.
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error


def read_document(filepath: Path) -> str:
    """Read a whole document.

    Raises:
        DocumentDecodeError: If the bytes are not valid UTF-8.
        IOError: If the document cannot be opened.
    """
    try:
        with safe_read(filepath) as handle:
            return handle.read()
    except UnicodeDecodeError as error:
        raise DocumentDecodeError(filepath, str(error)) from error


def _keep_ownership(
    temp_name: str,
    expected_stat: os.stat_result,
    filepath: Path,
    warn: Callable[[str], None] | None,
):
    uid = getattr(expected_stat, "st_uid", None)
    gid = getattr(expected_stat, "st_gid", None)
    if uid is None or gid is None or not hasattr(os, "chown"):
        return
    try:
        os.chown(temp_name, uid, gid)
    except PermissionError:
        # Only root can hand a file to another owner.
        if warn is not None:
            warn(
                f"Warning: Could not preserve file ownership for {filepath.name} "
                "(requires elevated privileges)"
            )


def write_document(
    filepath: Path,
    content: str,
    expected_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Atomically replace a document with reflowed text.

    The new text is written to a sibling temporary file that takes over the
    mode (and, where permitted, the owner) of the document, then moved over
    it. The access time is restored afterwards.

    Args:
        filepath: Document to replace.
        content: Text to write, newlines untranslated.
        expected_stat: Snapshot taken before the document was read.
        warn: Receives non-fatal warnings, such as lost ownership.

    Raises:
        IOError: If the document changed since `expected_stat` or cannot be
            stat'ed.

    Examples:
        write_document(Path("index.adoc"), reflowed, collect_file_stat(Path("index.adoc")))
    """
    ensure_file_unchanged(expected_stat, collect_file_stat(filepath), filepath)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", newline="", delete=False, dir=filepath.parent
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
            os.chmod(handle.name, stat.S_IMODE(expected_stat.st_mode))
            _keep_ownership(handle.name, expected_stat, filepath, warn)

        os.replace(temp_path, filepath)
        logger.debug("Replaced %s (%d characters)", filepath, len(content))

        written = filepath.stat()
        os.utime(filepath, ns=(expected_stat.st_atime_ns, written.st_mtime_ns))
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
