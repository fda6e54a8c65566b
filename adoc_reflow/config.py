"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_WIDTH, MAX_HOST_WIDTH, MIN_HOST_WIDTH
from .editor import clamp_width

# Files consulted in each directory, and the tables read from them, in order.
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", "adoc-reflow"),)),
    (".adoc-reflow.toml", (("adoc-reflow",), ("tool", "adoc-reflow"))),
)


@dataclass
class ReflowConfig:
    """Settings shared by the CLI and the corpus tools.

    Attributes:
        width: Requested wrap column.
        min_width: Narrower requests are raised to this width.
        max_width: Wider requests are lowered to this width.
        max_file_size: Largest document, in bytes, that will be read.

    Examples:
        ReflowConfig(width=72)
    """

    width: int = DEFAULT_WIDTH
    min_width: int = MIN_HOST_WIDTH
    max_width: int = MAX_HOST_WIDTH
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Raised for unreadable tables and invalid values.

    Examples:
        raise ConfigError("`max_width` must be >= `min_width`")
    """


def load_config(search_path: Path) -> ReflowConfig:
    """Find the closest configuration table above `search_path`.

    Each directory from `search_path` up to the filesystem root is checked
    for the files in `CONFIG_SOURCES`; the first table found wins, even an
    empty one. Files that are not valid TOML are ignored.

    Args:
        search_path: Directory where the search starts.

    Returns:
        ReflowConfig: Loaded settings, or defaults when nothing is found.

    Raises:
        ConfigError: If a table is not a mapping or has unknown keys.

    Examples:
        load_config(Path("docs"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config = _config_from_file(directory / filename, table_paths)
            if config is not None:
                return config
    return ReflowConfig()


def _read_toml(config_file: Path) -> dict | None:
    if not config_file.is_file():
        return None
    try:
        with open(config_file, "rb") as stream:
            return tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def _table_at(data: dict, table_path: tuple[str, ...]) -> tuple[bool, object]:
    node: object = data
    for key in table_path:
        if not isinstance(node, dict) or key not in node:
            return False, None
        node = node[key]
    return True, node


def _config_from_file(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> ReflowConfig | None:
    data = _read_toml(config_file)
    if data is None:
        return None

    for table_path in table_paths:
        found, table = _table_at(data, table_path)
        if found:
            return _config_from_table(table, f"[{'.'.join(table_path)}]", config_file)
    return None


def _config_from_table(table: object, table_name: str, config_file: Path) -> ReflowConfig:
    error_message = f"Invalid `{table_name}` settings in {config_file}"
    if not isinstance(table, dict):
        raise ConfigError(error_message)

    # TOML keys may use dashes.
    settings = {key.replace("-", "_"): value for key, value in table.items()}
    try:
        return ReflowConfig(**settings)
    except TypeError as error:
        raise ConfigError(error_message) from error


def validate_config(config: ReflowConfig) -> None:
    """Check that every setting is a positive integer and the bounds are ordered.

    Raises:
        ConfigError: On the first invalid value.

    Examples:
        validate_config(ReflowConfig(width=72))
    """
    for name, value in asdict(config).items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{name}` must be an integer")
        if value <= 0:
            raise ConfigError(f"`{name}` must be a positive integer")

    if config.max_width < config.min_width:
        raise ConfigError("`max_width` must be >= `min_width`")


def effective_width(config: ReflowConfig) -> int:
    """Return `config.width` clamped into ``[min_width, max_width]``."""
    return clamp_width(config.width, config.min_width, config.max_width)


def apply_overrides(config: ReflowConfig, **overrides: object) -> ReflowConfig:
    """Return `config` with the non-None overrides applied.

    Raises:
        TypeError: If an override does not name a `ReflowConfig` field.

    Examples:
        apply_overrides(config, width=100, max_file_size=None)
    """
    known = {field.name for field in fields(ReflowConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise TypeError(f"Unknown configuration fields: {', '.join(unknown)}")

    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config


def build_config(search_path: Path, **overrides: object) -> ReflowConfig:
    """Load, override and validate settings for a document directory.

    Raises:
        ConfigError: If loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), width=72)
    """
    config = apply_overrides(load_config(search_path), **overrides)
    validate_config(config)
    return config
