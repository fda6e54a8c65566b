from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from adoc_reflow.config import (
    ConfigError,
    ReflowConfig,
    apply_overrides,
    build_config,
    effective_width,
    load_config,
    validate_config,
)
from adoc_reflow.editor import clamp_width


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".adoc-reflow.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.adoc-reflow]
        width = 72
        min-width = 30
        max_width = 100
        max-file-size = 2048
        """,
    )

    config = load_config(tmp_path)

    assert config == ReflowConfig(width=72, min_width=30, max_width=100, max_file_size=2048)


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [adoc-reflow]
        width = 60
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.width == 60


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.adoc-reflow]
        width = 66
        """,
    )

    assert load_config(tmp_path).width == 66


def test_pyproject_takes_precedence_over_dotfile(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.adoc-reflow]
        width = 90
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [adoc-reflow]
        width = 60
        """,
    )

    assert load_config(tmp_path).width == 90


def test_pyproject_without_table_is_ignored(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [project]
        name = "docs"
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [adoc-reflow]
        width = 60
        """,
    )

    assert load_config(tmp_path).width == 60


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.adoc-reflow]
        width = 100
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.width == 100


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.adoc-reflow]
        width = 100
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.adoc-reflow]
        """,
    )

    config = load_config(child)

    assert config.width == ReflowConfig().width


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    config = load_config(tmp_path)

    assert config == ReflowConfig()
    assert config.width == 80


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.adoc-reflow]
        width = 64
        """,
    )

    nested = invalid_dir / "child"
    nested.mkdir()
    config = load_config(nested)

    assert config.width == 64


def test_load_config_errors_on_unknown_key(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.adoc-reflow]
        width = 72
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError, match=r"tool\.adoc-reflow"):
        load_config(tmp_path)


def test_load_config_errors_on_non_table(tmp_path: Path):
    _write_dotfile(tmp_path, 'adoc-reflow = "wide"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("config", "expected"),
    [
        (ReflowConfig(width=10), 20),
        (ReflowConfig(width=72), 72),
        (ReflowConfig(width=500), 200),
        (ReflowConfig(width=50, min_width=60, max_width=90), 60),
    ],
)
def test_effective_width_clamps(config: ReflowConfig, expected: int):
    assert effective_width(config) == expected


def test_effective_width_matches_host_clamp():
    config = ReflowConfig(width=150, min_width=30, max_width=120)

    assert effective_width(config) == clamp_width(150, 30, 120) == 120


def test_apply_overrides_ignores_none():
    config = ReflowConfig(width=72)

    assert apply_overrides(config, width=None) is config
    assert apply_overrides(config, width=40).width == 40


def test_apply_overrides_rejects_unknown_field():
    with pytest.raises(TypeError):
        apply_overrides(ReflowConfig(), columns=40)


def test_build_config_applies_overrides(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.adoc-reflow]
        width = 72
        """,
    )

    assert build_config(tmp_path).width == 72
    assert build_config(tmp_path, width=100).width == 100


def test_build_config_validates(tmp_path: Path):
    with pytest.raises(ConfigError, match="positive"):
        build_config(tmp_path, width=0)


@pytest.mark.parametrize(
    "config",
    [
        ReflowConfig(width=0),
        ReflowConfig(width=-5),
        ReflowConfig(min_width=0),
        ReflowConfig(min_width=50, max_width=40),
        ReflowConfig(max_file_size=0),
    ],
)
def test_validate_config_rejects_invalid_values(config: ReflowConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


@pytest.mark.parametrize(
    "config",
    [
        ReflowConfig(width="wide"),  # type: ignore[arg-type]
        ReflowConfig(width=True),  # type: ignore[arg-type]
        ReflowConfig(min_width=1.5),  # type: ignore[arg-type]
        ReflowConfig(max_file_size="big"),  # type: ignore[arg-type]
    ],
)
def test_validate_config_rejects_non_integer_values(config: ReflowConfig):
    with pytest.raises(ConfigError):
        validate_config(config)
