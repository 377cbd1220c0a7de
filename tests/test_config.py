"""Tests for specdoc.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from specdoc.config import (
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
    write_atomic,
)
from specdoc.exceptions import ConfigError
from specdoc.models import GlobalConfig, OutputConfig


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specdoc.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        path = get_config_dir()
        assert path == tmp_path / "xdg" / "specdoc"
        assert path.is_dir()

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specdoc.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_data_dir() == tmp_path / ".local" / "share" / "specdoc"

    def test_fallback_dirs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specdoc.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".specdoc"
        assert get_data_dir() == tmp_path / ".specdoc" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestWriteAtomic:

    def test_creates_file_and_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "deep" / "dir" / "apis.json"
        write_atomic(target, "[]\n")
        assert target.read_text(encoding="utf-8") == "[]\n"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "models.json"
        target.write_text("old", encoding="utf-8")
        write_atomic(target, "new ✓")
        assert target.read_text(encoding="utf-8") == "new ✓"

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        with patch("specdoc.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                write_atomic(target, "will fail")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Global and project config
# ---------------------------------------------------------------------------


class TestGlobalConfig:

    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        assert load_global_config() == GlobalConfig()

    def test_round_trip(self, isolated_config: Path) -> None:
        config = GlobalConfig(output=OutputConfig(format="json"))
        config.heuristics.record_fields = ["rows"]
        save_global_config(config)

        loaded = load_global_config()
        assert loaded.output.format == "json"
        assert loaded.heuristics.record_fields == ["rows"]

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        path = isolated_config / "config" / "specdoc" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{broken", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_validation_failure_raises(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "specdoc" / "config.json",
            {"heuristics": {"pagination_params": "page"}},
        )
        with pytest.raises(ConfigError):
            load_global_config()


class TestProjectConfig:

    def test_missing_returns_none(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_non_object_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specdoc.json", ["not", "an", "object"])
        with pytest.raises(ConfigError, match="must be a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:

    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config().output.format == "auto"

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(output=OutputConfig(format="plain")))
        _write_json(
            isolated_config / "specdoc.json",
            {"heuristics": {"pagination_params": ["cursor"]}},
        )
        config = resolve_config()

        assert config.output.format == "plain"
        assert config.heuristics.pagination_params == ["cursor"]

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "specdoc.json", {"output": {"format": "plain"}})
        monkeypatch.setenv("SPECDOC_OUTPUT_FORMAT", "json")
        assert resolve_config().output.format == "json"

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SPECDOC_OUTPUT_FORMAT", "json")
        assert resolve_config(cli_format="plain").output.format == "plain"

    def test_invalid_project_values_raise(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specdoc.json", {"output": {"format": 3}})
        with pytest.raises(ConfigError, match="Invalid project config"):
            resolve_config()
