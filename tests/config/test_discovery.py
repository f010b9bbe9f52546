"""Tests for cratekit.toml discovery."""

from pathlib import Path

import pytest

from cratekit.config.discovery import CONFIG_ENV_VAR, config_candidates, find_config


class TestConfigCandidates:
    def test_walks_to_root(self, tmp_path: Path) -> None:
        candidates = list(config_candidates(tmp_path / "a"))
        assert candidates[0] == tmp_path / "a" / "cratekit.toml"
        assert candidates[1] == tmp_path / "cratekit.toml"
        assert candidates[-1] == Path(tmp_path.anchor) / "cratekit.toml"

    def test_start_need_not_exist(self, tmp_path: Path) -> None:
        start = tmp_path / "not" / "yet"
        assert next(config_candidates(start)) == start / "cratekit.toml"


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        (tmp_path / "cratekit.toml").write_text("")
        assert find_config(tmp_path) == tmp_path / "cratekit.toml"

    def test_walks_up_from_missing_location(self, tmp_path: Path) -> None:
        (tmp_path / "cratekit.toml").write_text("")
        assert find_config(tmp_path / "ws" / "new") == tmp_path / "cratekit.toml"

    def test_first_start_wins(self, tmp_path: Path) -> None:
        near = tmp_path / "near"
        far = tmp_path / "far"
        for directory in (near, far):
            directory.mkdir()
            (directory / "cratekit.toml").write_text("")
        assert find_config(near, far) == near / "cratekit.toml"
        assert find_config(far, near) == far / "cratekit.toml"

    def test_falls_through_to_later_start(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        other = tmp_path / "other"
        other.mkdir()
        (other / "cratekit.toml").write_text("")
        # tmp_path itself has no config, so the walk from "empty" finds nothing.
        assert find_config(empty, other) == other / "cratekit.toml"

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "cratekit.toml").write_text("")
        monkeypatch.chdir(tmp_path)
        assert find_config() == tmp_path / "cratekit.toml"

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        other = tmp_path / "elsewhere.toml"
        other.write_text("")
        (tmp_path / "cratekit.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "cratekit.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None
