"""Tests for CrateSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from cratekit.config.settings import CrateSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = CrateSettings.from_cli(search_from=[tmp_path])
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.dry_run is False
        assert settings.scaffold.cargo == "cargo"
        assert settings.scaffold.manifest_name == "Cargo.toml"
        assert settings.scaffold.template is None
        assert settings.scaffold.check_exit is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CrateSettings.from_cli(search_from=[tmp_path])
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "cratekit.toml").write_text(
            '[scaffold]\ntemplate = "layered"\ncheck_exit = false\n'
        )
        settings = CrateSettings.from_cli(search_from=[tmp_path])
        assert settings.scaffold.template == "layered"
        assert settings.scaffold.check_exit is False
        assert settings.scaffold.cargo == "cargo"  # default preserved

    def test_found_by_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / "cratekit.toml").write_text("dry_run = true\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        settings = CrateSettings.from_cli(search_from=[nested])
        assert settings.dry_run is True
        assert settings.config_path == tmp_path / "cratekit.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[scaffold]\ncargo = "cargo-nightly"\n')
        settings = CrateSettings.from_cli(config_path=str(custom))
        assert settings.scaffold.cargo == "cargo-nightly"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "cratekit.toml").write_text("[scaffold\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            CrateSettings.from_cli(search_from=[tmp_path])


class TestPriority:
    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "cratekit.toml").write_text("verbose = false\n")
        settings = CrateSettings.from_cli(search_from=[tmp_path], verbose=True)
        assert settings.verbose is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "cratekit.toml").write_text('[scaffold]\ncargo = "from-toml"\n')
        monkeypatch.setenv("CRATEKIT_SCAFFOLD__CARGO", "from-env")
        settings = CrateSettings.from_cli(search_from=[tmp_path])
        assert settings.scaffold.cargo == "from-env"

    def test_env_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CRATEKIT_DRY_RUN", "1")
        settings = CrateSettings.from_cli(search_from=[tmp_path])
        assert settings.dry_run is True

    def test_missing_explicit_config_uses_defaults(self, tmp_path: Path) -> None:
        settings = CrateSettings.from_cli(config_path=str(tmp_path / "absent.toml"))
        assert settings.config_path is None
        assert settings.scaffold.cargo == "cargo"


class TestSearchOrder:
    def test_first_location_wins(self, tmp_path: Path) -> None:
        ws = tmp_path / "ws"
        ws.mkdir()
        (ws / "cratekit.toml").write_text('[scaffold]\ncargo = "ws-cargo"\n')
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        (elsewhere / "cratekit.toml").write_text('[scaffold]\ncargo = "other-cargo"\n')
        settings = CrateSettings.from_cli(search_from=[ws / "new-dir", elsewhere])
        assert settings.scaffold.cargo == "ws-cargo"
