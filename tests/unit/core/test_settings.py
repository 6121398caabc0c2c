"""Unit tests for persisted settings.

Tests for loading, saving and editing the settings file.
"""

import tomllib
from pathlib import Path

import pytest

from solclean.core.paths import APP_NAME
from solclean.core.settings import (
    DEFAULT_CLEAN_COMMAND,
    DEFAULT_PROJECT_PATTERNS,
    CleanupOptions,
    Settings,
    SettingsError,
    SettingsNotFoundError,
    SettingsParseError,
    TomlSettingsStore,
    load_settings,
    save_settings,
    set_setting,
    settings_to_dict,
)


class TestSettingsModel:
    """Tests for the settings models."""

    def test_defaults(self) -> None:
        """Default settings match the documented values."""
        settings = Settings()

        assert settings.cleanup.settle_delay_seconds == 5.0
        assert settings.cleanup.marker_suffix == ".refresh"
        assert settings.cleanup.native_clean_command == list(DEFAULT_CLEAN_COMMAND)
        assert settings.cleanup.external_root is None
        assert settings.workspace.project_patterns == list(DEFAULT_PROJECT_PATTERNS)
        assert settings.rules.delete_build_output_folders is True

    def test_settle_delay_bounds(self) -> None:
        """The settle delay must lie between 0 and 300 seconds."""
        assert CleanupOptions(settle_delay_seconds=0).settle_delay_seconds == 0

        with pytest.raises(ValueError):
            CleanupOptions(settle_delay_seconds=301)
        with pytest.raises(ValueError):
            CleanupOptions(settle_delay_seconds=-1)

    def test_external_root_expands_user(self) -> None:
        """A leading ~ in the external root is expanded."""
        options = CleanupOptions(external_root=Path("~/IISExpress"))

        assert options.external_root == Path.home() / "IISExpress"
        assert options.effective_external_root == Path.home() / "IISExpress"

    def test_default_external_root(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Without a configured root the documents folder is used."""
        monkeypatch.setenv("XDG_DOCUMENTS_DIR", str(tmp_path))

        assert CleanupOptions().effective_external_root == tmp_path / "IISExpress"


class TestLoadSave:
    """Tests for load_settings and save_settings."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        """Saved settings load back unchanged."""
        path = tmp_path / "nested" / "settings.toml"
        settings = set_setting(Settings(), "rules.delete_test_results_folder", "true")
        settings = set_setting(settings, "cleanup.external_root", str(tmp_path / "iis"))

        saved = save_settings(settings, path)

        assert saved == path
        assert load_settings(path) == settings

    def test_save_omits_unset_external_root(self, tmp_path: Path) -> None:
        """TOML has no null, so an unset external root is left out."""
        path = save_settings(Settings(), tmp_path / "settings.toml")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert "external_root" not in data["cleanup"]
        assert set(data) == {"rules", "cleanup", "workspace"}
        assert "external_root" not in settings_to_dict(Settings())["cleanup"]

    def test_save_leaves_no_temp_files(self, tmp_path: Path) -> None:
        """The atomic write cleans up after itself."""
        save_settings(Settings(), tmp_path / "settings.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["settings.toml"]

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises SettingsNotFoundError."""
        with pytest.raises(SettingsNotFoundError):
            load_settings(tmp_path / "settings.toml")

    def test_load_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML raises SettingsParseError."""
        path = tmp_path / "settings.toml"
        path.write_text("[rules\n")

        with pytest.raises(SettingsParseError, match="Invalid TOML"):
            load_settings(path)

    def test_load_unknown_key(self, tmp_path: Path) -> None:
        """Unknown keys are rejected."""
        path = tmp_path / "settings.toml"
        path.write_text("[rules]\ndelete_everything = true\n")

        with pytest.raises(SettingsError, match="Invalid settings content"):
            load_settings(path)

    def test_load_partial_file_uses_defaults(self, tmp_path: Path) -> None:
        """Tables and keys missing from the file take their defaults."""
        path = tmp_path / "settings.toml"
        path.write_text("[cleanup]\nsettle_delay_seconds = 2\n")

        settings = load_settings(path)

        assert settings.cleanup.settle_delay_seconds == 2
        assert settings.rules == Settings().rules


class TestSetSetting:
    """Tests for set_setting."""

    def test_boolean(self) -> None:
        """'true' and 'false' become booleans."""
        settings = set_setting(Settings(), "rules.run_on_workspace_close", "true")

        assert settings.rules.run_on_workspace_close is True

    def test_number(self) -> None:
        """Numbers are coerced."""
        settings = set_setting(Settings(), "cleanup.settle_delay_seconds", "0.5")

        assert settings.cleanup.settle_delay_seconds == 0.5

    def test_list_is_comma_separated(self) -> None:
        """List options take comma-separated values."""
        settings = set_setting(Settings(), "cleanup.native_clean_command", "msbuild, -t:Clean")

        assert settings.cleanup.native_clean_command == ["msbuild", "-t:Clean"]

    def test_original_is_unchanged(self) -> None:
        """set_setting returns a copy."""
        original = Settings()

        set_setting(original, "rules.delete_ide_metadata_folder", "true")

        assert original.rules.delete_ide_metadata_folder is False

    @pytest.mark.parametrize("key", ["rules", "rules.nope", "nope.delete_ide_metadata_folder"])
    def test_unknown_key(self, key: str) -> None:
        """Unknown keys raise SettingsError."""
        with pytest.raises(SettingsError, match="Unknown setting"):
            set_setting(Settings(), key, "true")

    def test_invalid_value(self) -> None:
        """Values failing validation raise SettingsError."""
        with pytest.raises(SettingsError, match="Invalid value"):
            set_setting(Settings(), "cleanup.settle_delay_seconds", "1000")


class TestTomlSettingsStore:
    """Tests for the file-backed settings store."""

    def test_default_path(self, config_home: Path) -> None:
        """The store uses the XDG settings path by default."""
        assert TomlSettingsStore().path == config_home / APP_NAME / "settings.toml"

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Without a file the defaults apply."""
        store = TomlSettingsStore(tmp_path / "settings.toml")

        assert store.load() == Settings()
        assert store.snapshot() == Settings().rules

    def test_snapshot_rereads_the_file(self, tmp_path: Path) -> None:
        """Edits to the file show up in the next snapshot."""
        store = TomlSettingsStore(tmp_path / "settings.toml")
        first = store.snapshot()

        save_settings(
            set_setting(Settings(), "rules.delete_test_results_folder", "true"), store.path
        )
        second = store.snapshot()

        assert first.delete_test_results_folder is False
        assert second.delete_test_results_folder is True

    def test_invalid_file_raises(self, tmp_path: Path) -> None:
        """An existing but broken file is an error, not defaults."""
        path = tmp_path / "settings.toml"
        path.write_text("not toml = [")

        with pytest.raises(SettingsError):
            TomlSettingsStore(path).load()
