from datetime import time
import sys

import pytest
import yaml

from touchfish.config import (
    APP_NAME,
    CONFIG_FILENAME,
    ConfigError,
    default_config_path,
    load_window,
    store_window,
)
from touchfish.validation import DEFAULT_WINDOW, InvalidWindowError, TimeWindow


class TestConfigPath:

    def test_env_override(self, config_dir):
        assert default_config_path() == config_dir / CONFIG_FILENAME

    @pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG layout is Linux only")
    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GIT_TC_CONFIG_DIR", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert default_config_path() == tmp_path / APP_NAME / CONFIG_FILENAME


class TestLoadWindow:

    def test_default_when_missing(self, config_dir):
        assert load_window() == DEFAULT_WINDOW

    def test_default_when_empty(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / CONFIG_FILENAME).write_text("", encoding="utf-8")

        assert load_window() == DEFAULT_WINDOW

    def test_round_trip(self, config_dir):
        window = TimeWindow(start=time(21, 30), end=time(23, 0))

        path = store_window(window)

        assert path == config_dir / CONFIG_FILENAME
        assert load_window() == window

    def test_stored_record_fields(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"

        store_window(TimeWindow(start=time(9, 0), end=time(10, 30)), path)

        assert yaml.safe_load(path.read_text(encoding="utf-8")) == {
            "start_time": "09:00",
            "end_time": "10:30",
        }

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("start_time: '9am'\nend_time: '10:00'\nextra: 1\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_window(path)

        message = str(exc_info.value)
        assert "start_time" in message
        assert "extra" in message

    def test_missing_field(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("start_time: '09:00'\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="end_time"):
            load_window(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- 09:00\n- 10:00\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="mapping"):
            load_window(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("start_time: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Failed to load config"):
            load_window(path)

    def test_hand_edited_inverted_window(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("start_time: '10:00'\nend_time: '09:00'\n", encoding="utf-8")

        with pytest.raises(InvalidWindowError):
            load_window(path)


class TestStoreWindow:

    def test_rejects_inverted_window(self, tmp_path):
        path = tmp_path / "config.yaml"

        with pytest.raises(InvalidWindowError):
            store_window(TimeWindow(start=time(3, 0), end=time(1, 0)), path)

        assert not path.exists()

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(ConfigError, match="Failed to write config"):
            store_window(DEFAULT_WINDOW, blocker / "config.yaml")
