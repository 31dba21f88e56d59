"""Tests for daybook.core.config."""

import json
import os

import pytest
import yaml

from daybook.core.config import Config
from daybook.core.exceptions import ConfigurationError


class TestConfig:
    def test_defaults(self):
        config = Config(env_prefix="")
        assert config.get("paths.data_dir").endswith(".daybook-data")
        assert config.get("journal.storage_key") == "journalEntries"
        assert config.get("journal.timezone") == ""
        assert config.get("logging.level") == "WARNING"

    def test_custom_data_dir(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("paths.data_dir") == tmp_dir
        assert config.get("paths.storage_dir") == os.path.join(tmp_dir, "storage")
        assert config.get_data_dir() == tmp_dir

    def test_yaml_config_file(self, tmp_config_file, tmp_dir):
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        assert config.get("journal.timezone") == "Europe/Paris"
        assert config.get("journal.compress") is True
        # untouched defaults survive the merge
        assert config.get("journal.storage_key") == "journalEntries"

    def test_json_config_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "config.json")
        with open(path, "w") as f:
            json.dump({"journal": {"storage_key": "entries-v2"}}, f)
        config = Config(config_file=path, data_dir=tmp_dir)
        assert config.get("journal.storage_key") == "entries-v2"

    def test_missing_file_uses_defaults(self, tmp_dir):
        config = Config(config_file=os.path.join(tmp_dir, "nope.yaml"), data_dir=tmp_dir)
        assert config.get("journal.storage_key") == "journalEntries"

    def test_malformed_yaml_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "bad.yaml")
        with open(path, "w") as f:
            f.write("journal: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            Config(config_file=path, data_dir=tmp_dir)

    def test_non_mapping_file_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "list.yaml")
        with open(path, "w") as f:
            yaml.dump(["a", "b"], f)
        with pytest.raises(ConfigurationError, match="mapping"):
            Config(config_file=path, data_dir=tmp_dir)

    def test_env_overrides_file(self, tmp_config_file, tmp_dir, monkeypatch):
        monkeypatch.setenv("DAYBOOK_JOURNAL__TIMEZONE", "Asia/Tokyo")
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        assert config.get("journal.timezone") == "Asia/Tokyo"

    def test_custom_env_prefix(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("MYJOURNAL_LOGGING__LEVEL", "DEBUG")
        config = Config(env_prefix="MYJOURNAL_", data_dir=tmp_dir)
        assert config.get("logging.level") == "DEBUG"

    def test_get_missing_key(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("journal.timezone", "UTC")
        config.set("new.nested.key", 3)
        assert config.get("journal.timezone") == "UTC"
        assert config.get("new.nested.key") == 3

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("1", True), ("yes", True), ("false", False), ("0", False), ("", False)],
    )
    def test_get_bool_from_env_strings(self, tmp_dir, monkeypatch, raw, expected):
        monkeypatch.setenv("DAYBOOK_JOURNAL__COMPRESS", raw)
        config = Config(data_dir=tmp_dir)
        assert config.get_bool("journal.compress") is expected

    def test_get_bool_rejects_garbage(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("journal.compress", "sometimes")
        with pytest.raises(ConfigurationError):
            config.get_bool("journal.compress")

    def test_ensure_directories(self, tmp_dir):
        config = Config(data_dir=os.path.join(tmp_dir, "nested"))
        config.ensure_directories()
        assert os.path.isdir(config.get("paths.storage_dir"))
        assert os.path.isdir(config.get("paths.log_dir"))
