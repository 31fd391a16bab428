"""Tests for config loading, validation, and environment overrides."""

from pathlib import Path

import pytest

from sizelabel.config.loader import ConfigError, load_config, parse_sizes, require_github
from sizelabel.labeling.analyzer import CYRILLIC_PATTERN
from sizelabel.labeling.sizes import DEFAULT_SIZES


class TestParseSizes:
    def test_json_object(self):
        table = parse_sizes('{"0": "none", "50": "big"}')
        assert table.thresholds == ((0, "none"), (50, "big"))

    def test_mapping_with_int_keys(self):
        assert parse_sizes({5: "a"}).thresholds == ((5, "a"),)

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "[1, 2]",
            "{}",
            '{"abc": "XS"}',
            '{"-1": "XS"}',
            '{"1.5": "XS"}',
            '{"1": 5}',
            '{"1": ""}',
            '{"\u00b2": "XS"}',
            {"\u00b2": "XS"},
            {True: "XS"},
        ],
    )
    def test_malformed(self, raw):
        with pytest.raises(ConfigError):
            parse_sizes(raw)


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.sizes == DEFAULT_SIZES
        assert cfg.ignore.patterns == []
        assert cfg.analysis.pattern == CYRILLIC_PATTERN
        assert cfg.github.api_url == "https://api.github.com"
        assert cfg.debug is False

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".size-label.toml").write_text(
            '[sizes]\n'
            '"0" = "tiny"\n'
            '"100" = "huge"\n'
            '[ignore]\n'
            'patterns = ["*.lock", "!keep.lock"]\n'
            '[analysis]\n'
            'pattern = "[a-z]"\n'
            '[github]\n'
            'api_url = "https://ghe.example.com/api/v3"\n',
            encoding="utf-8",
        )
        cfg = load_config(tmp_path)
        assert cfg.sizes.thresholds == ((0, "tiny"), (100, "huge"))
        assert cfg.ignore.patterns == ["*.lock", "!keep.lock"]
        assert cfg.analysis.pattern == "[a-z]"
        assert cfg.github.api_url == "https://ghe.example.com/api/v3"

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[ignore]\npatterns = "docs/**"\n', encoding="utf-8")
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.ignore.patterns == ["docs/**"]

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".size-label.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    @pytest.mark.parametrize(
        "content",
        [
            '[labels]\nfoo = "bar"\n',
            '[ignore]\nfiles = ["x"]\n',
            '[github]\ntoken = "secret"\n',
            '[ignore]\npatterns = [1, 2]\n',
            '[analysis]\npattern = "[unclosed"\n',
            '[sizes]\n"x" = "XS"\n',
            'ignore = "flat"\n',
        ],
    )
    def test_rejects_unknown_or_malformed(self, tmp_path: Path, content):
        (tmp_path / ".size-label.toml").write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvOverrides:
    def test_action_inputs(self, tmp_path: Path):
        env = {
            "INPUT_SIZES": '{"0": "S", "10": "L"}',
            "IGNORED": "docs/**\n!docs/keep.md",
            "INPUT_PATTERN": "[A-Z]",
            "DEBUG_ACTION": "1",
        }
        cfg = load_config(tmp_path, environ=env)
        assert cfg.sizes.thresholds == ((0, "S"), (10, "L"))
        assert cfg.ignore.patterns == ["docs/**\n!docs/keep.md"]
        assert cfg.analysis.pattern == "[A-Z]"
        assert cfg.debug is True

    def test_env_overrides_file(self, tmp_path: Path):
        (tmp_path / ".size-label.toml").write_text(
            '[sizes]\n"1" = "file"\n[ignore]\npatterns = ["a"]\n', encoding="utf-8"
        )
        cfg = load_config(tmp_path, environ={"INPUT_SIZES": '{"1": "env"}', "IGNORED": "b"})
        assert cfg.sizes.thresholds == ((1, "env"),)
        assert cfg.ignore.patterns == ["a", "b"]

    def test_empty_sizes_input_keeps_default(self, tmp_path: Path):
        cfg = load_config(tmp_path, environ={"INPUT_SIZES": ""})
        assert cfg.sizes == DEFAULT_SIZES

    def test_malformed_sizes_input(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, environ={"INPUT_SIZES": '{"one": "XS"}'})

    def test_github_variables(self, tmp_path: Path):
        env = {
            "GITHUB_TOKEN": "t0ken",
            "GITHUB_EVENT_PATH": "/tmp/event.json",
            "GITHUB_API_URL": "https://ghe.example.com/api/v3",
        }
        cfg = load_config(tmp_path, environ=env)
        assert require_github(cfg) == ("t0ken", "/tmp/event.json")
        assert cfg.github.api_url == "https://ghe.example.com/api/v3"

    def test_process_environment_not_read(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "from-process")
        cfg = load_config(tmp_path)
        assert cfg.github.token is None


class TestRequireGithub:
    def test_missing_token(self, tmp_path: Path):
        cfg = load_config(tmp_path, environ={"GITHUB_EVENT_PATH": "/tmp/e.json"})
        with pytest.raises(ConfigError, match="GITHUB_TOKEN"):
            require_github(cfg)

    def test_missing_event_path(self, tmp_path: Path):
        cfg = load_config(tmp_path, environ={"GITHUB_TOKEN": "t"})
        with pytest.raises(ConfigError, match="GITHUB_EVENT_PATH"):
            require_github(cfg)
