"""Tests for build configuration assembly."""

import json
from types import SimpleNamespace

import pytest

from cli_config import build_config, default_config_paths, load_config_file
from constants import Constants
from versioning.models import ConfigError, UnknownSourceError


def make_args(**kwargs):
    """Helper to create a CLI namespace with defaults."""
    base = {"CONFIG": None, "RUBY": None, "POD_VERSION": None}
    base.update(kwargs)
    return SimpleNamespace(**base)


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep default config lookups away from the real home and cwd."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv(Constants.ENV_RUBY_LABEL, raising=False)
    monkeypatch.delenv(Constants.ENV_POD_VERSION, raising=False)
    return tmp_path


def write_yaml(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestBuiltinDefaults:
    """Without config, the built-in table and constants apply."""

    def test_defaults(self):
        config = build_config(make_args())
        assert config.ruby_label == "2.5"
        assert config.pod_version == 0
        assert config.github_url == "https://github.com/xord/cruby"
        assert config.source.url.endswith("ruby-2.5.5.tar.gz")
        assert config.version_triple == (2, 5, 5)
        assert config.version == "2.5.500"

    def test_no_args(self):
        assert build_config().version == "2.5.500"


class TestLoadConfigFile:
    """Test load_config_file."""

    def test_explicit_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_file(str(tmp_path / "missing.yml"))

    def test_no_default_file_is_empty(self):
        assert load_config_file() == {}

    def test_empty_yaml_is_empty(self, tmp_path):
        path = write_yaml(tmp_path / "empty.yml", "")
        assert load_config_file(str(path)) == {}

    def test_json_config(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"ruby": "2.6", "pod_version": 3}), encoding="utf-8")
        assert load_config_file(str(path)) == {"ruby": "2.6", "pod_version": 3}

    def test_invalid_yaml_raises(self, tmp_path):
        path = write_yaml(tmp_path / "bad.yml", "ruby: [2.6\n")
        with pytest.raises(ConfigError):
            load_config_file(str(path))

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file(str(path))

    def test_non_mapping_raises(self, tmp_path):
        path = write_yaml(tmp_path / "list.yml", "- 2.6\n- 2.5\n")
        with pytest.raises(ConfigError):
            load_config_file(str(path))

    def test_default_location_in_cwd(self, tmp_path):
        write_yaml(tmp_path / "cruby.yml", "ruby: '2.4'\n")
        assert load_config_file() == {"ruby": "2.4"}

    def test_default_location_in_xdg(self, tmp_path):
        write_yaml(tmp_path / "xdg" / "cruby" / "cruby.yaml", "pod_version: 7\n")
        assert load_config_file() == {"pod_version": 7}

    def test_default_paths_order(self, tmp_path):
        paths = default_config_paths()
        assert paths[0] == str(tmp_path / "cruby.yml")
        assert paths[-1] == str(tmp_path / "xdg" / "cruby" / "cruby.yaml")


class TestPrecedence:
    """CLI > environment > config file > defaults."""

    @pytest.fixture
    def config_path(self, tmp_path):
        return str(write_yaml(tmp_path / "cfg.yml", "ruby: 2.6\npod_version: 1\n"))

    def test_config_file(self, config_path):
        config = build_config(make_args(CONFIG=config_path))
        assert config.ruby_label == "2.6"
        assert config.version == "2.6.101"

    def test_env_over_config(self, config_path, monkeypatch):
        monkeypatch.setenv(Constants.ENV_RUBY_LABEL, "2.4")
        monkeypatch.setenv(Constants.ENV_POD_VERSION, "5")
        config = build_config(make_args(CONFIG=config_path))
        assert config.version == "2.4.605"

    def test_cli_over_env(self, config_path, monkeypatch):
        monkeypatch.setenv(Constants.ENV_RUBY_LABEL, "2.4")
        monkeypatch.setenv(Constants.ENV_POD_VERSION, "5")
        config = build_config(make_args(CONFIG=config_path, RUBY="2.5", POD_VERSION=0))
        assert config.version == "2.5.500"

    def test_explicit_environ_mapping(self):
        config = build_config(make_args(), environ={Constants.ENV_POD_VERSION: "2"})
        assert config.version == "2.5.502"


class TestValidation:
    """Invalid values are rejected with ConfigError."""

    def test_custom_sources_replace_defaults(self, tmp_path):
        path = write_yaml(tmp_path / "cfg.yml", (
            "ruby: '2.6'\n"
            "pod_version: 2\n"
            "sources:\n"
            "  '2.6':\n"
            "    url: https://cache.ruby-lang.org/pub/ruby/2.6/ruby-2.6.3.tar.gz\n"
            f"    sha256: {'b' * 64}\n"
        ))
        config = build_config(make_args(CONFIG=str(path)))
        assert config.sources.labels() == ["2.6"]
        assert config.version == "2.6.302"

    def test_unknown_label(self):
        with pytest.raises(UnknownSourceError):
            build_config(make_args(RUBY="1.8"))

    @pytest.mark.parametrize("value", [-1, 100, "abc", True])
    def test_bad_pod_version(self, value):
        with pytest.raises(ConfigError):
            build_config(make_args(POD_VERSION=value))

    def test_bad_pod_version_from_env(self, monkeypatch):
        monkeypatch.setenv(Constants.ENV_POD_VERSION, "ten")
        with pytest.raises(ConfigError) as exc_info:
            build_config(make_args())
        assert Constants.ENV_POD_VERSION in str(exc_info.value)

    def test_bad_github_url(self, tmp_path):
        path = write_yaml(tmp_path / "cfg.yml", "github_url: [1, 2]\n")
        with pytest.raises(ConfigError):
            build_config(make_args(CONFIG=str(path)))


def test_non_utf8_config_raises_config_error(tmp_path):
    path = tmp_path / "latin1.yml"
    path.write_bytes(b"ruby: '2.6'\n# \xff\xfe\n")
    with pytest.raises(ConfigError):
        load_config_file(str(path))
