"""Tests for workflow.config."""

from workflow.config import Config, find_config_file, get_config, load_config, reload_config


class TestLoadConfig:
    """Configuration from rig.toml and the environment."""

    def test_defaults(self, tmp_path, monkeypatch):
        for name in ("EXT_CLIENT_ID", "EXT_SECRET", "EXT_VERSION", "RIG_API_URL", "RIG_API_TIMEOUT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = load_config(tmp_path / "missing.toml")

        assert config.api.base_url == "http://localhost:3000"
        assert config.extension.client_id == ""
        assert config.workflow.in_progress_message == "Creating your project..."

    def test_file_and_env(self, tmp_path, monkeypatch):
        path = tmp_path / "rig.toml"
        path.write_text(
            '[api]\nbase_url = "http://rig.local"\ntimeout = 5\n'
            '[extension]\nclient_id = "from-file"\nversion = "0.0.1"\n'
        )
        monkeypatch.setenv("EXT_CLIENT_ID", "from-env")
        monkeypatch.setenv("EXT_SECRET", "env-secret")
        monkeypatch.delenv("EXT_VERSION", raising=False)
        monkeypatch.setenv("RIG_API_TIMEOUT", "not-a-number")

        config = load_config(path)

        assert config.api.base_url == "http://rig.local"
        assert config.api.timeout == 5
        assert config.extension.client_id == "from-env"
        assert config.extension.secret == "env-secret"
        assert config.extension.version == "0.0.1"

    def test_from_dict_partial(self):
        config = Config.from_dict({"workflow": {"log_level": "DEBUG"}})

        assert config.workflow.log_level == "DEBUG"
        assert config.api.examples_path == "/examples"

    def test_finds_config_in_parent(self, tmp_path):
        (tmp_path / "rig.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == tmp_path / "rig.toml"


class TestCachedConfig:
    """Process-wide configuration."""

    def test_get_config_is_cached_until_reload(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("EXT_CLIENT_ID", "first")
        first = reload_config()
        monkeypatch.setenv("EXT_CLIENT_ID", "second")

        assert get_config() is first
        assert reload_config().extension.client_id == "second"
