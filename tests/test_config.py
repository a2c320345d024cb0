"""Tests for YAML/environment configuration loading."""
import pytest

from ddl_flowchart.config import AppConfig, load_app_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("DDL_FLOWCHART_CONFIG", "LOG_LEVEL", "WEB_HOST", "WEB_PORT"):
        monkeypatch.delenv(var, raising=False)


class TestAppConfig:
    """Test AppConfig validation and loading."""

    def test_defaults(self):
        config = load_app_config()
        assert config.layout.columns == 3
        assert config.layout.x_spacing == 300
        assert config.layout.y_spacing == 400
        assert config.web.port == 8000
        assert config.logging.level == "WARNING"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "layout:\n"
            "  columns: 4\n"
            "  x_spacing: 250\n"
            "web:\n"
            "  port: 9000\n"
            "  max_input_chars: 500\n"
            "logging:\n"
            "  level: debug\n"
        )
        config = AppConfig.from_yaml(path)
        assert config.layout.columns == 4
        assert config.layout.x_spacing == 250
        assert config.layout.y_spacing == 400
        assert config.web.port == 9000
        assert config.web.max_input_chars == 500
        assert config.logging.level == "DEBUG"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert AppConfig.from_yaml(path) == AppConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("layout:\n  columns: 0\n")
        with pytest.raises(ValueError, match="Invalid configuration"):
            AppConfig.from_yaml(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            AppConfig.from_yaml(path)

    def test_env_path_and_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("web:\n  port: 9000\n")
        monkeypatch.setenv("DDL_FLOWCHART_CONFIG", str(path))
        monkeypatch.setenv("LOG_LEVEL", "info")
        monkeypatch.setenv("WEB_HOST", "0.0.0.0")

        config = load_app_config()
        assert config.web.port == 9000
        assert config.web.host == "0.0.0.0"
        assert config.logging.level == "INFO"

    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        env_path = tmp_path / "env.yaml"
        env_path.write_text("web:\n  port: 1111\n")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("web:\n  port: 2222\n")
        monkeypatch.setenv("DDL_FLOWCHART_CONFIG", str(env_path))

        assert load_app_config(explicit).web.port == 2222
