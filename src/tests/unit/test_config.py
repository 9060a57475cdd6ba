"""Unit tests for Config environment handling.

Tests cover:
- Database URL override and file-based default
- Default actor
- Singleton behavior of get_config
"""

from pathlib import Path

from src.utils.config import Config, get_config, get_default_actor, reset_config


class TestConfig:
    """Tests for Config properties."""

    def setup_method(self):
        """Reset config singleton before each test."""
        reset_config()

    def teardown_method(self):
        """Clean up after each test."""
        reset_config()

    def test_database_url_override(self, monkeypatch):
        monkeypatch.setenv("SALINI_IMPORT_DATABASE_URL", "sqlite:///:memory:")
        config = Config()
        assert config.database_url == "sqlite:///:memory:"
        assert config.database_exists() is True

    def test_file_database_in_user_dir(self, monkeypatch, tmp_path):
        monkeypatch.delenv("SALINI_IMPORT_DATABASE_URL", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        config = Config("production")

        assert config.database_path == tmp_path / ".salini_import" / "salini_import.db"
        assert config.database_url.startswith("sqlite:///")
        assert (tmp_path / ".salini_import").is_dir()

    def test_default_actor(self):
        assert Config().default_actor == "System"

    def test_actor_env_override(self, monkeypatch):
        monkeypatch.setenv("SALINI_IMPORT_ACTOR", "hr.admin")
        assert get_default_actor() == "hr.admin"

    def test_environment_from_env_var(self, monkeypatch):
        monkeypatch.setenv("SALINI_IMPORT_ENV", "development")
        assert get_config().is_development is True

    def test_singleton_keeps_first_environment(self):
        first = get_config("production")
        second = get_config("development")

        assert first is second
        assert second.is_production is True
