"""Tests for configuration loading."""

from rbac_admin.core.setting import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in Settings.model_fields:
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite+aiosqlite:///./rbac_admin.db"
        assert settings.CREATE_TABLES_ON_STARTUP is False
        assert settings.LOG_LEVEL == "INFO"
        assert settings.EXTERNAL_SERVICE_NAME == "Base de datos"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("database_url", "sqlite+aiosqlite:///./other.db")
        monkeypatch.setenv("CREATE_TABLES_ON_STARTUP", "true")

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite+aiosqlite:///./other.db"
        assert settings.CREATE_TABLES_ON_STARTUP is True

    def test_only_consumed_options_are_declared(self):
        assert set(Settings.model_fields) == {
            "DATABASE_URL",
            "CREATE_TABLES_ON_STARTUP",
            "LOG_LEVEL",
            "EXTERNAL_SERVICE_NAME",
        }
