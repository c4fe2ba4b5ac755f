"""
Tests for DatabaseConfig environment loading and safety checks
"""

import pytest

import config as config_module
from config import DatabaseConfig, get_environment_mode, is_production_mode, is_test_mode

DB_VARS = (
    "DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD", "DB_SSL_MODE",
    "DB_MIN_POOL_SIZE", "DB_MAX_POOL_SIZE", "DB_COMMAND_TIMEOUT", "APP_ENV",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No DB_* variables and no .env files on disk"""
    for var in DB_VARS:
        # setenv first so monkeypatch also undoes values load_dotenv writes
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.setattr(config_module, "__file__", str(tmp_path / "config.py"))
    return monkeypatch


def test_test_mode_defaults(clean_env):
    config = DatabaseConfig.from_environment("test")

    assert config.database == "jobly_test"
    assert config.host == "localhost"
    assert config.port == 5432
    assert config.ssl_mode == "prefer"
    assert config.command_timeout == 60


def test_development_defaults(clean_env):
    config = DatabaseConfig.from_environment("development")
    assert config.database == "jobly"


def test_reads_environment(clean_env):
    clean_env.setenv("DB_HOST", "db.internal")
    clean_env.setenv("DB_PORT", "6543")
    clean_env.setenv("DB_NAME", "jobly_ci")
    clean_env.setenv("DB_MAX_POOL_SIZE", "20")
    clean_env.setenv("DB_COMMAND_TIMEOUT", "5")

    config = DatabaseConfig.from_environment("development")

    assert (config.host, config.port, config.database) == ("db.internal", 6543, "jobly_ci")
    assert config.max_pool_size == 20
    assert config.command_timeout == 5


def test_env_file_is_loaded(clean_env, tmp_path):
    (tmp_path / ".env.test").write_text("DB_NAME=jobly_file_test\nDB_USER=tester\n")

    config = DatabaseConfig.from_environment("test")

    assert config.database == "jobly_file_test"
    assert config.user == "tester"


def test_test_mode_requires_test_database(clean_env):
    clean_env.setenv("DB_NAME", "jobly")

    with pytest.raises(ValueError, match="SAFETY ERROR"):
        DatabaseConfig.from_environment("test")


def test_test_mode_rejects_production_database(clean_env):
    clean_env.setenv("DB_NAME", "jobly_prod_test")

    with pytest.raises(ValueError, match="appears to be production"):
        DatabaseConfig.from_environment("test")


def test_production_defaults_to_ssl(clean_env):
    config = DatabaseConfig.from_environment("production")
    assert config.ssl_mode == "require"
    assert config.ssl_setting is True


@pytest.mark.parametrize("mode,expected", [
    ("require", True),
    ("disable", False),
    ("prefer", "prefer"),
])
def test_ssl_setting(mode, expected):
    config = DatabaseConfig.for_testing()
    config.ssl_mode = mode
    assert config.ssl_setting == expected


def test_dsn_quotes_password():
    config = DatabaseConfig(host="h", port=5432, database="d", user="u", password="p@ss/word")
    assert config.asyncpg_dsn == "postgresql://u:p%40ss%2Fword@h:5432/d"


def test_environment_mode(monkeypatch):
    monkeypatch.setenv("APP_ENV", "TEST")
    assert get_environment_mode() == "test"
    assert is_test_mode()

    monkeypatch.setenv("APP_ENV", "staging")
    assert get_environment_mode() == "development"
    assert not is_production_mode()
