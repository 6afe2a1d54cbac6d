from app.core.config import Settings
from app.core.logging import build_logging_config


def test_database_url_built_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(
        POSTGRES_HOST="db", POSTGRES_PORT="5433", POSTGRES_USER="svc",
        POSTGRES_PASSWORD="secret", POSTGRES_DB="prices", _env_file=None
    )
    assert settings.DATABASE_URL == "postgresql://svc:secret@db:5433/prices"


def test_database_url_override_wins():
    settings = Settings(DATABASE_URL="sqlite:///./other.db", _env_file=None)
    assert settings.DATABASE_URL == "sqlite:///./other.db"


def test_defaults(monkeypatch):
    for name in ("CACHE_BACKEND", "CACHE_TTL", "REDIS_URL", "PORT"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.CACHE_TTL == 3600
    assert settings.PORT == 3000
    assert settings.CACHE_BACKEND == "redis"
    assert settings.REDIS_URL == "redis://localhost:6379/0"


def test_memory_backend_leaves_redis_url_empty(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)
    settings = Settings(CACHE_BACKEND="memory", _env_file=None)
    assert settings.REDIS_URL == ""


def test_logging_config_without_log_dir_is_console_only():
    config = build_logging_config(level="debug", log_dir="")
    assert set(config["handlers"]) == {"console"}
    assert config["loggers"]["app"]["level"] == "DEBUG"


def test_logging_config_with_log_dir_adds_file_handlers(tmp_path):
    config = build_logging_config(level="INFO", log_dir=str(tmp_path / "logs"))
    assert {"file", "error_file"} <= set(config["handlers"])
    assert (tmp_path / "logs").is_dir()
