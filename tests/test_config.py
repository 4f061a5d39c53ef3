import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from smartpaper.config import Settings
from smartpaper.main import create_app
from smartpaper.storage import MemStorage, SqlStorage, build_storage


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "memory"
    assert settings.seed_data is True
    assert settings.cors_origins_list == ["http://localhost:5173", "http://localhost:3000"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SMARTPAPER_STORAGE_BACKEND", "sql")
    monkeypatch.setenv("SMARTPAPER_SEED_DATA", "false")
    monkeypatch.setenv("SMARTPAPER_CORS_ORIGINS", "https://a.example, ,https://b.example")

    settings = Settings(_env_file=None)
    assert settings.storage_backend == "sql"
    assert settings.seed_data is False
    assert settings.cors_origins_list == ["https://a.example", "https://b.example"]



def test_log_level_is_case_insensitive(monkeypatch):
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"
    monkeypatch.setenv("SMARTPAPER_LOG_LEVEL", "warning")
    assert Settings(_env_file=None).log_level == "WARNING"


def test_unknown_log_level_is_rejected(monkeypatch):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="verbose")
    monkeypatch.setenv("SMARTPAPER_LOG_LEVEL", "verbose")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

def test_build_storage_memory_without_seed():
    storage = build_storage(Settings(_env_file=None, seed_data=False))
    assert isinstance(storage, MemStorage)
    assert storage.get_all_users() == []


def test_build_storage_sql_with_seed(tmp_path):
    settings = Settings(
        _env_file=None,
        storage_backend="sql",
        database_url=f"sqlite:///{tmp_path / 'data' / 'smartpaper.db'}",
        password_hash_iterations=1000,
    )
    storage = build_storage(settings)
    try:
        assert isinstance(storage, SqlStorage)
        assert len(storage.get_all_users()) == 3
    finally:
        storage.close()

    # 数据在重新打开后仍然存在，且不会重复写入示例数据
    reopened = build_storage(settings)
    try:
        assert len(reopened.get_all_users()) == 3
    finally:
        reopened.close()


def test_app_on_sql_backend(tmp_path):
    settings = Settings(
        _env_file=None,
        storage_backend="sql",
        database_url="sqlite://",
        password_hash_iterations=1000,
    )
    with TestClient(create_app(settings=settings)) as client:
        assert client.get("/health").json() == {"status": "ok", "storage": "sql"}
        response = client.post(
            "/api/auth/login", json={"username": "teacher1", "password": "teacher123"}
        )
        assert response.status_code == 200
        assert response.json()["user"]["fullName"] == "Dr. Sarah Johnson"
