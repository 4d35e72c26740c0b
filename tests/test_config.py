"""
Tests for settings, store selection and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError

from profile_history.app import create_history_service, create_store
from profile_history.config import Settings
from profile_history.logging_config import configure_logging
from profile_history.repositories.file_store import FileKeyValueStore
from profile_history.repositories.memory_store import MemoryKeyValueStore
from profile_history.repositories.redis_store import RedisKeyValueStore


class TestSettings:
    """Test settings defaults and validation."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("STORE_BACKEND", raising=False)
        monkeypatch.delenv("HISTORY_MAX_ITEMS", raising=False)
        config = Settings(_env_file=None)

        assert config.STORE_BACKEND == "memory"
        assert config.HISTORY_MAX_ITEMS == 20
        assert config.DEFAULT_QUERY_LIMIT == 10
        assert config.REDIS_KEY_PREFIX == "profile_history:"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "file")
        monkeypatch.setenv("HISTORY_MAX_ITEMS", "50")

        config = Settings(_env_file=None)
        assert config.STORE_BACKEND == "file"
        assert config.HISTORY_MAX_ITEMS == 50

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, STORE_BACKEND="sqlite")

    def test_invalid_redis_url(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, REDIS_URL="http://localhost:6379")

    def test_history_cap_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, HISTORY_MAX_ITEMS=0)

    def test_empty_file_path(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, STORE_FILE_PATH="  ")

    def test_cors_origins_list(self):
        config = Settings(_env_file=None, CORS_ORIGINS="http://a.test, http://b.test")
        assert config.cors_origins_list == ["http://a.test", "http://b.test"]


class TestStoreFactory:
    """Test backend selection."""

    def test_memory(self):
        assert isinstance(create_store(Settings(_env_file=None, STORE_BACKEND="memory")), MemoryKeyValueStore)

    def test_file(self, tmp_path):
        config = Settings(
            _env_file=None, STORE_BACKEND="file", STORE_FILE_PATH=str(tmp_path / "s.json")
        )
        store = create_store(config)

        assert isinstance(store, FileKeyValueStore)
        assert store.path == tmp_path / "s.json"

    def test_redis(self):
        config = Settings(_env_file=None, STORE_BACKEND="redis", REDIS_KEY_PREFIX="t:")
        store = create_store(config)

        assert isinstance(store, RedisKeyValueStore)
        assert store.key_prefix == "t:"

    def test_history_service_uses_settings(self):
        config = Settings(_env_file=None, HISTORY_MAX_ITEMS=5, DEFAULT_QUERY_LIMIT=3)
        service = create_history_service(MemoryKeyValueStore(), config)

        assert service.history_repo.max_items == 5
        assert service.default_limit == 3


class TestLogging:
    """Test logging configuration."""

    def test_configure_sets_level(self):
        configure_logging(log_level="DEBUG", use_json=False)
        assert logging.getLogger().level == logging.DEBUG

        configure_logging(log_level="INFO", use_json=True)
        assert logging.getLogger().level == logging.INFO

    def test_single_handler(self):
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1
