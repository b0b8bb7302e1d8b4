"""Tests for content store configuration."""

from mintpipe.content_store import InMemoryContentStore, PinataContentStore
from mintpipe.content_store.config import create_content_store
from mintpipe.core.config import Settings


class TestCreateContentStore:
    """Test cases for create_content_store."""

    def test_should_return_none_when_pinata_credentials_missing(self):
        """Should return None when Pinata is selected but not configured."""
        assert create_content_store(Settings(_env_file=None)) is None

    def test_should_create_pinata_store_with_credentials(self, monkeypatch):
        monkeypatch.setenv("PINATA_API_KEY", "key")
        monkeypatch.setenv("PINATA_API_SECRET", "secret")
        monkeypatch.setenv("PINATA_BASE_URL", "https://pinata.test")

        store = create_content_store(Settings(_env_file=None))

        assert isinstance(store, PinataContentStore)
        assert store.base_url == "https://pinata.test"

    def test_should_pass_timeout_to_pinata_store(self):
        config = Settings(
            _env_file=None, PINATA_API_KEY="key", PINATA_API_SECRET="secret", PINATA_TIMEOUT=5
        )

        assert create_content_store(config).timeout == 5

    def test_should_create_memory_store_when_selected(self, monkeypatch):
        monkeypatch.setenv("CONTENT_STORE_BACKEND", "memory")

        assert isinstance(create_content_store(Settings(_env_file=None)), InMemoryContentStore)

    def test_should_create_fresh_store_per_call(self):
        config = Settings(_env_file=None, CONTENT_STORE_BACKEND="memory")

        assert create_content_store(config) is not create_content_store(config)
