"""Unit tests for the configuration context."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.bookshelf.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    StoreConfig,
)
from src.bookshelf.runtime.context import (
    AppContext,
    get_config,
    get_context,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        """Should have a default context available."""
        context = get_context()

        assert isinstance(context, AppContext)
        assert isinstance(get_config(), ConfigData)
        assert context.config is get_config()

    def test_override_only_replaces_set_fields(self):
        """Fields not set on the override are inherited."""
        original = get_config()

        with with_context(ConfigData(store=StoreConfig(seed=False))):
            config = get_config()
            assert config.store.seed is False
            assert config.store.lock_timeout_seconds == original.store.lock_timeout_seconds
            assert config.app.name == original.app.name

        assert get_config() is original

    def test_nested_overrides(self):
        with with_context(ConfigData(app=AppConfig(port=4001))):
            with with_context(ConfigData(store=StoreConfig(seed=False))):
                assert get_config().app.port == 4001
                assert get_config().store.seed is False
            assert get_config().store.seed is True
            assert get_config().app.port == 4001

    def test_none_override_is_noop(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_wrong_type_rejected(self):
        with pytest.raises(ValueError, match="ConfigData"):
            with with_context({"store": {"seed": False}}):
                pass

    def test_context_restored_after_exception(self):
        original = get_config()

        with pytest.raises(RuntimeError):
            with with_context(ConfigData(app=AppConfig(port=4002))):
                raise RuntimeError("boom")

        assert get_config() is original

    def test_threads_see_default_config(self):
        """Overrides are scoped to the calling context."""
        with with_context(ConfigData(app=AppConfig(port=4003))):
            with ThreadPoolExecutor(max_workers=1) as executor:
                port = executor.submit(lambda: get_config().app.port).result()

        assert port == get_config().app.port
