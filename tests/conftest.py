"""Root conftest — shared test configuration."""

import logging
import os

import pytest

# Keep test runs independent of a developer's .env / shell
os.environ.setdefault("CATALOG_LOG_FORMAT", "text")
os.environ.setdefault("CATALOG_LOG_LEVEL", "WARNING")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    from product_catalog.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_root_logging():
    """Undo handlers/level changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
