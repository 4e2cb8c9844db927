import logging

import pytest

from rados_probe.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_package_logger():
    # The CLI binds its handler to the sys.stderr of the test that created it
    yield
    logger = logging.getLogger("rados_probe")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
