import pytest

from ficcore.settings import saved_settings
from ficcore.time import Date


@pytest.fixture
def settings():
    """Process settings restored after the test."""
    with saved_settings() as s:
        yield s


@pytest.fixture
def today(settings):
    settings.evaluation_date = Date(3, 7, 2023)
    return settings.evaluation_date
