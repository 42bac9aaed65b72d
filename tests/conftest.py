import pytest

from pmun_utils import reset_settings


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts and ends with the default English, naive-time settings."""
    reset_settings()
    yield
    reset_settings()
