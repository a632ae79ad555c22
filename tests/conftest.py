import pytest

from modinject import reset_modules


@pytest.fixture(autouse=True)
def clean_module_registry():
    """Every test starts and ends with an empty process-wide module registry."""
    reset_modules()
    yield
    reset_modules()
