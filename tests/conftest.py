import pytest

from releaser.log import reset_logging


@pytest.fixture(autouse=True)
def _reset_releaser_logging():
    """Each test starts without the CLI's stderr handler, so captured streams never leak."""
    reset_logging()
    yield
    reset_logging()
