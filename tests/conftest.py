import pytest

from native_tables._log import setup_logging


@pytest.fixture(scope='session', autouse=True)
def logging_setup():
    setup_logging('debug', silence=('polars',))
    yield
