import pytest


@pytest.fixture(autouse=True)
def _use_db(transactional_db):
    """Automatically use the test database for all tests.

    Async ORM calls run on a worker thread with their own connection, so
    tests need committed (transactional) data rather than the default
    per-test transaction of the ``db`` fixture.
    """
