import pytest

from relaypager.app import on_shutdown, on_startup
from relaypager.database import database
from relaypager.relay.cursor import get_cursor_from_id


@pytest.fixture
def items():
    return [{"id": i, "name": f"item {i}"} for i in range(1, 11)]


@pytest.fixture
def cursor():
    return get_cursor_from_id


@pytest.fixture
def database_url(tmp_path):
    """
    Using in memory sqlite ":memory:" causes issues:
    https://stackoverflow.com/questions/21766960/operationalerror-no-such-table-in-flask-with-sqlalchemy

    Better to just use a temp db file. In production this would probably be Postgres
    anyway so the side effects are fine.
    """
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def test_db(database_url):
    database.configure(database_url)
    await on_startup()
    yield database
    await on_shutdown()
