import pytest

from event_api.database.db_connection import Database


@pytest.fixture
def pool(mocker):
    pool_cls = mocker.patch("event_api.database.db_connection.ThreadedConnectionPool")
    return pool_cls.return_value


def test_pool_created_with_dict_cursor(mocker):
    pool_cls = mocker.patch("event_api.database.db_connection.ThreadedConnectionPool")

    Database("postgresql://localhost/events", minconn=2, maxconn=5)

    args, kwargs = pool_cls.call_args
    assert args == (2, 5, "postgresql://localhost/events")
    assert "cursor_factory" in kwargs


def test_connection_commits_and_returns_to_pool(pool):
    db = Database("dsn")
    conn = pool.getconn.return_value

    with db.connection() as got:
        assert got is conn

    conn.commit.assert_called_once()
    conn.rollback.assert_not_called()
    pool.putconn.assert_called_once_with(conn)


def test_connection_rolls_back_on_error(pool):
    db = Database("dsn")
    conn = pool.getconn.return_value

    with pytest.raises(ValueError):
        with db.connection():
            raise ValueError("boom")

    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()
    pool.putconn.assert_called_once_with(conn)


def test_close(pool):
    Database("dsn").close()
    pool.closeall.assert_called_once()


def test_exhausted_pool_raises_without_returning_a_connection(pool):
    from psycopg2.pool import PoolError

    pool.getconn.side_effect = PoolError("connection pool exhausted")
    db = Database("dsn")

    with pytest.raises(PoolError):
        with db.connection():
            pass

    pool.putconn.assert_not_called()


def test_exhausted_pool_answers_500(client, models, mocker):
    from psycopg2.pool import PoolError

    mocker.patch.object(models.events, "get_all", side_effect=PoolError("connection pool exhausted"))

    response = client.get("/events")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to retrieve events"}
