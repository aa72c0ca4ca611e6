from app.db.session import _connect_args, get_session


def test_session_dependency():
    gen = get_session()
    session = next(gen)
    assert session is not None
    session.close()


def test_sqlite_connections_are_shared_across_threads():
    assert _connect_args("sqlite:///market.db") == {"check_same_thread": False}
    assert _connect_args("mysql+pymysql://market@localhost/campus_market") == {}
