"""Tests for database initialization."""
from sqlalchemy import inspect

from identity_platform.identity_service.db import build_engine, check_db_connection, init_db


def test_init_db_creates_users_table(tmp_path):
    """Test that init_db creates the users table with a unique email index."""
    engine = build_engine(f"sqlite:///{tmp_path / 'init.db'}")
    try:
        init_db(engine)

        inspector = inspect(engine)
        assert "users" in inspector.get_table_names()

        columns = {col['name']: col for col in inspector.get_columns('users')}
        for col_name in ['id', 'name', 'email', 'password']:
            assert col_name in columns, f"Column {col_name} should exist in users table"

        assert columns['name']['nullable'] is True, "name should be optional"
        assert columns['email']['nullable'] is False, "email should be required"
        assert columns['password']['nullable'] is False, "password should be required"

        email_indexes = [idx for idx in inspector.get_indexes('users') if idx['column_names'] == ['email']]
        assert email_indexes, "email should be indexed"
        assert email_indexes[0]['unique'], "email index should be unique"
    finally:
        engine.dispose()


def test_init_db_creates_auth_events_table(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'init.db'}")
    try:
        init_db(engine)

        inspector = inspect(engine)
        assert "auth_events" in inspector.get_table_names()

        columns = {col['name']: col for col in inspector.get_columns('auth_events')}
        required_columns = ['id', 'user_id', 'email', 'event_type', 'ip_address',
                            'user_agent', 'timestamp', 'event_metadata']
        for col_name in required_columns:
            assert col_name in columns, f"Column {col_name} should exist in auth_events table"

        assert columns['user_id']['nullable'] is True, "failed signups have no user"
        assert columns['event_type']['nullable'] is False

        index_names = [idx['name'] for idx in inspector.get_indexes('auth_events')]
        for idx_name in ['ix_auth_events_user_id', 'ix_auth_events_timestamp', 'ix_auth_events_event_type']:
            assert idx_name in index_names, f"Index {idx_name} should be created"

        foreign_keys = inspector.get_foreign_keys('auth_events')
        user_fk = next((fk for fk in foreign_keys if fk['referred_table'] == 'users'), None)
        assert user_fk is not None, "Foreign key to users table should exist"
        assert 'user_id' in user_fk['constrained_columns']
    finally:
        engine.dispose()


def test_init_db_is_idempotent(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'init.db'}")
    try:
        init_db(engine)
        init_db(engine)
        assert set(inspect(engine).get_table_names()) >= {"users", "auth_events"}
    finally:
        engine.dispose()


def test_check_db_connection(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'init.db'}")
    assert check_db_connection(engine) is True
    engine.dispose()

    unreachable = build_engine(f"sqlite:///{tmp_path / 'missing' / 'nested' / 'x.db'}")
    assert check_db_connection(unreachable) is False
    unreachable.dispose()
