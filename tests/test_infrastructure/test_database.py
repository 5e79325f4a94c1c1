import pytest

from infrastructure import database


def test_sync_postgres_url_is_mapped_to_asyncpg():
    url = database._build_async_url("postgres://pvz:s3cret@db:5432/pvz")
    assert url == "postgresql+asyncpg://pvz:s3cret@db:5432/pvz"


def test_explicit_driver_is_kept():
    url = "postgresql+asyncpg://pvz:pw@localhost/pvz"
    assert database._build_async_url(url) == url


def test_unsupported_driver_is_rejected():
    with pytest.raises(ValueError):
        database._build_async_url("mysql://root@localhost/pvz")


def test_module_exposes_lifecycle_hooks_only():
    """Sessions are opened by the Unit of Work; the module only manages the engine."""
    public = {name for name in vars(database) if not name.startswith("_") and callable(getattr(database, name))}
    assert {"wait_for_database", "create_tables", "dispose_engine", "AsyncSessionLocal"} <= public
    assert "get_session" not in public
    assert "drop_tables" not in public
