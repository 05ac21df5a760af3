from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from customer_api.config import Settings
from customer_api.main import create_app
from customer_api.models import Customer
from customer_api.store import InMemoryCustomerStore

ALICE_ID = UUID("3f0c1d5e-8a8e-4c59-9d4b-6a3c2f1e0b7a")


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.rowcount = -1
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *_exc):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((" ".join(sql.split()), params))
        if self.conn.errors:
            error = self.conn.errors.pop(0)
            if error is not None:
                raise error
        rows, rowcount = self.conn.results.pop(0) if self.conn.results else ([], 0)
        self._rows = rows
        self.rowcount = rowcount

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConn:
    """Stands in for a psycopg2 connection with a RealDictCursor."""

    def __init__(self):
        self.executed = []
        self.results = []
        self.errors = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


@pytest.fixture()
def dummy_conn():
    return FakeConn()


@pytest.fixture()
def alice():
    return Customer(
        id=ALICE_ID,
        first_name="Alice",
        middle_name="",
        last_name="Smith",
        email="alice@example.com",
        phone_number="1112223333",
    )


@pytest.fixture()
def store(alice):
    return InMemoryCustomerStore([alice])


@pytest.fixture()
def client(store):
    app = create_app(store=store, settings=Settings(create_schema=False))
    return TestClient(app)
