import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional
from uuid import UUID

import psycopg2
from psycopg2.errors import UniqueViolation

from .db import get_conn, load_schema
from .errors import NotFound, StoreFault, ValidationError
from .models import Customer, customer_from_row
from .store import CustomerStore, check_update, prepare_create

logger = logging.getLogger(__name__)

COLUMNS = "id, first_name, middle_name, last_name, email, phone_number"


#--Queries--
#Each takes an open connection; committing is the caller's job.
def list_customers(conn) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(f"SELECT {COLUMNS} FROM customers ORDER BY created_at, id")
        return cur.fetchall()


def get_customer_by_id(conn, customer_id: UUID) -> Optional[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            f"""
            SELECT {COLUMNS}
            FROM customers
            WHERE id = %s
            """,
            (str(customer_id),),
        )
        return cur.fetchone()


def insert_customer(conn, customer: Customer) -> Dict[str, Any]:
    with conn.cursor() as cur:
        #%s placeholders, never string formatting for values
        cur.execute(
            f"""
            INSERT INTO customers (id, first_name, middle_name, last_name, email, phone_number)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING {COLUMNS}
            """,
            (
                str(customer.id),
                customer.first_name,
                customer.middle_name,
                customer.last_name,
                customer.email,
                customer.phone_number,
            ),
        )
        return cur.fetchone()


def replace_customer(conn, customer: Customer) -> bool:
    with conn.cursor() as cur:
        #Lock the row so the existence check and the write see the same record
        cur.execute("SELECT id FROM customers WHERE id = %s FOR UPDATE", (str(customer.id),))
        if not cur.fetchone():
            return False
        cur.execute(
            """
            UPDATE customers
            SET first_name = %s, middle_name = %s, last_name = %s, email = %s, phone_number = %s
            WHERE id = %s
            """,
            (
                customer.first_name,
                customer.middle_name,
                customer.last_name,
                customer.email,
                customer.phone_number,
                str(customer.id),
            ),
        )
        return cur.rowcount > 0


def delete_customer(conn, customer_id: UUID) -> bool:
    with conn.cursor() as cur:
        cur.execute(
            """
            DELETE FROM customers
            WHERE id = %s
            """,
            (str(customer_id),),
        )
        return cur.rowcount > 0


class PostgresCustomerStore(CustomerStore):
    """Customer store on PostgreSQL; opens one connection per operation."""

    def __init__(self, connect: Callable[[], Any] = get_conn):
        self._connect = connect

    @contextmanager
    def _transaction(self):
        try:
            conn = self._connect()
        except psycopg2.Error as exc:
            logger.exception("Could not connect to the customer database")
            raise StoreFault("Database unavailable") from exc
        try:
            yield conn
            conn.commit()
        except psycopg2.Error as exc:
            conn.rollback()
            logger.exception("Customer database operation failed")
            raise StoreFault("Database operation failed") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def create_schema(self) -> None:
        with self._transaction() as conn:
            with conn.cursor() as cur:
                cur.execute(load_schema())
        logger.info("Ensured customers table exists")

    def list_all(self) -> List[Customer]:
        with self._transaction() as conn:
            rows = list_customers(conn)
        return [customer_from_row(row) for row in rows]

    def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        with self._transaction() as conn:
            row = get_customer_by_id(conn, customer_id)
        return customer_from_row(row) if row else None

    def create(self, customer: Customer) -> Customer:
        record = prepare_create(customer)
        with self._transaction() as conn:
            try:
                row = insert_customer(conn, record)
            except UniqueViolation as exc:
                raise ValidationError([{"field": "id", "message": "Customer id already exists"}]) from exc
        logger.info("Created customer %s", row["id"])
        return customer_from_row(row)

    def update(self, customer_id: UUID, customer: Customer) -> None:
        record = check_update(customer_id, customer)
        with self._transaction() as conn:
            if not replace_customer(conn, record):
                raise NotFound(customer_id)
        logger.info("Updated customer %s", customer_id)

    def delete(self, customer_id: UUID) -> None:
        with self._transaction() as conn:
            if not delete_customer(conn, customer_id):
                raise NotFound(customer_id)
        logger.info("Deleted customer %s", customer_id)
