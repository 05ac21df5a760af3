import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from .errors import IdMismatch, NotFound, ValidationError
from .models import Customer, validate_customer

logger = logging.getLogger(__name__)


class CustomerStore(ABC):
    """Persistent collection of customers. Every mutating call is all-or-nothing."""

    def create_schema(self) -> None:
        pass

    @abstractmethod
    def list_all(self) -> List[Customer]:
        pass

    @abstractmethod
    def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        pass

    @abstractmethod
    def create(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    def update(self, customer_id: UUID, customer: Customer) -> None:
        pass

    @abstractmethod
    def delete(self, customer_id: UUID) -> None:
        pass


def check_update(customer_id: UUID, customer: Customer) -> Customer:
    """Checks shared by every store before an update touches storage.

    The body must carry ``customer_id`` itself; a missing id is a mismatch.
    """
    if customer.id != customer_id:
        raise IdMismatch(customer_id, customer.id)
    violations = validate_customer(customer)
    if violations:
        raise ValidationError(violations)
    return customer.model_copy()


def prepare_create(customer: Customer) -> Customer:
    violations = validate_customer(customer)
    if violations:
        raise ValidationError(violations)
    if customer.id is None:
        return customer.model_copy(update={"id": uuid4()})
    return customer.model_copy()


class InMemoryCustomerStore(CustomerStore):
    """Dict-backed store keeping insertion order; one instance per test or run."""

    def __init__(self, customers: Optional[List[Customer]] = None):
        self._customers: Dict[UUID, Customer] = {}
        self._lock = threading.Lock()
        for customer in customers or []:
            self.create(customer)

    def list_all(self) -> List[Customer]:
        with self._lock:
            return [c.model_copy() for c in self._customers.values()]

    def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        with self._lock:
            customer = self._customers.get(customer_id)
        return customer.model_copy() if customer else None

    def create(self, customer: Customer) -> Customer:
        record = prepare_create(customer)
        with self._lock:
            if record.id in self._customers:
                raise ValidationError([{"field": "id", "message": "Customer id already exists"}])
            self._customers[record.id] = record
        logger.info("Created customer %s", record.id)
        return record.model_copy()

    def update(self, customer_id: UUID, customer: Customer) -> None:
        record = check_update(customer_id, customer)
        with self._lock:
            if customer_id not in self._customers:
                raise NotFound(customer_id)
            self._customers[customer_id] = record
        logger.info("Updated customer %s", customer_id)

    def delete(self, customer_id: UUID) -> None:
        with self._lock:
            if self._customers.pop(customer_id, None) is None:
                raise NotFound(customer_id)
        logger.info("Deleted customer %s", customer_id)
