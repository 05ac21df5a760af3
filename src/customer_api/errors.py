from typing import Any, Dict, List, Optional
from uuid import UUID


class CustomerStoreError(Exception):
    """Base class for errors raised by the customer record store."""


class ValidationError(CustomerStoreError):
    def __init__(self, violations: List[Dict[str, Any]]):
        self.violations = violations
        fields = ", ".join(v["field"] for v in violations)
        super().__init__(f"Invalid customer data: {fields}")


class IdMismatch(CustomerStoreError):
    def __init__(self, path_id: UUID, body_id: Optional[UUID]):
        self.path_id = path_id
        self.body_id = body_id
        super().__init__(f"Customer id {body_id} does not match {path_id}")


class NotFound(CustomerStoreError):
    def __init__(self, customer_id: UUID):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found")


class StoreFault(CustomerStoreError):
    """The underlying database failed; the operation was rolled back."""
