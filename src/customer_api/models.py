from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError


REQUIRED_FIELDS = ("first_name", "last_name", "email", "phone_number")


class Customer(BaseModel):
    """A customer record. Serialized with camelCase keys (``firstName`` ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[UUID] = None
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    email: str
    phone_number: str


def _violation(field_name: str, message: str) -> Dict[str, str]:
    return {"field": Customer.model_fields[field_name].alias or field_name, "message": message}


def validate_customer(customer: Customer) -> List[Dict[str, str]]:
    """Return every constraint ``customer`` violates; an empty list means valid."""
    violations: List[Dict[str, str]] = []
    for name in REQUIRED_FIELDS:
        value = getattr(customer, name, None)
        if value is None or not str(value).strip():
            violations.append(_violation(name, "Field is required"))

    email = getattr(customer, "email", None)
    if email and str(email).strip():
        try:
            _, address = validate_email(str(email))
        except PydanticCustomError as exc:
            violations.append(_violation("email", str(exc)))
        else:
            #Display-name forms and surrounding whitespace parse but are not bare addresses
            if address.lower() != str(email).lower():
                violations.append(_violation("email", "value is not a plain email address"))
    return violations


def customer_from_row(row) -> Customer:
    return Customer(
        id=row["id"],
        first_name=row["first_name"],
        middle_name=row["middle_name"],
        last_name=row["last_name"],
        email=row["email"],
        phone_number=row["phone_number"],
    )
