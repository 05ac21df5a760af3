import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response

from .errors import NotFound, ValidationError
from .models import Customer, validate_customer
from .store import CustomerStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> CustomerStore:
    return request.app.state.store


def require_valid(customer: Customer) -> None:
    #Rejects bad input before the store is called
    violations = validate_customer(customer)
    if violations:
        raise ValidationError(violations)


@router.get("/health")
def health_endpoint():
    return {"status": "ok"}


@router.get("/customers", response_model=List[Customer])
def list_customers_endpoint(store: CustomerStore = Depends(get_store)):
    return store.list_all()


@router.get("/customers/{customer_id}", response_model=Customer, name="get_customer")
def get_customer_endpoint(customer_id: UUID, store: CustomerStore = Depends(get_store)):
    customer = store.get_by_id(customer_id)
    if customer is None:
        logger.debug("Customer %s not found", customer_id)
        return Response(status_code=404)
    return customer


@router.post("/customers", response_model=Customer, status_code=201)
def create_customer_endpoint(
    payload: Customer,
    request: Request,
    response: Response,
    store: CustomerStore = Depends(get_store),
):
    require_valid(payload)
    customer = store.create(payload)
    response.headers["Location"] = str(request.url_for("get_customer", customer_id=str(customer.id)))
    return customer


@router.put("/customers/{customer_id}", status_code=204)
def update_customer_endpoint(
    customer_id: UUID,
    payload: Customer,
    store: CustomerStore = Depends(get_store),
):
    if payload.id != customer_id:
        return Response(status_code=400)
    require_valid(payload)
    try:
        store.update(customer_id, payload)
    except NotFound:
        return Response(status_code=404)
    return Response(status_code=204)


@router.delete("/customers/{customer_id}", status_code=204)
def delete_customer_endpoint(customer_id: UUID, store: CustomerStore = Depends(get_store)):
    try:
        store.delete(customer_id)
    except NotFound:
        return Response(status_code=404)
    return Response(status_code=204)
