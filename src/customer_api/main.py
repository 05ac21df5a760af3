"""FastAPI application for the customer service.

``create_app`` wires a :class:`~customer_api.store.CustomerStore` into a new
app; ``app`` is built at import time with the PostgreSQL store so the service
can be served with::

    uvicorn customer_api.main:app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import Settings, settings as default_settings
from .customers import PostgresCustomerStore
from .errors import StoreFault, ValidationError
from .logging_config import setup_logging
from .routes import router
from .store import CustomerStore

logger = logging.getLogger(__name__)


def _field_name(loc) -> str:
    #Malformed JSON reports a byte offset as the last location element
    if not loc or isinstance(loc[-1], int):
        return "body"
    return str(loc[-1])


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        violations = [{"field": _field_name(err.get("loc")), "message": err.get("msg", "")} for err in exc.errors()]
        return JSONResponse(status_code=400, content={"detail": violations})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": exc.violations})

    @app.exception_handler(StoreFault)
    async def store_fault_handler(request: Request, exc: StoreFault):
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def create_app(store: Optional[CustomerStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)
    store = store or PostgresCustomerStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_schema:
            app.state.store.create_schema()
        yield

    app = FastAPI(title=settings.title, version=settings.version, lifespan=lifespan)
    app.state.store = store
    app.include_router(router)
    register_exception_handlers(app)
    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_level=default_settings.log_level.lower())


if __name__ == "__main__":
    main()
