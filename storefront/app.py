from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from storefront.applications.interfaces.dtos.envelope import QResult, ValidationErrorPayload
from storefront.applications.interfaces.dtos.message import Message
from storefront.domain.exceptions import (
    ConsistencyError,
    DispatchError,
    DomainError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from storefront.infrastructure.logging.logger import Logger, setup_logging
from storefront.infrastructure.persistence.database import (
    dispose_engine,
    get_dispatcher,
    get_engine,
    get_session,
    set_engine,
)
from storefront.infrastructure.persistence.dispatcher import BlockingDispatcher
from storefront.presentation.routers import categories, products, stores

setup_logging()
logger = Logger.get_logger(__name__)

ERROR_STATUS = {
    NotFoundError: HTTPStatus.NOT_FOUND,
    ValidationError: HTTPStatus.BAD_REQUEST,
    RepositoryError: HTTPStatus.BAD_REQUEST,
    DispatchError: HTTPStatus.INTERNAL_SERVER_ERROR,
    ConsistencyError: HTTPStatus.INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    set_engine(get_engine(), get_dispatcher())
    try:
        yield
    finally:
        dispose_engine()


app = FastAPI(lifespan=lifespan)

app.include_router(products.router)
app.include_router(categories.router)
app.include_router(stores.router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    status = ERROR_STATUS.get(type(exc), HTTPStatus.INTERNAL_SERVER_ERROR)
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status, content=QResult[int](rows=0, error=str(exc)).model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    payload = ValidationErrorPayload(message="Validation error", fields=fields)
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content=payload.model_dump())


@app.get("/", status_code=HTTPStatus.OK, response_model=Message)
def read_root():
    return {"message": "storefront"}


@app.get("/health", status_code=HTTPStatus.OK, response_model=Message)
async def health(
    session: Annotated[Session, Depends(get_session)],
    dispatcher: Annotated[BlockingDispatcher, Depends(get_dispatcher)],
):
    def ping() -> None:
        with session.begin():
            session.execute(text("SELECT 1"))

    await dispatcher.run(ping)
    return {"message": "ok"}
