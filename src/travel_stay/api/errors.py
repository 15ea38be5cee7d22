"""
travel_stay.api.errors

Boundary mapping from domain errors to HTTP responses.

Responsibilities:
- Render every `TravelStayError` with its status code and a uniform body.
- Report store driver failures as `StoreUnavailable` (503).
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from travel_stay.errors import StoreUnavailable, TravelStayError
from travel_stay.observability.logging import get_logger

log = get_logger(__name__)


def _body(err: TravelStayError) -> dict[str, object]:
    return {"error": True, "message": err.message}


async def _domain_error(_: Request, exc: TravelStayError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=_body(exc), headers=headers)


async def _store_error(_: Request, exc: SQLAlchemyError) -> JSONResponse:
    log.error("store_unavailable", error=str(exc), exc_info=exc)
    err = StoreUnavailable()
    return JSONResponse(status_code=err.status_code, content=_body(err))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TravelStayError, _domain_error)
    app.add_exception_handler(SQLAlchemyError, _store_error)
