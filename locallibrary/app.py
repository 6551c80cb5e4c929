import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from locallibrary.errors import NotFoundError
from locallibrary.routers import authors, books, catalog, genres

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": exc.detail})


async def store_failure_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Store failure during %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Store failure"})


def create_app() -> FastAPI:
    app = FastAPI(title="Local Library", version="0.1.0")
    app.include_router(catalog.router)
    app.include_router(genres.router)
    app.include_router(authors.router)
    app.include_router(books.router)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(SQLAlchemyError, store_failure_handler)
    return app


app = create_app()
