import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from inventory_api import __version__
from inventory_api.api.health import router as health_router
from inventory_api.api.routes_auth import router as auth_router
from inventory_api.api.routes_catalogue import router as catalogue_router
from inventory_api.api.routes_categories import router as categories_router
from inventory_api.api.routes_reports import router as reports_router
from inventory_api.api.routes_stock import router as stock_router
from inventory_api.api.routes_users import router as users_router
from inventory_api.config import settings
from inventory_api.db import SessionLocal, init_db
from inventory_api.db.seed import seed_database
from inventory_api.logging_config import configure_logging
from inventory_api.services.exceptions import AuthenticationError, InventoryError

configure_logging(settings.LOG_LEVEL)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db(reset=settings.RESET_DB)
    if settings.SEED_DB:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()
    yield


app = FastAPI(title="Inventory API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # a concurrent insert beat the uniqueness pre-check; the unit of work is already rolled back
    log.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"detail": "Conflicting update; the record already exists"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(auth_router)

app.include_router(categories_router)

app.include_router(catalogue_router)

app.include_router(stock_router)

app.include_router(reports_router)

app.include_router(users_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("inventory_api.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
