from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import os

from stowtrack.database import engine
from stowtrack.database import Base
import stowtrack.models  # noqa: F401  registers all models
from stowtrack.config import settings
from stowtrack.exceptions import (
    InventoryError,
    InvalidArgumentError,
    NotFoundError,
    AlreadyExistsError,
    CycleDetectedError,
    ConstraintViolationError,
)
from stowtrack.routers import health, items, locations

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    InvalidArgumentError: 400,
    CycleDetectedError: 400,
    ConstraintViolationError: 400,
    NotFoundError: 404,
    AlreadyExistsError: 409,
}


@asynccontextmanager
async def lifespan(application: FastAPI):
    logging.getLogger("stowtrack").setLevel(settings.LOG_LEVEL)
    # Dev mode without alembic: make sure the SQLite file has somewhere to live
    if settings.DATABASE_URL.startswith("sqlite:///./data/"):
        os.makedirs("data", exist_ok=True)
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="StowTrack",
    description="Hierarchical inventory of locations and the items stored in them",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    status_code = STATUS_BY_ERROR.get(type(exc), 400)
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


app.include_router(health.router)
app.include_router(locations.router)
app.include_router(items.router)
