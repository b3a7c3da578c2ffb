import logging
import os
import sqlite3
from contextlib import asynccontextmanager
from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from freezer_tracker.core.errors import FreezerError
from freezer_tracker.db.database import get_db_path, init_db
from app.dependencies import SESSION_COOKIE, auth_enabled, is_public, verify_session_token
from app.routers import (
    auth, breast_milk, export, freshness, inventory, preferences, prepared_meals,
    raw_food, red_zone, stats,
)

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Idempotent: creates missing tables and inserts missing default thresholds
    init_db()
    logger.info("Freezer database ready at %s", get_db_path())
    yield


app = FastAPI(title="Freezer Tracker", lifespan=lifespan)


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    if auth_enabled() and not is_public(request.url.path):
        token = request.cookies.get(SESSION_COOKIE)
        if not token or not verify_session_token(token):
            return JSONResponse({"detail": "Not authenticated"}, status_code=401)
    return await call_next(request)


@app.exception_handler(FreezerError)
async def freezer_error_handler(request: Request, exc: FreezerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse({"detail": message}, status_code=400)


@app.exception_handler(sqlite3.Error)
async def storage_error_handler(request: Request, exc: sqlite3.Error):
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"detail": "Internal storage error"}, status_code=500)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(auth.router)
app.include_router(raw_food.router)
app.include_router(prepared_meals.router)
app.include_router(breast_milk.router)
app.include_router(inventory.router)
app.include_router(stats.router)
app.include_router(freshness.router)
app.include_router(red_zone.router)
app.include_router(export.router)
app.include_router(preferences.router)
