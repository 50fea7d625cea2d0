import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.v1.routes_account import router as account_router
from app.api.v1.routes_admin import router as admin_router
from app.api.v1.routes_catalog import admin_router as catalog_admin_router
from app.api.v1.routes_catalog import router as catalog_router
from app.api.v1.routes_checkout import router as checkout_router
from app.api.v1.routes_orders import router as orders_router
from app.api.v1.routes_purchases import router as purchases_router
from app.api.v1.routes_reports import router as reports_router
from app.core.config import settings
from app.core.errors import ShopError
from app.core.logging_config import configure_logging
from app.db.base import engine
from app.db.init_db import create_all

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_all(engine)
    logger.info("%s started", settings.APP_NAME)
    yield
    await engine.dispose()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.include_router(checkout_router)
app.include_router(orders_router)
app.include_router(purchases_router)
app.include_router(reports_router)
app.include_router(catalog_router)
app.include_router(catalog_admin_router)
app.include_router(account_router)
app.include_router(admin_router)


@app.exception_handler(ShopError)
async def shop_error_handler(request: Request, exc: ShopError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code, "details": exc.details},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error", "code": "internal_error"})


@app.get("/health")
async def health():
    return {"status": "ok"}
