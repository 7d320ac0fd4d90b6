"""
Точка входа FastAPI приложения.

Выгрузка заказов FLIP в Google Sheets и печать этикеток со штрихкодами.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from postavka.api.routes import barcodes, health, orders
from postavka.config import get_settings
from postavka.services.errors import CollaboratorError, InputValidationError, PostavkaError

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn, release=settings.app_version)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifecycle приложения.

    Создаёт каталог для PDF при старте.
    """
    Path(settings.pdf_dir).mkdir(parents=True, exist_ok=True)
    logger.info(f"[START] {settings.app_name} v{settings.app_version}")

    yield

    logger.info(f"[STOP] {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## Postavka API

* **Выгрузка заказов** — позиции заказа → лист Google Sheets с итогами и оформлением
* **Печать штрихкодов** — позиции заказа → PDF с этикетками 30x20 или 58x40 мм
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(PostavkaError)
async def postavka_error_handler(request: Request, exc: PostavkaError) -> JSONResponse:
    """Ошибки сервиса -> {"error": ...} с кодом из исключения."""
    if isinstance(exc, CollaboratorError):
        logger.error(f"[ERROR] {request.url.path}: {exc}", exc_info=exc)
        sentry_sdk.capture_exception(exc)
    elif isinstance(exc, InputValidationError):
        logger.warning(f"[ERROR] {request.url.path}: {exc}")

    return JSONResponse(status_code=exc.status_code, content={"error": exc.user_message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Невалидное тело запроса (orders не массив и т.п.) -> 400."""
    logger.warning(f"[ERROR] {request.url.path}: невалидный запрос: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": InputValidationError.user_message},
    )


# Подключение роутеров
app.include_router(health.router, tags=["Health"])
app.include_router(orders.router, tags=["Export"])
app.include_router(barcodes.router, tags=["Labels"])

# Сгенерированные PDF (только чтение, без очистки)
app.mount("/pdfs", StaticFiles(directory=settings.pdf_dir, check_dir=False), name="pdfs")


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Корневой эндпоинт — ссылка на документацию."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
