"""
API эндпоинт печати этикеток со штрихкодами.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from postavka.api.dependencies import get_label_generator, get_pdf_storage
from postavka.config import Settings, get_settings
from postavka.models.label_types import LabelProfile
from postavka.models.schemas import ErrorResponse, PrintBarcodesRequest, PrintBarcodesResponse
from postavka.services.errors import LabelRenderError, OrdersValidationError
from postavka.services.file_storage import PdfStorage
from postavka.services.label_generator import LabelPageGenerator
from postavka.services.normalizer import normalize_orders

logger = logging.getLogger(__name__)

router = APIRouter()


def build_pdf_url(request: Request, settings: Settings, filename: str) -> str:
    """Публичная ссылка на PDF (через public_base_url или хост запроса)."""
    base = settings.public_base_url or str(request.base_url)
    return f"{base.rstrip('/')}/pdfs/{filename}"


@router.post(
    "/print-barcodes",
    response_model=PrintBarcodesResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def print_barcodes(
    body: PrintBarcodesRequest,
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    generator: Annotated[LabelPageGenerator, Depends(get_label_generator)],
    storage: Annotated[PdfStorage, Depends(get_pdf_storage)],
) -> PrintBarcodesResponse:
    """
    PDF с этикетками: по одной странице на каждую единицу товара.

    Args:
        body: Позиции заказа и размер этикетки (30x20 / 58x40)

    Returns:
        PrintBarcodesResponse со ссылкой на PDF
    """
    if not body.orders:
        raise OrdersValidationError("orders отсутствует или пуст")

    profile = LabelProfile.parse(body.label_size)
    orders = normalize_orders(body.orders)

    logger.info(f"[LABELS] Запрос на печать: {len(orders)} позиций, размер {profile.value}")

    pdf_bytes = await generator.generate(orders, profile)
    try:
        filename = await asyncio.to_thread(storage.save, pdf_bytes)
    except OSError as e:
        raise LabelRenderError(f"Не удалось сохранить PDF: {e}") from e

    return PrintBarcodesResponse(success=True, pdf_url=build_pdf_url(request, settings, filename))
