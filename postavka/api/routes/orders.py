"""
API эндпоинт выгрузки заказов в Google Sheets.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from postavka.api.dependencies import get_sheets_client
from postavka.config import Settings, get_settings
from postavka.models.schemas import ErrorResponse, ExportRequest, ExportResponse
from postavka.services.errors import OrdersValidationError
from postavka.services.order_export import export_orders
from postavka.services.sheets_client import SheetsClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/export",
    response_model=ExportResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def export(
    request: ExportRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    client: Annotated[SheetsClient, Depends(get_sheets_client)],
) -> ExportResponse:
    """
    Выгрузка заказов в таблицу.

    Предыдущее содержимое листа полностью заменяется: очистка,
    справочник замен со второго листа, данные, итоги, оформление.

    Args:
        request: Позиции заказа

    Returns:
        ExportResponse со ссылкой на таблицу
    """
    if request.orders is None:
        raise OrdersValidationError("orders отсутствует")

    logger.info(f"[EXPORT] Запрос на выгрузку: {len(request.orders)} позиций")

    await export_orders(request.orders, client, settings)

    return ExportResponse(
        success=True,
        message="Заказы успешно выгружены",
        spreadsheet_url=settings.spreadsheet_url,
    )
