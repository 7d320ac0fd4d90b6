"""
Выгрузка заказов в Google Sheets.

Workflow:
1. Нормализация позиций
2. Чтение справочника замен (второй лист)
3. Построение модели отчёта
4. Публикация на первый лист (очистка -> запись -> стили)

Вызовы Google API блокирующие, поэтому выполняются в потоке.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import date

from postavka.config import Settings
from postavka.models.schemas import OrderIn
from postavka.services.errors import ReferenceFetchError
from postavka.services.normalizer import normalize_orders
from postavka.services.reference_lookup import build_reference_lookup
from postavka.services.report_builder import ReportModel, build_report
from postavka.services.report_publisher import ReportPublisher
from postavka.services.sheets_client import SheetsClient

logger = logging.getLogger(__name__)


async def export_orders(
    raw_orders: Sequence[OrderIn],
    client: SheetsClient,
    settings: Settings,
    order_date: date | None = None,
) -> ReportModel:
    """
    Выгрузить заказы в таблицу.

    Args:
        raw_orders: Позиции из запроса
        client: Клиент таблицы
        settings: Настройки (имена листов, каталог)
        order_date: Дата заказа (по умолчанию — сегодня)

    Returns:
        Опубликованная модель отчёта

    Raises:
        ReferenceFetchError: Не удалось прочитать справочник
        ReportPublishError: Сбой публикации
    """
    orders = normalize_orders(raw_orders)

    reference_range = f"{settings.reference_sheet}!A:C"
    try:
        reference_rows = await asyncio.to_thread(client.get_values, reference_range)
    except Exception as e:
        raise ReferenceFetchError(f"Не удалось прочитать {reference_range}: {e}") from e

    lookup = build_reference_lookup(reference_rows)

    model = build_report(
        orders,
        lookup,
        sheet=settings.report_sheet,
        catalog_url=settings.catalog_url,
        order_date=order_date,
    )

    publisher = ReportPublisher(client, sheet_id=settings.report_sheet_id)
    await asyncio.to_thread(publisher.publish, model)

    logger.info(
        f"[EXPORT] Выгружено позиций: {len(model.rows)}, "
        f"кол-во: {model.total.quantity}, сумма: {model.total.amount}"
    )
    return model
