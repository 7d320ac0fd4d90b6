"""
Dependencies для FastAPI эндпоинтов.

Внешние клиенты создаются на каждый запрос: у запросов нет общего
изменяемого состояния, кроме самой таблицы и каталога с PDF.
"""

from typing import Annotated

from fastapi import Depends

from postavka.config import Settings, get_settings
from postavka.services.file_storage import PdfStorage
from postavka.services.label_generator import LabelPageGenerator
from postavka.services.sheets_client import SheetsClient


def get_sheets_client(settings: Annotated[Settings, Depends(get_settings)]) -> SheetsClient:
    """
    Dependency для клиента Google Sheets.

    Args:
        settings: Настройки (ключ сервисного аккаунта, id таблицы)

    Returns:
        SheetsClient для таблицы отчёта (ключ читается при первом запросе к API)
    """
    return SheetsClient.from_settings(settings)


def get_pdf_storage(settings: Annotated[Settings, Depends(get_settings)]) -> PdfStorage:
    """Dependency для хранилища PDF."""
    return PdfStorage(settings.pdf_dir)


def get_label_generator(
    settings: Annotated[Settings, Depends(get_settings)],
) -> LabelPageGenerator:
    """Dependency для генератора этикеток."""
    return LabelPageGenerator(font_path=settings.font_path)
