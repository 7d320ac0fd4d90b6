"""
Конфигурация сервиса выгрузки поставок.

Все настройки в одном месте (SSOT — Single Source of Truth).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelSettings:
    """
    Константы генерации этикеток со штрихкодами.

    Координаты и размеры в пунктах PDF (1/72 дюйма).
    """

    # 1 мм в пунктах PDF
    MM_TO_POINTS: float = 2.83464567

    # Максимальная длина названия товара на этикетке
    PRODUCT_NAME_MAX_CHARS: int = 50

    # Отступ текстовых блоков от края этикетки
    TEXT_MARGIN: float = 2.0

    # Масштаб модуля Code128 (ширина бара)
    BARCODE_SCALE: int = 2

    # Подставляется вместо пустого кода поставщика / кода FLIP
    MISSING_CODE: str = "N/A"

    FLIP_CODE_PREFIX: str = "КОД FLIP - "

    @classmethod
    def mm_to_points(cls, mm: float) -> float:
        """Конвертация миллиметров в пункты PDF."""
        return mm * cls.MM_TO_POINTS


class ReportSettings:
    """
    Константы отчёта в Google Sheets.

    Раскладка листа фиксирована: заголовок в C1, шапка в строке 3,
    данные с 4-й строки, затем строка итогов.
    """

    TITLE: str = "ПОСТАВКА (К)"
    TITLE_CELL: str = "C1"
    TITLE_FONT_SIZE: int = 20

    HEADERS: list[str] = [
        "Код поставщика",
        "КОД FLIP",
        "Наименование + ссылка на товар",
        "Кол-во",
        "Цена",
        "Сумма",
        "Срок годности",
        "Дата заказа",
    ]
    TOTAL_LABEL: str = "ИТОГО:"

    # Номера строк (1-based, как в A1-нотации)
    HEADER_ROW: int = 3
    FIRST_DATA_ROW: int = 4

    # Область, которая очищается перед каждой выгрузкой
    CLEAR_RANGE: str = "A1:ZZ10000"
    RESET_ROWS: int = 10000
    RESET_COLUMNS: int = 702

    # Ширина колонок в пикселях: (start, end) -> px. Колонка 2 — автоширина
    COLUMN_WIDTHS: list[tuple[int, int, int]] = [
        (0, 1, 120),
        (1, 2, 80),
        (3, 7, 100),
        (7, 8, 100),
    ]
    AUTO_RESIZE_COLUMN: int = 2

    DATE_FORMAT: str = "%d.%m.%Y"


class Settings(BaseSettings):
    """
    Настройки приложения из переменных окружения.

    Загружаются из .env файла или переменных окружения.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Приложение ===
    app_name: str = "Postavka API"
    app_version: str = "0.1.0"
    debug: bool = False

    # === Google Sheets ===
    google_credentials_file: str = Field(default="credentials.json")
    spreadsheet_id: str = Field(default="1_Tj2MdjT0H4AhVTQiuG50HgQmugNQ_pAV7SsT9pJ5Is")
    report_sheet: str = "Лист1"
    reference_sheet: str = "Лист2"
    report_sheet_id: int = 0

    # Каталог FLIP, на который ведут ссылки в отчёте
    catalog_url: str = "https://www.flip.kz/catalog"

    # === Файлы ===
    # Каталог со сгенерированными PDF (раздаётся по /pdfs)
    pdf_dir: str = "pdfs"
    # Базовый URL для ссылок на PDF; пусто — берётся из запроса
    public_base_url: str = Field(default="")
    # TTF с кириллицей для текста на этикетках
    font_path: str = Field(default="/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf")

    # === CORS ===
    allowed_origins: list[str] = Field(default=["*"])

    # === Мониторинг ошибок (GlitchTip/Sentry) ===
    sentry_dsn: str = Field(default="")

    # === Логирование ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @computed_field
    @property
    def spreadsheet_url(self) -> str:
        """Постоянная ссылка на таблицу с отчётом."""
        return f"https://docs.google.com/spreadsheets/d/{self.spreadsheet_id}"


@lru_cache
def get_settings() -> Settings:
    """
    Получить настройки приложения (singleton).

    Использует кэширование для избежания повторного чтения .env
    """
    return Settings()


# Экспорт констант для удобства
LABEL = LabelSettings()
REPORT = ReportSettings()
