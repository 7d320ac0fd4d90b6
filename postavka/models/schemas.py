"""
Pydantic схемы для API.

Модели запросов и ответов. Имена полей в JSON — camelCase, как их
присылает фронтенд.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# === Заказы ===


class OrderIn(BaseModel):
    """Позиция заказа в том виде, в каком её прислал клиент."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Значения принимаются как есть: коды бывают числами, количество и цена
    # строками ("3", "1 500 ₸"). Приведение типов делает normalize_orders
    supplier_code: Any = Field(default=None, alias="supplierCode")
    flip_code: Any = Field(default=None, alias="flipCode")
    product_name: Any = Field(default=None, alias="productName")
    quantity: Any = Field(default=None)
    price: Any = Field(default=None)


class ExportRequest(BaseModel):
    """Запрос на выгрузку заказов в Google Sheets."""

    orders: list[OrderIn] | None = Field(default=None, description="Позиции заказа")


class ExportResponse(BaseModel):
    """Результат выгрузки."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = Field(description="Сообщение для пользователя")
    spreadsheet_url: str = Field(alias="spreadsheetUrl", description="Ссылка на таблицу")


# === Штрихкоды ===


class PrintBarcodesRequest(BaseModel):
    """Запрос на печать этикеток со штрихкодами."""

    model_config = ConfigDict(populate_by_name=True)

    orders: list[OrderIn] | None = Field(default=None, description="Позиции заказа")
    label_size: str | None = Field(
        default=None,
        alias="labelSize",
        description="Размер этикетки: 30x20 или 58x40 (по умолчанию)",
    )


class PrintBarcodesResponse(BaseModel):
    """Ссылка на сгенерированный PDF."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    pdf_url: str = Field(alias="pdfUrl", description="Ссылка на PDF с этикетками")


class ErrorResponse(BaseModel):
    """Ответ с ошибкой."""

    error: str = Field(description="Сообщение об ошибке")
