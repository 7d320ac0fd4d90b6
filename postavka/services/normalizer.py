"""
Нормализация позиций заказа.

Единственное место, где сырые поля заказа превращаются в типизированные
значения. Политика мягкая: невалидное число — 0, отсутствующий текст —
пустая строка, исключения не бросаются.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from postavka.models.order import Order
from postavka.models.schemas import OrderIn

# Ведущее целое, как parseInt: пробелы, знак, цифры, дальше — что угодно
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_NON_DIGITS_RE = re.compile(r"\D")
_QUOTES_RE = re.compile(r"[«»\"]")


def coerce_int(value: Any) -> int:
    """
    Привести значение к целому >= 0.

    Примеры:
        "3" -> 3, "3.7" -> 3, "3 шт" -> 3, "abc" -> 0, -2 -> 0, None -> 0
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        number = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if not match:
            return 0
        number = int(match.group(1))
    else:
        return 0

    return max(number, 0)


def coerce_price(value: Any) -> int:
    """
    Цена в целых единицах.

    Из строки выбрасываются все нецифровые символы ("1 500 ₸" -> 1500).
    Числа обрабатываются как в coerce_int.
    """
    if isinstance(value, str):
        digits = _NON_DIGITS_RE.sub("", value)
        return int(digits) if digits else 0
    return coerce_int(value)


def sanitize_text(value: Any) -> str:
    """
    Очистка названия товара для таблицы и этикетки.

    Переносы строк -> пробел, кавычки «»" удаляются, & -> " and ".
    Повторное применение ничего не меняет.
    """
    if value is None:
        return ""

    text = str(value)
    text = text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    text = _QUOTES_RE.sub("", text)
    text = text.replace("&", " and ")
    return text.strip()


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_order(raw: OrderIn | Mapping[str, Any]) -> Order:
    """Нормализовать одну позицию (модель запроса или dict в camelCase)."""
    if isinstance(raw, OrderIn):
        fields = raw.model_dump(by_alias=True)
    else:
        fields = dict(raw)

    return Order(
        supplier_code=_text(fields.get("supplierCode")),
        flip_code=_text(fields.get("flipCode")),
        product_name=sanitize_text(fields.get("productName")),
        quantity=coerce_int(fields.get("quantity")),
        price=coerce_price(fields.get("price")),
    )


def normalize_orders(raws: Iterable[OrderIn | Mapping[str, Any]]) -> list[Order]:
    """Нормализовать позиции, сохраняя порядок."""
    return [normalize_order(raw) for raw in raws]
