"""
Справочник замен из второго листа таблицы.

Колонки: код поставщика, текст для отчёта, срок годности.
Первая строка — шапка, пропускается.
"""

import logging
from collections.abc import Sequence
from typing import Any

from postavka.models.order import ReferenceLookup

logger = logging.getLogger(__name__)


def _cell(row: Sequence[Any], index: int) -> str:
    """Значение ячейки без пробелов по краям (короткие строки дополняются "")."""
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def build_reference_lookup(rows: Sequence[Sequence[Any]] | None) -> ReferenceLookup:
    """
    Построить справочник из строк диапазона A:C.

    Строка попадает в карту текстов, только если непусты код и текст;
    независимо от этого — в карту сроков, если непусты код и срок.
    При повторе кода побеждает последняя строка.
    """
    lookup = ReferenceLookup()

    for row in (rows or [])[1:]:
        code = _cell(row, 0)
        if not code:
            continue

        text = _cell(row, 1)
        expiration = _cell(row, 2)

        if text:
            lookup.texts[code] = text
        if expiration:
            lookup.expirations[code] = expiration

    logger.debug(
        f"[REFERENCE] Загружено замен: {len(lookup.texts)}, сроков: {len(lookup.expirations)}"
    )
    return lookup
