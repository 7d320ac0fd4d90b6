"""
Декларативные операции над листом Google Sheets.

Построитель отчёта возвращает список таких операций, публикатор
превращает их в запросы batchUpdate через to_request(). Так раскладку
и стили можно проверять без подключения к таблице.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Literal

BLACK = {"red": 0, "green": 0, "blue": 0}
WHITE = {"red": 1, "green": 1, "blue": 1}
YELLOW = {"red": 1, "green": 1, "blue": 0}
GREEN = {"red": 0, "green": 1, "blue": 0}
RED = {"red": 1, "green": 0, "blue": 0}


class DirectiveKind(str, Enum):
    """Вид операции над листом."""

    REPEAT_CELL = "repeatCell"
    UPDATE_BORDERS = "updateBorders"
    COLUMN_WIDTH = "updateDimensionProperties"
    AUTO_RESIZE = "autoResizeDimensions"
    ADD_CONDITIONAL_RULE = "addConditionalFormatRule"
    DELETE_CONDITIONAL_RULE = "deleteConditionalFormatRule"


@dataclass(frozen=True)
class GridRange:
    """Диапазон ячеек, индексы 0-based, конец не включается."""

    start_row: int
    end_row: int
    start_column: int
    end_column: int

    def to_dict(self, sheet_id: int) -> dict[str, int]:
        return {
            "sheetId": sheet_id,
            "startRowIndex": self.start_row,
            "endRowIndex": self.end_row,
            "startColumnIndex": self.start_column,
            "endColumnIndex": self.end_column,
        }


@dataclass(frozen=True)
class ValueWrite:
    """Запись значений в диапазон A1 (values.update)."""

    range_a1: str
    values: list[list[Any]]
    input_option: Literal["RAW", "USER_ENTERED"] = "RAW"


@dataclass(frozen=True)
class RepeatCell:
    """Формат, применяемый ко всем ячейкам диапазона."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.REPEAT_CELL

    grid: GridRange
    cell_format: dict[str, Any]
    fields: str

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        return {
            self.kind.value: {
                "range": self.grid.to_dict(sheet_id),
                "cell": {"userEnteredFormat": self.cell_format},
                "fields": self.fields,
            }
        }


@dataclass(frozen=True)
class UpdateBorders:
    """Рамка одного стиля по всем краям и внутренним линиям диапазона."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.UPDATE_BORDERS

    grid: GridRange
    style: Literal["SOLID", "SOLID_MEDIUM", "SOLID_THICK"] = "SOLID"
    width: int = 1

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        border = {"style": self.style, "width": self.width, "color": BLACK}
        sides = ("top", "bottom", "left", "right", "innerHorizontal", "innerVertical")
        body: dict[str, Any] = {"range": self.grid.to_dict(sheet_id)}
        body.update({side: dict(border) for side in sides})
        return {self.kind.value: body}


@dataclass(frozen=True)
class ColumnWidth:
    """Фиксированная ширина колонок [start, end) в пикселях."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.COLUMN_WIDTH

    start: int
    end: int
    pixel_size: int

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        return {
            self.kind.value: {
                "range": {
                    "sheetId": sheet_id,
                    "dimension": "COLUMNS",
                    "startIndex": self.start,
                    "endIndex": self.end,
                },
                "properties": {"pixelSize": self.pixel_size},
                "fields": "pixelSize",
            }
        }


@dataclass(frozen=True)
class AutoResizeColumns:
    """Автоширина колонок [start, end)."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.AUTO_RESIZE

    start: int
    end: int

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        return {
            self.kind.value: {
                "dimensions": {
                    "sheetId": sheet_id,
                    "dimension": "COLUMNS",
                    "startIndex": self.start,
                    "endIndex": self.end,
                }
            }
        }


@dataclass(frozen=True)
class AddConditionalRule:
    """Условное форматирование: ячейка == value -> заливка background."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.ADD_CONDITIONAL_RULE

    grid: GridRange
    condition: str = "NUMBER_EQ"
    value: str = "0"
    background: dict[str, int] = field(default_factory=lambda: dict(RED))
    index: int = 0

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        return {
            self.kind.value: {
                "rule": {
                    "ranges": [self.grid.to_dict(sheet_id)],
                    "booleanRule": {
                        "condition": {
                            "type": self.condition,
                            "values": [{"userEnteredValue": self.value}],
                        },
                        "format": {"backgroundColor": self.background},
                    },
                },
                "index": self.index,
            }
        }


@dataclass(frozen=True)
class DeleteConditionalRule:
    """Удаление правила условного форматирования по индексу."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.DELETE_CONDITIONAL_RULE

    index: int = 0

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        return {self.kind.value: {"sheetId": sheet_id, "index": self.index}}


SheetDirective = (
    RepeatCell
    | UpdateBorders
    | ColumnWidth
    | AutoResizeColumns
    | AddConditionalRule
    | DeleteConditionalRule
)


def to_requests(directives: list[SheetDirective], sheet_id: int) -> list[dict[str, Any]]:
    """Запросы batchUpdate в исходном порядке."""
    return [directive.to_request(sheet_id) for directive in directives]
