"""
Построитель отчёта о поставке для Google Sheets.

Возвращает ReportModel: значения по диапазонам и список декларативных
операций форматирования. Сам ничего в таблицу не пишет.

Раскладка листа:
    C1        — заголовок "ПОСТАВКА (К)"
    A3:H3     — шапка
    A4:H{n}   — по строке на позицию, в порядке запроса
    A{n+1}:H  — итоги
"""

import json
from dataclasses import dataclass, field
from datetime import date

from postavka.config import REPORT
from postavka.models.order import Order, ReferenceLookup, ReportRow, TotalsRow
from postavka.models.sheet_directives import (
    BLACK,
    GREEN,
    RED,
    WHITE,
    YELLOW,
    AddConditionalRule,
    AutoResizeColumns,
    ColumnWidth,
    GridRange,
    RepeatCell,
    SheetDirective,
    UpdateBorders,
    ValueWrite,
)
from postavka.services.normalizer import sanitize_text

COLUMN_COUNT = len(REPORT.HEADERS)
LAST_COLUMN = "H"

# Индексы колонок (0-based)
COL_NAME = 2
COL_QUANTITY = 3
COL_PRICE = 4
COL_AMOUNT = 5
COL_EXPIRATION = 6
COL_ORDER_DATE = 7


@dataclass
class ReportModel:
    """Полное содержимое листа отчёта до публикации."""

    sheet: str
    title: ValueWrite
    header: ValueWrite
    data: ValueWrite | None  # None — заказов нет
    totals: ValueWrite
    rows: list[ReportRow]
    total: TotalsRow
    reset_directives: list[SheetDirective] = field(default_factory=list)
    style_directives: list[SheetDirective] = field(default_factory=list)

    @property
    def clear_range(self) -> str:
        return f"{self.sheet}!{REPORT.CLEAR_RANGE}"

    @property
    def totals_row_number(self) -> int:
        """Номер строки итогов (1-based)."""
        return REPORT.FIRST_DATA_ROW + len(self.rows)


def format_order_date(day: date) -> str:
    """Дата в формате DD.MM.YYYY."""
    return day.strftime(REPORT.DATE_FORMAT)


def _formula_string(value: str) -> str:
    # Строковый литерал для формулы; json.dumps экранирует кавычки и слэши
    return json.dumps(value, ensure_ascii=False)


def product_cell(order: Order, lookup: ReferenceLookup, catalog_url: str) -> str:
    """
    Формула ГИПЕРССЫЛКА на карточку товара.

    Текст ссылки — замена из справочника, если есть, иначе название товара.
    """
    url = f"{catalog_url}?prod={order.flip_code}"
    replacement = lookup.text_for(order.supplier_code)
    display_text = sanitize_text(replacement) if replacement else order.product_name
    return f"=ГИПЕРССЫЛКА({_formula_string(url)}; {_formula_string(display_text)})"


def build_rows(
    orders: list[Order],
    lookup: ReferenceLookup,
    catalog_url: str,
    order_date: date,
) -> list[ReportRow]:
    """Строки данных в исходном порядке заказов."""
    day = format_order_date(order_date)
    return [
        ReportRow(
            supplier_code=order.supplier_code,
            flip_code=order.flip_code,
            product_cell=product_cell(order, lookup, catalog_url),
            quantity=order.quantity,
            unit_price=order.price,
            expiration=lookup.expiration_for(order.supplier_code),
            order_date=day,
        )
        for order in orders
    ]


def build_totals(rows: list[ReportRow]) -> TotalsRow:
    """Итоги по тем же значениям, что и в строках."""
    return TotalsRow(
        label=REPORT.TOTAL_LABEL,
        quantity=sum(row.quantity for row in rows),
        amount=sum(row.amount for row in rows),
    )


def reset_directives() -> list[SheetDirective]:
    """Сброс форматирования всего листа к белому фону и обычному тексту."""
    return [
        RepeatCell(
            grid=GridRange(0, REPORT.RESET_ROWS, 0, REPORT.RESET_COLUMNS),
            cell_format={
                "backgroundColor": WHITE,
                "textFormat": {
                    "bold": False,
                    "italic": False,
                    "underline": False,
                    "strikethrough": False,
                    "foregroundColor": BLACK,
                },
                "horizontalAlignment": "LEFT",
                "verticalAlignment": "BOTTOM",
                "borders": {},
            },
            fields=(
                "userEnteredFormat(backgroundColor,textFormat,"
                "horizontalAlignment,verticalAlignment,borders)"
            ),
        )
    ]


def _align(grid: GridRange, alignment: str) -> RepeatCell:
    return RepeatCell(
        grid=grid,
        cell_format={"horizontalAlignment": alignment},
        fields="userEnteredFormat(horizontalAlignment)",
    )


def style_directives(row_count: int) -> list[SheetDirective]:
    """
    Оформление листа для row_count строк данных.

    Порядок важен: сначала рамки, потом заливки и выравнивание,
    затем ширины колонок и условное форматирование.
    """
    header_index = REPORT.HEADER_ROW - 1
    first_data_index = REPORT.FIRST_DATA_ROW - 1
    totals_index = first_data_index + row_count

    block = GridRange(header_index, totals_index + 1, 0, COLUMN_COUNT)
    header = GridRange(header_index, header_index + 1, 0, COLUMN_COUNT)
    totals = GridRange(totals_index, totals_index + 1, 0, COLUMN_COUNT)
    title_column = ord(REPORT.TITLE_CELL[0]) - ord("A")

    directives: list[SheetDirective] = [
        RepeatCell(
            grid=GridRange(0, 1, title_column, title_column + 1),
            cell_format={
                "textFormat": {"bold": True, "fontSize": REPORT.TITLE_FONT_SIZE},
                "horizontalAlignment": "CENTER",
            },
            fields="userEnteredFormat(textFormat,horizontalAlignment)",
        ),
        UpdateBorders(grid=block, style="SOLID", width=1),
        UpdateBorders(grid=header, style="SOLID_MEDIUM", width=2),
        RepeatCell(
            grid=header,
            cell_format={
                "backgroundColor": YELLOW,
                "textFormat": {"foregroundColor": BLACK, "bold": True},
                "horizontalAlignment": "CENTER",
            },
            fields="userEnteredFormat(backgroundColor,textFormat,horizontalAlignment)",
        ),
        RepeatCell(
            grid=totals,
            cell_format={
                "backgroundColor": GREEN,
                "textFormat": {"bold": True},
                "horizontalAlignment": "RIGHT",
            },
            fields="userEnteredFormat(backgroundColor,textFormat,horizontalAlignment)",
        ),
    ]

    if row_count:

        def data(start: int, end: int) -> GridRange:
            return GridRange(first_data_index, totals_index, start, end)

        directives += [
            _align(data(COL_QUANTITY, COL_QUANTITY + 1), "CENTER"),
            _align(data(COL_PRICE, COL_AMOUNT + 1), "RIGHT"),
            _align(data(COL_EXPIRATION, COL_EXPIRATION + 1), "CENTER"),
            _align(data(COL_ORDER_DATE, COL_ORDER_DATE + 1), "RIGHT"),
            _align(data(COL_NAME, COL_NAME + 1), "LEFT"),
        ]

    directives += [ColumnWidth(start, end, px) for start, end, px in REPORT.COLUMN_WIDTHS]
    directives.append(AutoResizeColumns(REPORT.AUTO_RESIZE_COLUMN, REPORT.AUTO_RESIZE_COLUMN + 1))

    if row_count:
        # Нули в колонках Кол-во..Дата заказа подсвечиваются красным
        directives.append(
            AddConditionalRule(
                grid=GridRange(first_data_index, totals_index, COL_QUANTITY, COLUMN_COUNT),
                condition="NUMBER_EQ",
                value="0",
                background=dict(RED),
                index=0,
            )
        )

    return directives


def build_report(
    orders: list[Order],
    lookup: ReferenceLookup,
    *,
    sheet: str = "Лист1",
    catalog_url: str = "https://www.flip.kz/catalog",
    order_date: date | None = None,
) -> ReportModel:
    """
    Построить модель отчёта.

    Args:
        orders: Нормализованные позиции (порядок сохраняется)
        lookup: Справочник замен названий и сроков годности
        sheet: Имя листа с отчётом
        catalog_url: Адрес каталога для ссылок на товары
        order_date: Дата заказа (по умолчанию — сегодня)

    Returns:
        ReportModel со значениями и операциями форматирования
    """
    rows = build_rows(orders, lookup, catalog_url, order_date or date.today())
    total = build_totals(rows)

    first = REPORT.FIRST_DATA_ROW
    totals_row = first + len(rows)

    data_write = None
    if rows:
        data_write = ValueWrite(
            range_a1=f"{sheet}!A{first}:{LAST_COLUMN}{totals_row - 1}",
            values=[row.to_values() for row in rows],
            input_option="USER_ENTERED",
        )

    return ReportModel(
        sheet=sheet,
        title=ValueWrite(range_a1=f"{sheet}!{REPORT.TITLE_CELL}", values=[[REPORT.TITLE]]),
        header=ValueWrite(
            range_a1=f"{sheet}!A{REPORT.HEADER_ROW}:{LAST_COLUMN}{REPORT.HEADER_ROW}",
            values=[list(REPORT.HEADERS)],
        ),
        data=data_write,
        totals=ValueWrite(
            range_a1=f"{sheet}!A{totals_row}:{LAST_COLUMN}{totals_row}",
            values=[total.to_values()],
        ),
        rows=rows,
        total=total,
        reset_directives=reset_directives(),
        style_directives=style_directives(len(rows)),
    )
