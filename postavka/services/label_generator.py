# postavka/services/label_generator.py
"""
Генератор PDF с этикетками штрихкодов через ReportLab.

Одна страница = одна физическая этикетка: позиция с количеством N даёт
N одинаковых страниц. Позиции с количеством 0 пропускаются.

Размеры: 30x20, 58x40 мм (см. label_layout.py)
"""

import asyncio
import logging
import os
from collections.abc import AsyncIterator, Sequence
from io import BytesIO

from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from postavka.config import LABEL
from postavka.models.label_types import LabelGeometry, LabelPage, LabelProfile
from postavka.models.order import Order
from postavka.services.barcode_generator import BarcodeGenerator
from postavka.services.errors import LabelRenderError, NoLabelsError
from postavka.services.label_layout import compute_layout

logger = logging.getLogger(__name__)

FONT_NAME = "LabelSans"

# Fallback для локальной разработки (Windows) и последний вариант —
# Vera из поставки reportlab (без кириллицы, но всегда есть)
FALLBACK_FONT_PATHS = [
    "C:/Windows/Fonts/arial.ttf",
    "C:/Windows/Fonts/tahoma.ttf",
]
BUNDLED_FONT = ("Vera", "Vera.ttf")

# Кэш: запрошенный путь -> имя шрифта, файл шрифта -> имя шрифта
_fonts_by_request: dict[str | None, str] = {}
_fonts_by_file: dict[str, str] = {}


def _register_file(path: str) -> str:
    name = _fonts_by_file.get(path)
    if name is None:
        name = f"{FONT_NAME}-{len(_fonts_by_file) + 1}"
        pdfmetrics.registerFont(TTFont(name, path))
        _fonts_by_file[path] = name
    return name


def ensure_font_registered(font_path: str | None = None) -> str:
    """
    Регистрирует TTF шрифт с кириллицей.

    Результат кэшируется по font_path: разные пути дают разные шрифты,
    повторный вызов с тем же путём файл не перечитывает.

    Returns:
        Имя зарегистрированного шрифта
    """
    cached = _fonts_by_request.get(font_path)
    if cached:
        return cached

    for path in [font_path, *FALLBACK_FONT_PATHS]:
        if not path or not os.path.exists(path):
            continue
        try:
            name = _register_file(path)
        except TTFError as e:
            logger.warning(f"[LABELS] Шрифт {path} не загружен: {e}")
            continue
        _fonts_by_request[font_path] = name
        return name

    logger.warning("[LABELS] TTF с кириллицей не найден, используется Vera")
    name, filename = BUNDLED_FONT
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, filename))
    _fonts_by_request[font_path] = name
    return name


def count_labels(orders: Sequence[Order]) -> int:
    """Сколько этикеток будет напечатано (сумма положительных количеств)."""
    return sum(max(order.quantity, 0) for order in orders)


def truncate_product_name(name: str) -> str:
    return name[: LABEL.PRODUCT_NAME_MAX_CHARS]


class LabelRenderer:
    """Рисует одну этикетку на странице canvas."""

    def __init__(self, geometry: LabelGeometry, font_name: str):
        self.geometry = geometry
        self.font_name = font_name

    def draw_page(self, c: canvas.Canvas, page: LabelPage, image: ImageReader) -> None:
        g = self.geometry

        # ReportLab считает y от нижнего края, геометрия — от верхнего
        c.drawImage(
            image,
            g.barcode_x,
            g.page_height - g.barcode_y - g.barcode_height,
            width=g.barcode_width,
            height=g.barcode_height,
        )

        self._draw_centered(c, page.barcode_text, g.barcode_text_y, g.barcode_text_font_size)
        self._draw_centered(c, page.flip_code_text, g.flip_code_y, g.flip_code_font_size)
        self._draw_wrapped(c, page.product_name, g.product_name_y, g.product_name_font_size)

    def _baseline(self, top: float, font_size: float) -> float:
        ascent = pdfmetrics.getAscent(self.font_name, font_size)
        return self.geometry.page_height - top - ascent

    def _draw_centered(self, c: canvas.Canvas, text: str, top: float, font_size: float) -> None:
        g = self.geometry
        c.setFont(self.font_name, font_size)
        c.setFillColorRGB(0, 0, 0)
        c.drawCentredString(g.text_x + g.text_width / 2, self._baseline(top, font_size), text)

    def _draw_wrapped(self, c: canvas.Canvas, text: str, top: float, font_size: float) -> None:
        """Текст с переносом по словам в пределах ширины текстового блока."""
        lines = simpleSplit(text, self.font_name, font_size, self.geometry.text_width)
        leading = font_size * 1.2
        for i, line in enumerate(lines):
            self._draw_centered(c, line, top + i * leading, font_size)


class LabelPageGenerator:
    """
    Генератор PDF с этикетками.

    Использование:
        pdf_bytes = await LabelPageGenerator().generate(orders, "58x40")
    """

    def __init__(
        self,
        barcode_generator: BarcodeGenerator | None = None,
        font_path: str | None = None,
    ):
        self.barcode_generator = barcode_generator or BarcodeGenerator()
        self.font_name = ensure_font_registered(font_path)

    async def iter_pages(
        self,
        orders: Sequence[Order],
        geometry: LabelGeometry,
    ) -> AsyncIterator[LabelPage]:
        """
        Страницы в порядке позиций.

        Штрихкод генерируется один раз на позицию (в потоке) и
        переиспользуется для всех её этикеток.
        """
        for order in orders:
            if order.quantity <= 0:
                continue

            barcode_text = order.supplier_code or LABEL.MISSING_CODE
            try:
                png = await asyncio.to_thread(
                    self.barcode_generator.generate,
                    barcode_text,
                    geometry.barcode_module_height,
                )
            except Exception as e:
                raise LabelRenderError(f"Штрихкод для «{barcode_text}»: {e}") from e

            page = LabelPage(
                barcode_png=png,
                barcode_text=barcode_text,
                flip_code_text=f"{LABEL.FLIP_CODE_PREFIX}{order.flip_code or LABEL.MISSING_CODE}",
                product_name=truncate_product_name(order.product_name),
            )
            for _ in range(order.quantity):
                yield page

    async def generate(
        self,
        orders: Sequence[Order],
        profile: LabelProfile | str | None = None,
    ) -> bytes:
        """
        Генерирует PDF с этикетками.

        Args:
            orders: Нормализованные позиции
            profile: Размер этикетки (неизвестный -> 58x40)

        Returns:
            bytes: PDF файл

        Raises:
            NoLabelsError: Суммарное количество этикеток равно нулю
            LabelRenderError: Сбой генерации штрихкода или PDF
        """
        total = count_labels(orders)
        if total == 0:
            raise NoLabelsError("Суммарное количество этикеток равно 0")

        geometry = compute_layout(profile)
        renderer = LabelRenderer(geometry, self.font_name)

        with BytesIO() as buffer:
            c = canvas.Canvas(buffer, pagesize=geometry.page_size)
            pages = 0
            image: ImageReader | None = None
            current: LabelPage | None = None

            async for page in self.iter_pages(orders, geometry):
                try:
                    if page is not current:
                        image = ImageReader(BytesIO(page.barcode_png))
                        current = page
                    renderer.draw_page(c, page, image)
                    c.showPage()
                except Exception as e:
                    raise LabelRenderError(f"Ошибка отрисовки этикетки: {e}") from e
                pages += 1

            try:
                c.save()
            except Exception as e:
                raise LabelRenderError(f"Ошибка сохранения PDF: {e}") from e

            logger.info(
                f"[LABELS] Сформировано этикеток: {pages} ({geometry.profile.value})"
            )
            return buffer.getvalue()
