"""
Тесты генератора PDF с этикетками.

Покрывает:
- Количество страниц = сумма положительных количеств
- Пропуск позиций с количеством 0
- Ошибку "нет этикеток" для нулевого тиража
- Один штрихкод на позицию
- Тексты этикетки (N/A, КОД FLIP, обрезка названия)
- Размер страниц по профилю
"""

import io
from pathlib import Path

import pikepdf
import pytest
import reportlab
from reportlab.pdfbase import pdfmetrics

from postavka.config import LABEL
from postavka.models.order import Order
from postavka.services.barcode_generator import BarcodeGenerator
from postavka.services.errors import LabelRenderError, NoLabelsError
from postavka.services.label_generator import (
    LabelPageGenerator,
    count_labels,
    ensure_font_registered,
    truncate_product_name,
)
from postavka.services.label_layout import compute_layout


@pytest.fixture
def generator(fake_barcodes) -> LabelPageGenerator:
    return LabelPageGenerator(barcode_generator=fake_barcodes)


def _orders(*quantities: int) -> list[Order]:
    return [
        Order(supplier_code=f"S{i}", flip_code=f"F{i}", product_name=f"Товар {i}", quantity=q)
        for i, q in enumerate(quantities)
    ]


def _page_count(pdf_bytes: bytes) -> int:
    with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
        return len(pdf.pages)


class TestCountLabels:
    """Подсчёт этикеток."""

    def test_sum_of_quantities(self):
        assert count_labels(_orders(3, 0, 2)) == 5

    def test_negative_contributes_zero(self):
        orders = _orders(2)
        orders.append(Order(quantity=-4))

        assert count_labels(orders) == 2

    def test_empty(self):
        assert count_labels([]) == 0


class TestPageCount:
    """Одна страница на каждую единицу товара."""

    @pytest.mark.asyncio
    async def test_pages_match_quantities(self, generator: LabelPageGenerator):
        """3 + 0 + 2 = 5 страниц."""
        pdf_bytes = await generator.generate(_orders(3, 0, 2), "58x40")

        assert pdf_bytes[:4] == b"%PDF"
        assert _page_count(pdf_bytes) == 5

    @pytest.mark.asyncio
    async def test_zero_quantity_only_fails(self, generator: LabelPageGenerator, fake_barcodes):
        """Единственная позиция с количеством 0 — нет этикеток для печати."""
        with pytest.raises(NoLabelsError):
            await generator.generate(_orders(0), "58x40")

        assert fake_barcodes.calls == []

    @pytest.mark.asyncio
    async def test_empty_orders_fail(self, generator: LabelPageGenerator):
        with pytest.raises(NoLabelsError):
            await generator.generate([], "30x20")

    @pytest.mark.asyncio
    async def test_one_barcode_per_order(self, generator: LabelPageGenerator, fake_barcodes):
        """Штрихкод генерируется один раз на позицию, а не на этикетку."""
        await generator.generate(_orders(4, 0, 1), "58x40")

        assert [text for text, _ in fake_barcodes.calls] == ["S0", "S2"]

    @pytest.mark.asyncio
    async def test_module_height_by_profile(self, generator: LabelPageGenerator, fake_barcodes):
        """Высота баров: 10 для 30x20, 20 для 58x40."""
        await generator.generate(_orders(1), "30x20")
        await generator.generate(_orders(1), "58x40")

        assert [height for _, height in fake_barcodes.calls] == [10, 20]


class TestPageContent:
    """Данные страниц."""

    @pytest.mark.asyncio
    async def test_page_texts(self, generator: LabelPageGenerator):
        orders = [Order(supplier_code="S1", flip_code="F1", product_name="Widget", quantity=2)]
        geometry = compute_layout("58x40")

        pages = [page async for page in generator.iter_pages(orders, geometry)]

        assert len(pages) == 2
        assert pages[0] is pages[1]
        assert pages[0].barcode_text == "S1"
        assert pages[0].flip_code_text == "КОД FLIP - F1"
        assert pages[0].product_name == "Widget"

    @pytest.mark.asyncio
    async def test_missing_codes(self, generator: LabelPageGenerator, fake_barcodes):
        """Пустой код поставщика и код FLIP -> N/A."""
        geometry = compute_layout("30x20")

        pages = [page async for page in generator.iter_pages([Order(quantity=1)], geometry)]

        assert pages[0].barcode_text == "N/A"
        assert pages[0].flip_code_text == "КОД FLIP - N/A"
        assert fake_barcodes.calls[0][0] == "N/A"

    @pytest.mark.asyncio
    async def test_order_of_pages(self, generator: LabelPageGenerator):
        """Страницы идут в порядке позиций."""
        geometry = compute_layout("58x40")

        pages = [page async for page in generator.iter_pages(_orders(1, 2, 1), geometry)]

        assert [p.barcode_text for p in pages] == ["S0", "S1", "S1", "S2"]

    def test_product_name_truncated(self):
        """Название обрезается до 50 символов."""
        name = "Очень длинное название товара " * 5

        assert len(truncate_product_name(name)) == LABEL.PRODUCT_NAME_MAX_CHARS
        assert truncate_product_name("Короткое") == "Короткое"


class TestPageSize:
    """Размер страниц PDF по профилю."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("profile", "width_mm", "height_mm"),
        [("30x20", 30, 20), ("58x40", 58, 40), ("unknown", 58, 40)],
    )
    async def test_media_box(self, generator: LabelPageGenerator, profile, width_mm, height_mm):
        pdf_bytes = await generator.generate(_orders(2), profile)

        with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                box = [float(v) for v in page.MediaBox]
                assert box[2] - box[0] == pytest.approx(width_mm * LABEL.MM_TO_POINTS, abs=0.01)
                assert box[3] - box[1] == pytest.approx(height_mm * LABEL.MM_TO_POINTS, abs=0.01)


class TestFailures:
    """Сбой генерации штрихкода."""

    @pytest.mark.asyncio
    async def test_barcode_failure_wrapped(self, make_barcodes):
        generator = LabelPageGenerator(barcode_generator=make_barcodes(fail_on="S1"))

        with pytest.raises(LabelRenderError) as exc_info:
            await generator.generate(_orders(1, 1), "58x40")

        assert isinstance(exc_info.value.__cause__, ValueError)


class TestRealBarcode:
    """Сквозная генерация с python-barcode."""

    def test_code128_png(self):
        png = BarcodeGenerator().generate("SUP-00123", module_height=10)

        assert png[:8] == b"\x89PNG\r\n\x1a\n"

    def test_empty_text_rejected(self):
        with pytest.raises(ValueError):
            BarcodeGenerator().generate("")

    @pytest.mark.asyncio
    async def test_pdf_with_real_barcodes(self):
        orders = [Order(supplier_code="SUP-1", flip_code="123", product_name="Кофе", quantity=2)]

        pdf_bytes = await LabelPageGenerator().generate(orders, "30x20")

        assert _page_count(pdf_bytes) == 2


class TestFontRegistration:
    """Регистрация шрифта по пути."""

    @pytest.fixture
    def reportlab_fonts(self) -> Path:
        return Path(reportlab.__file__).parent / "fonts"

    def test_font_per_path(self, reportlab_fonts: Path):
        """Разные пути -> разные шрифты, повторный вызов -> тот же шрифт."""
        regular = ensure_font_registered(str(reportlab_fonts / "Vera.ttf"))
        bold = ensure_font_registered(str(reportlab_fonts / "VeraBd.ttf"))

        assert regular != bold
        assert ensure_font_registered(str(reportlab_fonts / "Vera.ttf")) == regular
        assert {regular, bold} <= set(pdfmetrics.getRegisteredFontNames())

    def test_generators_keep_their_fonts(self, reportlab_fonts: Path, fake_barcodes):
        first = LabelPageGenerator(fake_barcodes, font_path=str(reportlab_fonts / "VeraIt.ttf"))
        second = LabelPageGenerator(fake_barcodes, font_path=str(reportlab_fonts / "VeraBI.ttf"))

        assert first.font_name != second.font_name

    def test_missing_file_falls_back(self, tmp_path):
        name = ensure_font_registered(str(tmp_path / "missing.ttf"))

        assert name in pdfmetrics.getRegisteredFontNames()
