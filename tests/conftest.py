"""
Общие фикстуры тестов.

Внешние системы (Google Sheets, генератор штрихкодов) подменяются
фейками, записывающими вызовы.
"""

import os
import tempfile
from io import BytesIO
from typing import Any

import pytest
from PIL import Image

# До импорта приложения: PDF не должны попадать в рабочий каталог
os.environ.setdefault("PDF_DIR", tempfile.mkdtemp(prefix="postavka-pdfs-"))

from postavka.models.order import Order  # noqa: E402


class FakeSheetsClient:
    """Фейк SheetsClient: пишет вызовы в calls, может падать на методе."""

    def __init__(
        self,
        reference_rows: list[list[Any]] | None = None,
        conditional_formats: int = 0,
        fail_on: str | None = None,
        fail_after: int = 0,
    ):
        self.reference_rows = reference_rows or [["Код", "Текст", "Срок"]]
        self.conditional_formats = conditional_formats
        self.fail_on = fail_on
        self.fail_after = fail_after
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, method: str, *args: Any) -> None:
        if method == self.fail_on:
            seen = sum(1 for name, _ in self.calls if name == method)
            if seen >= self.fail_after:
                raise RuntimeError(f"{method} failed")
        self.calls.append((method, args))

    def get_values(self, range_a1: str) -> list[list[Any]]:
        self._record("get_values", range_a1)
        return self.reference_rows

    def clear_values(self, range_a1: str) -> None:
        self._record("clear_values", range_a1)

    def update_values(
        self, range_a1: str, values: list[list[Any]], value_input_option: str = "RAW"
    ) -> None:
        self._record("update_values", range_a1, values, value_input_option)

    def batch_update(self, requests: list[dict[str, Any]]) -> None:
        self._record("batch_update", requests)

    def count_conditional_formats(self, sheet_id: int) -> int:
        self._record("count_conditional_formats", sheet_id)
        return self.conditional_formats

    @property
    def method_names(self) -> list[str]:
        return [name for name, _ in self.calls]


class FakeBarcodeGenerator:
    """Фейк BarcodeGenerator: маленький белый PNG, считает вызовы."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.calls: list[tuple[str, float]] = []

    def generate(self, text: str, module_height: float = 20, scale: int = 2) -> bytes:
        if text == self.fail_on:
            raise ValueError(f"bad barcode {text}")
        self.calls.append((text, module_height))
        buffer = BytesIO()
        Image.new("RGB", (40, 10), "white").save(buffer, format="PNG")
        return buffer.getvalue()


@pytest.fixture
def make_sheets():
    """Фабрика фейковых клиентов таблицы."""
    return FakeSheetsClient


@pytest.fixture
def fake_sheets() -> FakeSheetsClient:
    return FakeSheetsClient()


@pytest.fixture
def make_barcodes():
    """Фабрика фейковых генераторов штрихкодов."""
    return FakeBarcodeGenerator


@pytest.fixture
def fake_barcodes() -> FakeBarcodeGenerator:
    return FakeBarcodeGenerator()


@pytest.fixture
def widget_order() -> Order:
    """Позиция из сценария: 3 шт по 1 500."""
    return Order(
        supplier_code="S1",
        flip_code="F1",
        product_name="Widget",
        quantity=3,
        price=1500,
    )
