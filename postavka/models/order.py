"""
Типы данных заказа и строк отчёта.
"""

from dataclasses import dataclass, field


@dataclass
class Order:
    """Нормализованная позиция заказа."""

    supplier_code: str = ""
    flip_code: str = ""
    product_name: str = ""  # Уже очищено sanitize_text
    quantity: int = 0
    price: int = 0


@dataclass
class ReferenceLookup:
    """Справочник «код поставщика -> замена названия / срок годности»."""

    texts: dict[str, str] = field(default_factory=dict)
    expirations: dict[str, str] = field(default_factory=dict)

    def text_for(self, supplier_code: str) -> str | None:
        return self.texts.get(supplier_code.strip())

    def expiration_for(self, supplier_code: str) -> str:
        return self.expirations.get(supplier_code.strip(), "")


@dataclass
class ReportRow:
    """Строка данных отчёта."""

    supplier_code: str
    flip_code: str
    product_cell: str  # Формула ГИПЕРССЫЛКА
    quantity: int
    unit_price: int
    expiration: str
    order_date: str  # DD.MM.YYYY

    @property
    def amount(self) -> int:
        """Сумма строки — всегда пересчитывается."""
        return self.quantity * self.unit_price

    def to_values(self) -> list[str | int]:
        """Значения ячеек A:H."""
        return [
            self.supplier_code,
            self.flip_code,
            self.product_cell,
            self.quantity,
            self.unit_price,
            self.amount,
            self.expiration,
            self.order_date,
        ]


@dataclass
class TotalsRow:
    """Строка итогов."""

    label: str
    quantity: int
    amount: int

    def to_values(self) -> list[str | int]:
        return ["", "", self.label, self.quantity, "", self.amount, "", ""]
