"""
Типы данных для печати этикеток со штрихкодами.
"""

from dataclasses import dataclass
from enum import Enum


class LabelProfile(str, Enum):
    """Размеры этикеток (ширина x высота в мм)."""

    SIZE_30x20 = "30x20"
    SIZE_58x40 = "58x40"

    @property
    def dimensions_mm(self) -> tuple[float, float]:
        """Возвращает (ширина, высота) в мм."""
        sizes = {
            "30x20": (30.0, 20.0),
            "58x40": (58.0, 40.0),
        }
        return sizes[self.value]

    @classmethod
    def parse(cls, value: str | None) -> "LabelProfile":
        """
        Размер этикетки из строки запроса.

        Любое неизвестное значение (и None) — стандартная 58x40.
        """
        try:
            return cls(value)
        except ValueError:
            return cls.SIZE_58x40


@dataclass(frozen=True)
class LabelGeometry:
    """
    Рассчитанная геометрия этикетки.

    Все значения в пунктах PDF. Вертикальные координаты отсчитываются
    от верхнего края страницы.
    """

    profile: LabelProfile
    page_width: float
    page_height: float
    # Штрихкод
    barcode_x: float
    barcode_y: float
    barcode_width: float
    barcode_height: float
    barcode_module_height: int
    # Текстовые блоки (центрируются в полосе text_x .. text_x + text_width)
    text_x: float
    text_width: float
    barcode_text_y: float
    barcode_text_font_size: float
    flip_code_y: float
    flip_code_font_size: float
    product_name_y: float
    product_name_font_size: float

    @property
    def page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)


@dataclass
class LabelPage:
    """Данные одной физической этикетки."""

    barcode_png: bytes
    barcode_text: str
    flip_code_text: str
    product_name: str
