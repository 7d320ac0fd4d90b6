"""
Геометрия этикеток со штрихкодом.

Два фиксированных размера:
- 30x20: мелкий штрихкод, шрифты 6/6/4
- 58x40: стандарт термопринтеров, шрифты 8/10/8

┌─────────────────────┐
│  ║║║║║║║║║║║║║║║║  │  штрихкод по центру
│      SUP-00123      │  код поставщика
│ КОД FLIP - 1234567  │
│   Название товара   │  до 50 символов, перенос по словам
└─────────────────────┘
"""

from postavka.config import LABEL
from postavka.models.label_types import LabelGeometry, LabelProfile

# Все значения в пунктах, y — от верхнего края.
# Смещения текстов заданы относительно высоты штрихкода.
PROFILES: dict[LabelProfile, dict[str, float]] = {
    LabelProfile.SIZE_30x20: {
        "barcode_height": 25,
        "barcode_margin": 10,
        "barcode_module_height": 10,
        "barcode_y": 2,
        "barcode_text_font": 6,
        "barcode_text_offset": 2,
        "flip_code_font": 6,
        "flip_code_offset": 10,
        "product_name_font": 4,
        "product_name_offset": 17,
    },
    LabelProfile.SIZE_58x40: {
        "barcode_height": 50,
        "barcode_margin": 20,
        "barcode_module_height": 20,
        "barcode_y": 5,
        "barcode_text_font": 8,
        "barcode_text_offset": 5,
        "flip_code_font": 10,
        "flip_code_offset": 15,
        "product_name_font": 8,
        "product_name_offset": 27,
    },
}


def compute_layout(profile: LabelProfile | str | None) -> LabelGeometry:
    """
    Рассчитать геометрию этикетки.

    Args:
        profile: Размер этикетки; неизвестная строка -> 58x40

    Returns:
        LabelGeometry в пунктах PDF
    """
    if not isinstance(profile, LabelProfile):
        profile = LabelProfile.parse(profile)

    cfg = PROFILES[profile]
    width_mm, height_mm = profile.dimensions_mm
    page_width = LABEL.mm_to_points(width_mm)
    page_height = LABEL.mm_to_points(height_mm)

    barcode_height = cfg["barcode_height"]
    barcode_width = page_width - cfg["barcode_margin"]

    return LabelGeometry(
        profile=profile,
        page_width=page_width,
        page_height=page_height,
        barcode_x=(page_width - barcode_width) / 2,
        barcode_y=cfg["barcode_y"],
        barcode_width=barcode_width,
        barcode_height=barcode_height,
        barcode_module_height=int(cfg["barcode_module_height"]),
        text_x=LABEL.TEXT_MARGIN,
        text_width=page_width - 2 * LABEL.TEXT_MARGIN,
        barcode_text_y=barcode_height + cfg["barcode_text_offset"],
        barcode_text_font_size=cfg["barcode_text_font"],
        flip_code_y=barcode_height + cfg["flip_code_offset"],
        flip_code_font_size=cfg["flip_code_font"],
        product_name_y=barcode_height + cfg["product_name_offset"],
        product_name_font_size=cfg["product_name_font"],
    )
