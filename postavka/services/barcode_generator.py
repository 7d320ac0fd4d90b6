"""
Генератор штрихкодов Code128.

Создаёт PNG со штрихкодом без подписи — подпись печатается на этикетке
отдельным текстом. Изображение растягивается по ширине этикетки при
вставке в PDF, поэтому важна только пропорция и высота баров.
"""

from io import BytesIO

from barcode import Code128
from barcode.writer import ImageWriter

from postavka.config import LABEL

# Ширина модуля (бара) в мм при масштабе 1
BASE_MODULE_WIDTH_MM = 0.2


class BarcodeGenerator:
    """
    Генератор Code128 через python-barcode (ImageWriter на Pillow).

    Использование:
        png = BarcodeGenerator().generate("SUP-001", module_height=20)
    """

    def __init__(self, dpi: int = 300):
        """
        Инициализация генератора.

        Args:
            dpi: Разрешение растра
        """
        self.dpi = dpi

    def generate(
        self,
        text: str,
        module_height: float = 20,
        scale: int = LABEL.BARCODE_SCALE,
    ) -> bytes:
        """
        Генерирует PNG со штрихкодом.

        Args:
            text: Кодируемая строка
            module_height: Высота баров в мм
            scale: Множитель ширины модуля

        Returns:
            bytes: PNG изображение

        Raises:
            ValueError: Пустая строка
            Ошибки python-barcode (символы вне набора Code128) пробрасываются
        """
        if not text:
            raise ValueError("Пустой штрихкод")

        options = {
            "module_width": BASE_MODULE_WIDTH_MM * scale,
            "module_height": module_height,
            "quiet_zone": 1.0,
            "write_text": False,
            "dpi": self.dpi,
        }

        with BytesIO() as buffer:
            Code128(text, writer=ImageWriter()).write(buffer, options=options)
            return buffer.getvalue()
