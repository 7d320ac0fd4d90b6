"""
Хранилище сгенерированных PDF.

Файлы лежат в публичном каталоге (раздаётся по /pdfs) и не удаляются —
политики хранения нет.
"""

import logging
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class PdfStorage:
    """Сохраняет PDF под уникальным именем barcodes_{epoch_ms}.pdf."""

    def __init__(self, directory: str | Path, prefix: str = "barcodes"):
        self.directory = Path(directory)
        self.prefix = prefix

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, data: bytes) -> str:
        """
        Сохранить файл.

        Args:
            data: Содержимое PDF

        Returns:
            Имя файла внутри каталога
        """
        self.ensure_directory()
        stamp = int(time.time() * 1000)

        # Параллельные запросы в одну миллисекунду получают следующий номер
        while True:
            filename = f"{self.prefix}_{stamp}.pdf"
            try:
                with open(self.directory / filename, "xb") as fh:
                    fh.write(data)
                break
            except FileExistsError:
                stamp += 1

        logger.info(f"[LABELS] Сохранён {filename} ({len(data) / 1024:.1f} KB)")
        return filename

    def path(self, filename: str) -> Path:
        return self.directory / filename
