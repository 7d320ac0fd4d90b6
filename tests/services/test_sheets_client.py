"""Тесты клиента Google Sheets без обращения к сети."""

import pytest

from postavka.config import Settings
from postavka.services.sheets_client import SheetsClient


class TestLazyService:
    def test_from_settings_does_not_read_credentials(self, tmp_path):
        """Создание клиента не трогает файл ключа."""
        settings = Settings(_env_file=None, google_credentials_file=str(tmp_path / "missing.json"))

        client = SheetsClient.from_settings(settings)

        assert client.spreadsheet_id == settings.spreadsheet_id

    def test_missing_credentials_raise_on_first_call(self, tmp_path):
        """Ошибка ключа всплывает из первого вызова API."""
        client = SheetsClient("sheet-id", credentials_file=str(tmp_path / "missing.json"))

        with pytest.raises(OSError):
            client.get_values("Лист2!A:C")

    def test_no_credentials_configured(self):
        client = SheetsClient("sheet-id")

        with pytest.raises(ValueError):
            client.batch_update([{"repeatCell": {}}])

    def test_empty_batch_skipped(self):
        """Пустой batchUpdate не отправляется (и сервис не создаётся)."""
        client = SheetsClient("sheet-id")

        client.batch_update([])
