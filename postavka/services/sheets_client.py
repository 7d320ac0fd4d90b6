"""
Клиент Google Sheets API v4.

Тонкая обёртка: каждый метод — один HTTP вызов. Ошибки
(googleapiclient.errors.HttpError и сетевые) не перехватываются,
их оборачивает вызывающий код.
"""

import logging
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import Resource, build

from postavka.config import Settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def get_sheets_service(credentials_file: str) -> Resource:
    """Сервис Sheets API по JSON ключу сервисного аккаунта."""
    creds = service_account.Credentials.from_service_account_file(
        credentials_file,
        scopes=SCOPES,
    )
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


class SheetsClient:
    """
    Операции над одной таблицей.

    Сервис API создаётся при первом вызове: ключ читается только тогда,
    когда таблица действительно нужна, и ошибка ключа всплывает из
    метода, как любая другая ошибка API.

    Использование:
        client = SheetsClient.from_settings(get_settings())
        rows = client.get_values("Лист2!A:C")
    """

    def __init__(
        self,
        spreadsheet_id: str,
        service: Resource | None = None,
        credentials_file: str | None = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.credentials_file = credentials_file
        self._service = service

    @classmethod
    def from_settings(cls, settings: Settings) -> "SheetsClient":
        return cls(settings.spreadsheet_id, credentials_file=settings.google_credentials_file)

    @property
    def service(self) -> Resource:
        if self._service is None:
            if not self.credentials_file:
                raise ValueError("Не задан файл ключа сервисного аккаунта")
            self._service = get_sheets_service(self.credentials_file)
        return self._service

    def _values(self):
        return self.service.spreadsheets().values()

    def get_values(self, range_a1: str) -> list[list[Any]]:
        """Значения диапазона (пустые хвосты строк Google не возвращает)."""
        resp = self._values().get(spreadsheetId=self.spreadsheet_id, range=range_a1).execute()
        return resp.get("values", [])

    def clear_values(self, range_a1: str) -> None:
        self._values().clear(spreadsheetId=self.spreadsheet_id, range=range_a1, body={}).execute()

    def update_values(
        self,
        range_a1: str,
        values: list[list[Any]],
        value_input_option: str = "RAW",
    ) -> None:
        self._values().update(
            spreadsheetId=self.spreadsheet_id,
            range=range_a1,
            valueInputOption=value_input_option,
            body={"values": values},
        ).execute()

    def batch_update(self, requests: list[dict[str, Any]]) -> None:
        if not requests:
            return
        self.service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": requests},
        ).execute()

    def count_conditional_formats(self, sheet_id: int) -> int:
        """Количество правил условного форматирования на листе."""
        resp = (
            self.service.spreadsheets()
            .get(
                spreadsheetId=self.spreadsheet_id,
                fields="sheets(properties(sheetId),conditionalFormats)",
            )
            .execute()
        )
        for sheet in resp.get("sheets", []):
            if sheet.get("properties", {}).get("sheetId") == sheet_id:
                return len(sheet.get("conditionalFormats", []))
        return 0
