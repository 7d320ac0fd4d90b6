"""
Публикация отчёта в Google Sheets.

Этапы выполняются строго по порядку:
    CLEAR -> RESET_STYLES -> WRITE_TITLE -> WRITE_HEADER -> WRITE_DATA
    -> WRITE_TOTALS -> APPLY_STYLES

Стили применяются последними, потому что ссылаются на строку итогов.
При сбое этапа публикация прерывается, уже сделанное не откатывается:
лист может остаться частично очищенным или частично оформленным.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

from postavka.models.sheet_directives import DeleteConditionalRule, ValueWrite, to_requests
from postavka.services.errors import ReportPublishError
from postavka.services.report_builder import ReportModel

logger = logging.getLogger(__name__)


class SpreadsheetClient(Protocol):
    """То, что публикатору нужно от таблицы."""

    def clear_values(self, range_a1: str) -> None: ...

    def update_values(
        self, range_a1: str, values: list[list[Any]], value_input_option: str = "RAW"
    ) -> None: ...

    def batch_update(self, requests: list[dict[str, Any]]) -> None: ...

    def count_conditional_formats(self, sheet_id: int) -> int: ...


class PublishStage(str, Enum):
    """Этап публикации."""

    CLEAR = "clear"
    RESET_STYLES = "reset_styles"
    WRITE_TITLE = "write_title"
    WRITE_HEADER = "write_header"
    WRITE_DATA = "write_data"
    WRITE_TOTALS = "write_totals"
    APPLY_STYLES = "apply_styles"


class ReportPublisher:
    """Применяет ReportModel к листу таблицы."""

    def __init__(self, client: SpreadsheetClient, sheet_id: int = 0):
        self.client = client
        self.sheet_id = sheet_id

    def publish(self, model: ReportModel) -> list[PublishStage]:
        """
        Опубликовать отчёт.

        Returns:
            Выполненные этапы (все, в порядке выполнения)

        Raises:
            ReportPublishError: Этап завершился ошибкой
        """
        completed: list[PublishStage] = []

        for stage, action in self._pipeline(model):
            try:
                action()
            except Exception as e:
                logger.error(
                    f"[EXPORT] Этап {stage.value} не выполнен "
                    f"(готово: {[s.value for s in completed]}): {e}"
                )
                raise ReportPublishError(
                    stage=stage.value,
                    completed=[s.value for s in completed],
                ) from e
            completed.append(stage)
            logger.debug(f"[EXPORT] Этап {stage.value} выполнен")

        return completed

    def _pipeline(self, model: ReportModel) -> list[tuple[PublishStage, Callable[[], None]]]:
        return [
            (PublishStage.CLEAR, lambda: self.client.clear_values(model.clear_range)),
            (PublishStage.RESET_STYLES, lambda: self._reset_styles(model)),
            (PublishStage.WRITE_TITLE, lambda: self._write(model.title)),
            (PublishStage.WRITE_HEADER, lambda: self._write(model.header)),
            (PublishStage.WRITE_DATA, lambda: self._write(model.data)),
            (PublishStage.WRITE_TOTALS, lambda: self._write(model.totals)),
            (
                PublishStage.APPLY_STYLES,
                lambda: self.client.batch_update(
                    to_requests(model.style_directives, self.sheet_id)
                ),
            ),
        ]

    def _reset_styles(self, model: ReportModel) -> None:
        self.client.batch_update(to_requests(model.reset_directives, self.sheet_id))

        # Каждое удаление по индексу 0 сдвигает остальные правила вверх
        rule_count = self.client.count_conditional_formats(self.sheet_id)
        if rule_count:
            deletes = [DeleteConditionalRule(index=0)] * rule_count
            self.client.batch_update(to_requests(deletes, self.sheet_id))

    def _write(self, write: ValueWrite | None) -> None:
        if write is None:
            return
        self.client.update_values(write.range_a1, write.values, write.input_option)
