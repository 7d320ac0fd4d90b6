"""
Ошибки сервиса.

Две группы:
- InputValidationError — запрос отклонён до любых внешних вызовов (HTTP 400)
- CollaboratorError — сбой Google Sheets, генератора штрихкодов или PDF (HTTP 500)

Текст для клиента лежит в user_message, техническая причина — в __cause__
и в логах.
"""


class PostavkaError(Exception):
    """Базовая ошибка сервиса."""

    status_code: int = 500
    user_message: str = "Что-то пошло не так"

    def __init__(self, details: str | None = None):
        self.details = details
        super().__init__(details or self.user_message)


# === Ошибки входных данных ===


class InputValidationError(PostavkaError):
    """Некорректный запрос."""

    status_code = 400
    user_message = "Некорректные данные заказов"


class OrdersValidationError(InputValidationError):
    """Список заказов отсутствует, не массив или пуст."""


class NoLabelsError(InputValidationError):
    """Суммарное количество этикеток равно нулю."""

    user_message = "Нет этикеток для печати"


# === Сбои внешних систем ===


class CollaboratorError(PostavkaError):
    """Сбой внешней системы. Частичные изменения не откатываются."""


class ReferenceFetchError(CollaboratorError):
    """Не удалось прочитать справочник замен."""

    user_message = "Не удалось выгрузить заказы"


class ReportPublishError(CollaboratorError):
    """
    Сбой одного из этапов публикации отчёта.

    Attributes:
        stage: Этап, на котором произошёл сбой
        completed: Этапы, уже применённые к таблице
    """

    user_message = "Не удалось выгрузить заказы"

    def __init__(self, stage: str, completed: list[str], details: str | None = None):
        self.stage = stage
        self.completed = list(completed)
        done = ", ".join(completed) or "-"
        super().__init__(details or f"Сбой на этапе {stage} (выполнено: {done})")


class LabelRenderError(CollaboratorError):
    """Не удалось сгенерировать штрихкод или PDF."""

    user_message = "Не удалось сформировать PDF со штрихкодами"
