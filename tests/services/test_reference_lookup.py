"""Тесты справочника замен (второй лист таблицы)."""

from postavka.services.reference_lookup import build_reference_lookup

HEADER = ["Код", "Текст", "Срок годности"]


class TestBuildReferenceLookup:
    """Построение справочника из строк A:C."""

    def test_header_skipped(self):
        """Первая строка — шапка, даже если похожа на данные."""
        lookup = build_reference_lookup([["S1", "Шапка", "2020"], ["S2", "Текст", "2025"]])

        assert "S1" not in lookup.texts
        assert lookup.texts == {"S2": "Текст"}

    def test_values_trimmed(self):
        """Код, текст и срок без пробелов по краям."""
        lookup = build_reference_lookup([HEADER, ["  S1 ", " Better Widget ", " 2025-01-01 "]])

        assert lookup.texts == {"S1": "Better Widget"}
        assert lookup.expirations == {"S1": "2025-01-01"}

    def test_maps_are_independent(self):
        """Строка без текста всё равно даёт срок, и наоборот."""
        lookup = build_reference_lookup(
            [
                HEADER,
                ["S1", "", "2025-01-01"],
                ["S2", "Только текст"],
            ]
        )

        assert lookup.texts == {"S2": "Только текст"}
        assert lookup.expirations == {"S1": "2025-01-01"}

    def test_empty_code_ignored(self):
        lookup = build_reference_lookup([HEADER, ["", "Текст", "2025"], ["   ", "X", "Y"]])

        assert lookup.texts == {}
        assert lookup.expirations == {}

    def test_last_row_wins(self):
        """При повторе кода побеждает последняя строка."""
        lookup = build_reference_lookup(
            [
                HEADER,
                ["S1", "Первый", "2024-01-01"],
                ["S1", "Второй", "2025-01-01"],
            ]
        )

        assert lookup.text_for("S1") == "Второй"
        assert lookup.expiration_for("S1") == "2025-01-01"

    def test_later_empty_cell_keeps_earlier_value(self):
        """Пустая ячейка в поздней строке не затирает значение."""
        lookup = build_reference_lookup([HEADER, ["S1", "Текст", "2024"], ["S1", "", "2025"]])

        assert lookup.text_for("S1") == "Текст"
        assert lookup.expiration_for("S1") == "2025"

    def test_empty_source(self):
        """Пустой лист или None."""
        assert build_reference_lookup([]).texts == {}
        assert build_reference_lookup(None).expirations == {}

    def test_lookup_by_untrimmed_code(self):
        """Поиск по коду с пробелами."""
        lookup = build_reference_lookup([HEADER, ["S1", "Текст", "2025"]])

        assert lookup.text_for(" S1 ") == "Текст"
        assert lookup.expiration_for("S9") == ""
