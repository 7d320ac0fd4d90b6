"""Типы данных и Pydantic схемы."""
