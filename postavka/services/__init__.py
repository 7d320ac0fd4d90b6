"""Бизнес-логика: нормализация, отчёт, публикация, этикетки."""
