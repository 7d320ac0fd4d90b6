"""Выгрузка заказов FLIP в Google Sheets и печать этикеток со штрихкодами."""
