"""
Column definitions for the tabular views of the catalog.

ITEM_COLUMNS drives the DataFrame shown in the UI; EXPORT_COLUMNS drives the
downloaded workbook.  Export headers are in the language of the price sheet.
"""

# Item fields in display order, with their UI column labels.
ITEM_COLUMNS: dict[str, str] = {
    "article": "Арт.",
    "name": "Наименование",
    "description": "Описание",
    "pack": "Упак.",
    "price": "Цена",
    "promo_price": "Акция",
    "image_url": "Фото",
    "product_url": "Ссылка",
}

# Export sheet columns in the exact output order.
EXPORT_COLUMNS: list[str] = [
    "Категория",
    "Артикул",
    "Наименование",
    "Упак.",
    "Цена",
    "Акция",
]

# Appended to EXPORT_COLUMNS when flags are exported.
EXPORT_FLAG_COLUMNS: list[str] = [
    "Новинка",
    "Дистрибьютор",
]

EXPORT_SHEET_NAME: str = "Прайс-лист"

# Excel number formats for export columns.
EXPORT_NUMBER_FORMATS: dict[str, str] = {
    "Цена": "#,##0.00",
    "Акция": "#,##0.00",
}
