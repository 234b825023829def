"""
Модуль каталога (Catalog Context).

Отвечает за хранение отелей, маршрутов и транспорта:
- Поиск записи по идентификатору
- Фильтрация по городу и маршруту
- Изменение цен под блокировкой
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
