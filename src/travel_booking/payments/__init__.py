"""
Модуль контекста платежей (Payments Context).

Отвечает за кошелек пользователя:
- Оплату из кошелька или через внешний шлюз
- Зачисление возвратов
- Журнал операций
"""

from . import domain, infrastructure, interfaces

__all__ = [
    "domain",
    "infrastructure",
    "interfaces",
]
