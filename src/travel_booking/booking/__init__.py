"""
Модуль контекста бронирования (Booking Context).

Отвечает за бронирование отелей и транспорта, включая:
- Машину состояний бронирования (Pending, Confirmed, Cancelled)
- Фиксацию цены в позициях бронирования
- Отмену и расчет суммы к возврату
"""

from . import application, domain, interfaces

__all__ = [
    "domain",
    "application",
    "interfaces",
]
