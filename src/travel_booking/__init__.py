"""
Система бронирования поездок.

Каталог отелей и транспорта, жизненный цикл бронирования,
кошелек с оплатой и возвратами, изменение цен администратором.
"""

__version__ = "0.1.0"
