"""
Модуль контекста администрирования (Administration Context).

Отвечает за пользователей и их роли, а также за
изменение цен каталога, доступное только администраторам.
"""

from . import domain, infrastructure, interfaces

__all__ = [
    "domain",
    "infrastructure",
    "interfaces",
]
