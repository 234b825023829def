"""
Общее ядро (Shared Kernel) для системы бронирования поездок.

Содержит общие типы данных и утилиты, используемые в различных ограниченных контекстах.
"""

from .domain import (
    DEFAULT_CURRENCY,
    BusinessRuleValidationException,
    # Базовые типы
    CatalogId,
    DomainError,
    DomainEvent,
    # Исключения
    DomainException,
    EntityId,
    ErrorCode,
    # Ошибки как значения
    ErrorKind,
    # Основные классы
    Money,
    OperationFailed,
    OperationResult,
    UserId,
    generate_id,
    # Утилиты
    now,
)
from .infrastructure import ConsoleLogger, InMemoryEventBus
from .interfaces import IEventBus, ILogger

__all__ = [
    # Базовые типы
    "EntityId",
    "CatalogId",
    "UserId",
    "generate_id",
    "DEFAULT_CURRENCY",
    # Основные классы
    "Money",
    "DomainEvent",
    # Ошибки как значения
    "ErrorKind",
    "ErrorCode",
    "DomainError",
    "OperationResult",
    # Исключения
    "DomainException",
    "BusinessRuleValidationException",
    "OperationFailed",
    # Порты и адаптеры
    "ILogger",
    "IEventBus",
    "ConsoleLogger",
    "InMemoryEventBus",
    # Утилиты
    "now",
]
