"""
Основные доменные типы и утилиты общего ядра.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

# Общие типы идентификаторов
EntityId = UUID
CatalogId = int
UserId = int

DEFAULT_CURRENCY = "INR"


def generate_id() -> UUID:
    """Генерирует новый UUID."""
    return uuid4()


def now() -> datetime:
    """Возвращает текущую дату и время (UTC)."""
    return datetime.now(timezone.utc)


class Money(BaseModel):
    """Денежная сумма с валютой."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., ge=0, description="Сумма денег")
    currency: str = Field(
        default=DEFAULT_CURRENCY, max_length=3, description="Код валюты (ISO 4217)"
    )

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(amount=Decimal("0"), currency=currency)

    def is_zero(self) -> bool:
        return self.amount == 0

    def _check_same_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError("Операция возможна только с объектами Money")
        if self.currency != other.currency:
            raise ValueError("Нельзя смешивать разные валюты")

    def __add__(self, other: "Money") -> "Money":
        self._check_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._check_same_currency(other)
        if self.amount < other.amount:
            raise ValueError("Результат не может быть отрицательным")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __mul__(self, multiplier: Union[int, Decimal]) -> "Money":
        if isinstance(multiplier, bool) or not isinstance(multiplier, (int, Decimal)):
            raise TypeError("Множитель должен быть целым числом или Decimal")
        if multiplier < 0:
            raise ValueError("Множитель не может быть отрицательным")
        return Money(amount=self.amount * multiplier, currency=self.currency)

    __rmul__ = __mul__

    def __lt__(self, other: "Money") -> bool:
        self._check_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self._check_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        self._check_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        self._check_same_currency(other)
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


class DomainEvent(BaseModel):
    """Базовый класс для всех доменных событий."""

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=now)
    event_type: str


# Ошибки как значения
class ErrorKind(str, Enum):
    """Виды ожидаемых (восстанавливаемых) ошибок."""

    NOT_FOUND = "not_found"
    NOT_AUTHORIZED = "not_authorized"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NOTHING_OUTSTANDING = "nothing_outstanding"


class ErrorCode:
    """Коды ошибок, которые видит пользователь."""

    HOTEL_NOT_AUTHORIZED = 101
    VEHICLE_NOT_AUTHORIZED = 1002
    INSUFFICIENT_FUNDS = 402
    HOTEL_NOT_FOUND = 404
    VEHICLE_NOT_FOUND = 405
    NOTHING_OUTSTANDING = 409


class DomainError(BaseModel):
    """Ошибка бизнес-операции: вид, код и сообщение."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    code: int
    message: str

    def __str__(self) -> str:
        return f"ERROR!! {self.code} : {self.message}"


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class BusinessRuleValidationException(DomainException):
    """Исключение при нарушении бизнес-правил."""

    pass


class OperationFailed(DomainException):
    """Исключение, в которое разворачивается ошибка-значение."""

    def __init__(self, error: DomainError):
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def code(self) -> int:
        return self.error.code


class OperationResult(BaseModel):
    """Базовый результат операции: успех или ошибка-значение."""

    model_config = ConfigDict(frozen=True)

    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> "OperationResult":
        """Возвращает сам результат или поднимает OperationFailed."""
        if self.error is not None:
            raise OperationFailed(self.error)
        return self
