"""
Доменная модель администрирования.

Пользователи с ролью и привилегированное изменение цен каталога.
"""

from decimal import Decimal
from enum import Enum
from typing import Callable, Optional, Union

from pydantic import BaseModel

from ..catalog.domain import Hotel, Vehicle
from ..shared_kernel import (
    BusinessRuleValidationException,
    CatalogId,
    DomainError,
    DomainEvent,
    ErrorCode,
    ErrorKind,
    IEventBus,
    ILogger,
    Money,
    OperationResult,
    UserId,
)
from .interfaces import ICatalogPriceWriter

# Проверка привилегии: по идентификатору пользователя
IsAdmin = Callable[[UserId], bool]


class UserRole(str, Enum):
    """Роли пользователей."""

    CUSTOMER = "customer"
    ADMIN = "admin"


class User(BaseModel):
    """Пользователь системы (клиент или администратор)."""

    id: UserId
    name: str
    email: str
    location: str
    role: UserRole = UserRole.CUSTOMER

    def update_profile(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        location: Optional[str] = None,
    ) -> None:
        """Обновляет данные профиля (одинаково для всех ролей)."""
        if name is not None:
            self.name = name
        if email is not None:
            self.email = email
        if location is not None:
            self.location = location

    def __str__(self) -> str:
        label = "Admin" if self.role is UserRole.ADMIN else "Customer"
        return f"[{label}] {self.id} : {self.name} : {self.email} : {self.location}"


def is_admin(user: Optional[User]) -> bool:
    """Проверяет, есть ли у пользователя права администратора."""
    return user is not None and user.role is UserRole.ADMIN


class HotelPriceUpdated(DomainEvent):
    """Событие изменения цены номера."""

    event_type: str = "hotel_price_updated"
    actor_id: UserId
    hotel_id: CatalogId
    new_price: Money


class VehiclePriceUpdated(DomainEvent):
    """Событие изменения цены билета."""

    event_type: str = "vehicle_price_updated"
    actor_id: UserId
    vehicle_id: CatalogId
    new_price: Money


class PriceUpdateResult(OperationResult):
    """Результат изменения цены: обновленная запись или ошибка."""

    record: Optional[Union[Hotel, Vehicle]] = None


class AdminPriceService:
    """Привилегированное изменение цен каталога."""

    def __init__(
        self,
        catalog: ICatalogPriceWriter,
        is_admin: IsAdmin,
        logger: Optional[ILogger] = None,
        event_bus: Optional[IEventBus] = None,
    ):
        self._catalog = catalog
        self._is_admin = is_admin
        self._logger = logger
        self._event_bus = event_bus

    def update_hotel_price(
        self, actor_id: UserId, hotel_id: CatalogId, new_price: Money
    ) -> PriceUpdateResult:
        """Меняет цену номера в отеле."""
        if not self._is_admin(actor_id):
            return self._not_authorized(actor_id, ErrorCode.HOTEL_NOT_AUTHORIZED)
        self._validate_price(new_price)

        hotel = self._catalog.update_hotel_price(hotel_id, new_price)
        if hotel is None:
            return PriceUpdateResult(
                error=DomainError(
                    kind=ErrorKind.NOT_FOUND,
                    code=ErrorCode.HOTEL_NOT_FOUND,
                    message="Hotel not found.",
                )
            )

        self._publish(
            HotelPriceUpdated(actor_id=actor_id, hotel_id=hotel_id, new_price=new_price)
        )
        if self._logger is not None:
            self._logger.info(
                "Hotel price updated", hotel_id=hotel_id, new_price=str(new_price)
            )
        return PriceUpdateResult(record=hotel)

    def update_vehicle_price(
        self, actor_id: UserId, vehicle_id: CatalogId, new_price: Money
    ) -> PriceUpdateResult:
        """Меняет цену билета (первое совпадение по маршрутам)."""
        if not self._is_admin(actor_id):
            return self._not_authorized(actor_id, ErrorCode.VEHICLE_NOT_AUTHORIZED)
        self._validate_price(new_price)

        vehicle = self._catalog.update_vehicle_price(vehicle_id, new_price)
        if vehicle is None:
            return PriceUpdateResult(
                error=DomainError(
                    kind=ErrorKind.NOT_FOUND,
                    code=ErrorCode.VEHICLE_NOT_FOUND,
                    message="Vehicle not found.",
                )
            )

        self._publish(
            VehiclePriceUpdated(
                actor_id=actor_id, vehicle_id=vehicle_id, new_price=new_price
            )
        )
        if self._logger is not None:
            self._logger.info(
                "Vehicle price updated", vehicle_id=vehicle_id, new_price=str(new_price)
            )
        return PriceUpdateResult(record=vehicle)

    def _not_authorized(self, actor_id: UserId, code: int) -> PriceUpdateResult:
        if self._logger is not None:
            self._logger.warning("User is not an admin", actor_id=actor_id, code=code)
        return PriceUpdateResult(
            error=DomainError(
                kind=ErrorKind.NOT_AUTHORIZED, code=code, message="User is not an admin"
            )
        )

    def _publish(self, event: DomainEvent) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)

    @staticmethod
    def _validate_price(new_price: Money) -> None:
        if new_price.amount <= Decimal("0"):
            raise BusinessRuleValidationException("Новая цена должна быть больше нуля")
