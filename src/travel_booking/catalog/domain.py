"""
Доменная модель каталога.

Отели, транспортные средства и маршруты, доступные для бронирования.
Записи каталога изменяемы только через обновление цены администратором.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..shared_kernel import BusinessRuleValidationException, CatalogId, Money


def _require_positive(price: Money) -> Money:
    if price.is_zero():
        raise ValueError("Цена должна быть больше нуля")
    return price


def _require_same_currency(current: Money, new_price: Money) -> None:
    if new_price.currency != current.currency:
        raise BusinessRuleValidationException(
            f"Валюта цены {new_price.currency} не совпадает с валютой "
            f"каталога {current.currency}"
        )


class Hotel(BaseModel):
    """Отель."""

    model_config = ConfigDict(validate_assignment=True)

    id: CatalogId
    name: str
    location: str
    rating: int = Field(..., ge=1, le=5)
    price_per_room: Money

    @field_validator("price_per_room")
    @classmethod
    def price_must_be_positive(cls, v: Money) -> Money:
        return _require_positive(v)

    def change_price(self, new_price: Money) -> None:
        """Меняет цену номера (валюта остается прежней)."""
        _require_same_currency(self.price_per_room, new_price)
        self.price_per_room = new_price


class Vehicle(BaseModel):
    """Транспортное средство на маршруте."""

    model_config = ConfigDict(validate_assignment=True)

    id: CatalogId
    vehicle_type: str  # Bus, Train, Flight...
    franchise: str
    seating_capacity: int = Field(..., gt=0)
    source: str
    destination: str
    unit_price: Money

    @field_validator("unit_price")
    @classmethod
    def price_must_be_positive(cls, v: Money) -> Money:
        return _require_positive(v)

    def change_price(self, new_price: Money) -> None:
        _require_same_currency(self.unit_price, new_price)
        self.unit_price = new_price

    def travels(self, source: str, destination: str) -> bool:
        """Проверяет, что транспорт ходит по маршруту (без учета регистра)."""
        return (
            self.source.casefold() == source.casefold()
            and self.destination.casefold() == destination.casefold()
        )


class Route(BaseModel):
    """Маршрут: пара (откуда, куда) и упорядоченный список транспорта."""

    source: str
    destination: str
    vehicles: List[Vehicle] = Field(default_factory=list)

    @property
    def key(self) -> tuple:
        return (self.source.casefold(), self.destination.casefold())

    def matches(self, source: str, destination: str) -> bool:
        return self.key == (source.casefold(), destination.casefold())

    def add_vehicle(self, vehicle: Vehicle) -> None:
        """Добавляет транспорт на маршрут."""
        if not vehicle.travels(self.source, self.destination):
            raise BusinessRuleValidationException(
                f"Транспорт {vehicle.id} не ходит по маршруту "
                f"{self.source} -> {self.destination}"
            )
        if any(v.id == vehicle.id for v in self.vehicles):
            raise ValueError(f"Транспорт с id {vehicle.id} уже есть на маршруте")
        self.vehicles.append(vehicle)

    def get_vehicle(self, vehicle_id: CatalogId) -> Optional[Vehicle]:
        for vehicle in self.vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None
