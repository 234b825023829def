"""
Прикладной слой каталога.

Просмотр отелей и транспорта для внешнего слоя (меню, API).
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel

from ..shared_kernel import CatalogId
from . import interfaces as ports
from .domain import Hotel, Vehicle

# DTO для исходящих данных


class HotelDTO(BaseModel):
    """DTO для представления отеля."""

    id: CatalogId
    name: str
    location: str
    rating: int
    price_per_room: Decimal
    currency: str

    @classmethod
    def from_domain(cls, hotel: Hotel) -> "HotelDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=hotel.id,
            name=hotel.name,
            location=hotel.location,
            rating=hotel.rating,
            price_per_room=hotel.price_per_room.amount,
            currency=hotel.price_per_room.currency,
        )

    def __str__(self) -> str:
        return (
            f"Hotel {self.id} : {self.name} : {self.location} : "
            f"Rating={self.rating} : Price={self.price_per_room:.2f}"
        )


class VehicleDTO(BaseModel):
    """DTO для представления транспорта."""

    id: CatalogId
    vehicle_type: str
    franchise: str
    seating_capacity: int
    source: str
    destination: str
    unit_price: Decimal
    currency: str

    @classmethod
    def from_domain(cls, vehicle: Vehicle) -> "VehicleDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=vehicle.id,
            vehicle_type=vehicle.vehicle_type,
            franchise=vehicle.franchise,
            seating_capacity=vehicle.seating_capacity,
            source=vehicle.source,
            destination=vehicle.destination,
            unit_price=vehicle.unit_price.amount,
            currency=vehicle.unit_price.currency,
        )

    def __str__(self) -> str:
        return (
            f"Vehicle {self.id} : {self.vehicle_type} : {self.franchise} : "
            f"Seats={self.seating_capacity} : {self.source} -> {self.destination} : "
            f"Price={self.unit_price:.2f}"
        )


class CatalogApplicationService:
    """Сервис приложения для просмотра каталога."""

    def __init__(self, catalog: ports.ICatalog):
        self._catalog = catalog

    def list_hotels(self) -> List[HotelDTO]:
        return [HotelDTO.from_domain(h) for h in self._catalog.list_hotels()]

    def hotels_at(self, destination: str) -> List[HotelDTO]:
        """Возвращает отели в указанном городе."""
        return [HotelDTO.from_domain(h) for h in self._catalog.hotels_in(destination)]

    def list_vehicles(self) -> List[VehicleDTO]:
        """Возвращает транспорт всех маршрутов в порядке добавления."""
        return [
            VehicleDTO.from_domain(v)
            for route in self._catalog.list_routes()
            for v in route.vehicles
        ]

    def vehicles_between(self, source: str, destination: str) -> List[VehicleDTO]:
        """Возвращает транспорт на маршруте."""
        return [
            VehicleDTO.from_domain(v)
            for v in self._catalog.vehicles_on_route(source, destination)
        ]
