"""
Инфраструктурный слой каталога.

Хранилище каталога в памяти и тестовые данные для заполнения.
"""

import threading
from typing import Dict, Iterable, List, Optional, Tuple

from ..shared_kernel import DEFAULT_CURRENCY, CatalogId, Money
from . import interfaces as ports
from .domain import Hotel, Route, Vehicle


class InMemoryCatalog(ports.ICatalog):
    """Каталог отелей и маршрутов в памяти.

    Наружу отдаются только копии записей. Чтение и изменение цены
    выполняются под одной блокировкой.
    """

    def __init__(
        self,
        hotels: Iterable[Hotel] = (),
        routes: Iterable[Route] = (),
    ):
        self._lock = threading.RLock()
        self._hotels: Dict[CatalogId, Hotel] = {}
        self._routes: Dict[Tuple[str, str], Route] = {}
        for hotel in hotels:
            self.add_hotel(hotel)
        for route in routes:
            self.add_route(route)

    # Заполнение

    def add_hotel(self, hotel: Hotel) -> None:
        with self._lock:
            if hotel.id in self._hotels:
                raise ValueError(f"Hotel with id {hotel.id} already exists")
            self._hotels[hotel.id] = hotel.model_copy(deep=True)

    def add_route(self, route: Route) -> None:
        route = route.model_copy(deep=True)
        with self._lock:
            existing = self._routes.get(route.key)
            if existing is None:
                self._routes[route.key] = route
                return
            for vehicle in route.vehicles:
                existing.add_vehicle(vehicle)

    # Чтение

    def get_hotel(self, hotel_id: CatalogId) -> Optional[Hotel]:
        with self._lock:
            hotel = self._hotels.get(hotel_id)
            return hotel.model_copy(deep=True) if hotel else None

    def list_hotels(self) -> List[Hotel]:
        with self._lock:
            return [h.model_copy(deep=True) for h in self._hotels.values()]

    def hotels_in(self, location: str) -> List[Hotel]:
        wanted = location.casefold()
        return [h for h in self.list_hotels() if h.location.casefold() == wanted]

    def list_routes(self) -> List[Route]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._routes.values()]

    def vehicles_on_route(self, source: str, destination: str) -> List[Vehicle]:
        with self._lock:
            route = self._routes.get((source.casefold(), destination.casefold()))
            if route is None:
                return []
            return [v.model_copy(deep=True) for v in route.vehicles]

    def find_vehicle_on_route(
        self, source: str, destination: str, vehicle_id: CatalogId
    ) -> Optional[Vehicle]:
        for vehicle in self.vehicles_on_route(source, destination):
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    def find_vehicle(self, vehicle_id: CatalogId) -> Optional[Vehicle]:
        with self._lock:
            found = self._find_vehicle_record(vehicle_id)
            return found.model_copy(deep=True) if found else None

    # Изменение цен

    def update_hotel_price(
        self, hotel_id: CatalogId, new_price: Money
    ) -> Optional[Hotel]:
        with self._lock:
            hotel = self._hotels.get(hotel_id)
            if hotel is None:
                return None
            hotel.change_price(new_price)
            return hotel.model_copy(deep=True)

    def update_vehicle_price(
        self, vehicle_id: CatalogId, new_price: Money
    ) -> Optional[Vehicle]:
        with self._lock:
            vehicle = self._find_vehicle_record(vehicle_id)
            if vehicle is None:
                return None
            vehicle.change_price(new_price)
            return vehicle.model_copy(deep=True)

    def _find_vehicle_record(self, vehicle_id: CatalogId) -> Optional[Vehicle]:
        # Первое совпадение по маршрутам в порядке добавления
        for route in self._routes.values():
            vehicle = route.get_vehicle(vehicle_id)
            if vehicle is not None:
                return vehicle
        return None


def sample_hotels(currency: str = DEFAULT_CURRENCY) -> List[Hotel]:
    """Тестовые отели."""
    rows = [
        (1, "Denissons", "Hubli", 5, 5000),
        (2, "TravelInn", "Hubli", 4, 3000),
        (3, "Pavan'sHotel", "Bangalore", 4, 4000),
        (4, "Richid", "Bangalore", 3, 3800),
    ]
    return [
        Hotel(
            id=hotel_id,
            name=name,
            location=location,
            rating=rating,
            price_per_room=Money(amount=price, currency=currency),
        )
        for hotel_id, name, location, rating, price in rows
    ]


def sample_routes(currency: str = DEFAULT_CURRENCY) -> List[Route]:
    """Тестовые маршруты с транспортом."""
    hubli_goa = Route(source="Hubli", destination="Goa")
    hubli_goa.add_vehicle(
        Vehicle(
            id=1001,
            vehicle_type="Bus",
            franchise="SRS",
            seating_capacity=50,
            source="Hubli",
            destination="Goa",
            unit_price=Money(amount=700, currency=currency),
        )
    )
    hubli_goa.add_vehicle(
        Vehicle(
            id=2001,
            vehicle_type="Flight",
            franchise="SpiceJet",
            seating_capacity=180,
            source="Hubli",
            destination="Goa",
            unit_price=Money(amount=5000, currency=currency),
        )
    )

    hubli_bangalore = Route(source="Hubli", destination="Bangalore")
    hubli_bangalore.add_vehicle(
        Vehicle(
            id=3001,
            vehicle_type="Train",
            franchise="RaniChennama",
            seating_capacity=1000,
            source="Hubli",
            destination="Bangalore",
            unit_price=Money(amount=800, currency=currency),
        )
    )
    return [hubli_goa, hubli_bangalore]


def create_sample_catalog(currency: str = DEFAULT_CURRENCY) -> InMemoryCatalog:
    """Создает каталог, заполненный тестовыми данными."""
    return InMemoryCatalog(
        hotels=sample_hotels(currency), routes=sample_routes(currency)
    )
