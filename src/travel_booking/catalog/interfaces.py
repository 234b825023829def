"""
Интерфейсы (порты) для контекста каталога.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..shared_kernel import CatalogId, Money
from .domain import Hotel, Route, Vehicle


class ICatalogReader(Protocol):
    """Интерфейс чтения каталога (нужен контексту бронирования)."""

    def get_hotel(self, hotel_id: CatalogId) -> Optional[Hotel]: ...
    def find_vehicle_on_route(
        self, source: str, destination: str, vehicle_id: CatalogId
    ) -> Optional[Vehicle]: ...


class ICatalog(ICatalogReader, Protocol):
    """Полный интерфейс каталога."""

    def list_hotels(self) -> List[Hotel]: ...
    def hotels_in(self, location: str) -> List[Hotel]: ...
    def list_routes(self) -> List[Route]: ...
    def vehicles_on_route(self, source: str, destination: str) -> List[Vehicle]: ...
    def find_vehicle(self, vehicle_id: CatalogId) -> Optional[Vehicle]: ...
    def update_hotel_price(
        self, hotel_id: CatalogId, new_price: Money
    ) -> Optional[Hotel]: ...
    def update_vehicle_price(
        self, vehicle_id: CatalogId, new_price: Money
    ) -> Optional[Vehicle]: ...
