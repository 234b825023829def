"""
Интерфейсы (порты) для контекста администрирования.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from ..shared_kernel import CatalogId, Money, UserId

if TYPE_CHECKING:
    from ..catalog.domain import Hotel, Vehicle
    from .domain import User


class ICatalogPriceWriter(Protocol):
    """Интерфейс изменения цен каталога."""

    def update_hotel_price(
        self, hotel_id: CatalogId, new_price: Money
    ) -> Optional[Hotel]: ...
    def update_vehicle_price(
        self, vehicle_id: CatalogId, new_price: Money
    ) -> Optional[Vehicle]: ...


class IUserDirectory(Protocol):
    """Интерфейс справочника пользователей."""

    def get_by_id(self, user_id: UserId) -> Optional[User]: ...
    def add(self, user: User) -> None: ...
    def is_admin(self, user_id: UserId) -> bool: ...
