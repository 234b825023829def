"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from ..shared_kernel import CatalogId, Money, UserId

if TYPE_CHECKING:
    from ..administration.domain import User
    from ..catalog.domain import Hotel, Vehicle
    from ..payments.domain import PaymentMethod, PaymentResult


class ICatalogReader(Protocol):
    """Интерфейс каталога (в контексте бронирования)."""

    def get_hotel(self, hotel_id: CatalogId) -> Optional[Hotel]: ...
    def find_vehicle_on_route(
        self, source: str, destination: str, vehicle_id: CatalogId
    ) -> Optional[Vehicle]: ...


class IPaymentLedger(Protocol):
    """Интерфейс кошелька и платежей (в контексте бронирования)."""

    @property
    def balance(self) -> Money: ...
    def authorize(
        self, amount: Money, method: PaymentMethod, reference: Optional[str] = None
    ) -> PaymentResult: ...
    def refund(self, amount: Money, reference: Optional[str] = None) -> PaymentResult: ...


class IUserDirectory(Protocol):
    """Интерфейс справочника пользователей (в контексте бронирования)."""

    def get_by_id(self, user_id: UserId) -> Optional[User]: ...
