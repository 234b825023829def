"""
Прикладной слой контекста бронирования.

Сервис сессии координирует бронирование, оплату последнего начисления
и отмену с возвратом в кошелек.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel

from ..shared_kernel import (
    CatalogId,
    DomainError,
    EntityId,
    ErrorCode,
    ErrorKind,
    IEventBus,
    ILogger,
    Money,
    OperationResult,
    UserId,
)
from . import interfaces as ports
from .domain import (
    BookedLineItem,
    BookingResult,
    BookingService,
    BookingSession,
    BookingState,
)

if TYPE_CHECKING:
    from ..payments.domain import PaymentMethod

# DTO для исходящих данных


class BookedLineItemDTO(BaseModel):
    """DTO для представления забронированной позиции."""

    kind: str
    source_item_id: CatalogId
    description: str
    quantity: int
    unit_price: Decimal
    total_charge: Decimal

    @classmethod
    def from_domain(cls, item: BookedLineItem) -> "BookedLineItemDTO":
        """Создает DTO из доменной модели."""
        return cls(
            kind=item.kind.value,
            source_item_id=item.source_item_id,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price.amount,
            total_charge=item.total_charge.amount,
        )


class BookingSessionDTO(BaseModel):
    """DTO для представления сессии бронирования."""

    id: EntityId
    booking_number: int
    user_id: UserId
    state: BookingState
    items: List[BookedLineItemDTO]
    total: Decimal
    last_charge: Decimal
    currency: str
    created_at: datetime


class Receipt(BaseModel):
    """Квитанция для пользователя."""

    booking_number: int
    name: str
    email: str
    location: str
    items: List[BookedLineItemDTO]
    total: Decimal
    amount_due: Decimal
    currency: str
    state: BookingState

    def render(self) -> str:
        lines = [
            "----- Receipt -----",
            f"Name: {self.name}",
            f"Email: {self.email}",
            f"Location: {self.location}",
        ]
        for item in self.items:
            lines.append(
                f"{item.description} x{item.quantity}: {item.total_charge:.2f}"
            )
        lines.append(f"Total: {self.total:.2f} {self.currency}")
        lines.append(f"Amount due: {self.amount_due:.2f} {self.currency}")
        return "\n".join(lines)


class CancellationResult(OperationResult):
    """Результат отмены: сумма возврата и баланс после зачисления."""

    refunded: Money
    balance: Optional[Money] = None


# Сервисы приложения


class TravelSessionService:
    """Сервис приложения для одной сессии бронирования.

    Хранит одно неоплаченное начисление: каждое бронирование
    перезаписывает его суммой, которую только что вернуло.
    """

    def __init__(
        self,
        session: BookingSession,
        booking_service: BookingService,
        ledger: ports.IPaymentLedger,
        users: ports.IUserDirectory,
        event_bus: IEventBus,
        logger: ILogger,
    ):
        """Инициализирует сервис."""
        self.session = session
        self._booking_service = booking_service
        self._ledger = ledger
        self._users = users
        self._event_bus = event_bus
        self._logger = logger
        self._last_charge = Money.zero(session.currency)

    @property
    def last_charge(self) -> Money:
        return self._last_charge

    def book_hotel(self, hotel_id: CatalogId, room_count: int) -> BookingResult:
        """Бронирует номера в отеле."""
        previous = self.session.state
        result = self._booking_service.book_hotel(self.session, hotel_id, room_count)
        return self._after_booking(result, previous, hotel_id=hotel_id)

    def book_vehicle(
        self,
        source: str,
        destination: str,
        vehicle_id: CatalogId,
        ticket_count: int,
    ) -> BookingResult:
        """Бронирует билеты на маршрут."""
        previous = self.session.state
        result = self._booking_service.book_vehicle(
            self.session, source, destination, vehicle_id, ticket_count
        )
        return self._after_booking(
            result,
            previous,
            source=source,
            destination=destination,
            vehicle_id=vehicle_id,
        )

    def pay_last_charge(self, method: "PaymentMethod") -> OperationResult:
        """Оплачивает последнее начисление выбранным способом."""
        if self._last_charge.is_zero():
            return OperationResult(
                error=DomainError(
                    kind=ErrorKind.NOTHING_OUTSTANDING,
                    code=ErrorCode.NOTHING_OUTSTANDING,
                    message="No pending booking amount. Book first.",
                )
            )

        result = self._ledger.authorize(
            self._last_charge, method, reference=str(self.session.booking_number)
        )
        self._publish(self._ledger)
        if result.ok:
            self._last_charge = Money.zero(self.session.currency)
        else:
            self._logger.warning("Payment failed.", error=result.error.message)
        return result

    def cancel_and_refund(self) -> CancellationResult:
        """Отменяет все забронированное и зачисляет возврат в кошелек."""
        # Уже отмененный цикл не возвращается повторно
        if not self.session.has_items() or self.session.state is BookingState.CANCELLED:
            return CancellationResult(
                refunded=Money.zero(self.session.currency),
                error=DomainError(
                    kind=ErrorKind.NOTHING_OUTSTANDING,
                    code=ErrorCode.NOTHING_OUTSTANDING,
                    message="No bookings to cancel.",
                ),
            )

        refundable = self._booking_service.cancellation(self.session)
        self._publish(self.session)
        payment = self._ledger.refund(
            refundable, reference=str(self.session.booking_number)
        )
        self._publish(self._ledger)
        self._last_charge = Money.zero(self.session.currency)
        return CancellationResult(refunded=refundable, balance=payment.balance)

    def receipt(self, user_id: UserId) -> Optional[Receipt]:
        """Формирует квитанцию для пользователя сессии."""
        user = self._users.get_by_id(user_id)
        if user is None:
            self._logger.warning("User not found in booking context.", user_id=user_id)
            return None
        return Receipt(
            booking_number=self.session.booking_number,
            name=user.name,
            email=user.email,
            location=user.location,
            items=self._item_dtos(),
            total=self.session.total_booked().amount,
            amount_due=self._last_charge.amount,
            currency=self.session.currency,
            state=self.session.state,
        )

    def summary(self) -> BookingSessionDTO:
        """Возвращает текущее состояние сессии."""
        return BookingSessionDTO(
            id=self.session.id,
            booking_number=self.session.booking_number,
            user_id=self.session.user_id,
            state=self.session.state,
            items=self._item_dtos(),
            total=self.session.total_booked().amount,
            last_charge=self._last_charge.amount,
            currency=self.session.currency,
            created_at=self.session.created_at,
        )

    def _after_booking(
        self, result: BookingResult, previous: BookingState, **context
    ) -> BookingResult:
        # Одно неоплаченное начисление: последнее бронирование его перезаписывает
        self._last_charge = result.charge
        if result.ok:
            if previous is BookingState.CANCELLED:
                self._logger.info(
                    "Started a new booking cycle",
                    booking_number=self.session.booking_number,
                )
            self._publish(self.session)
        else:
            self._logger.warning(result.error.message, **context)
        return result

    def _publish(self, source) -> None:
        for event in source.pull_domain_events():
            self._event_bus.publish(event)

    def _item_dtos(self) -> List[BookedLineItemDTO]:
        return [BookedLineItemDTO.from_domain(item) for item in self.session.line_items]
