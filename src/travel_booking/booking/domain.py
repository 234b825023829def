"""
Доменная модель контекста бронирования.

Содержит машину состояний бронирования, позиции бронирования,
агрегат сессии бронирования и доменный сервис.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..shared_kernel import (
    DEFAULT_CURRENCY,
    BusinessRuleValidationException,
    CatalogId,
    DomainError,
    DomainEvent,
    EntityId,
    ErrorCode,
    ErrorKind,
    ILogger,
    Money,
    OperationResult,
    UserId,
    generate_id,
    now,
)
from .interfaces import ICatalogReader


class BookingState(str, Enum):
    """Состояния бронирования."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingEvent(str, Enum):
    """События, переводящие бронирование между состояниями."""

    CONFIRM = "confirm"
    CANCEL = "cancel"


class TransitionOutcome(BaseModel):
    """Результат перехода: прежнее и новое состояние и сообщение."""

    model_config = ConfigDict(frozen=True)

    previous: BookingState
    state: BookingState
    event: BookingEvent
    message: str

    @property
    def changed(self) -> bool:
        return self.previous != self.state


_TRANSITIONS: Dict[Tuple[BookingState, BookingEvent], Tuple[BookingState, str]] = {
    (BookingState.PENDING, BookingEvent.CONFIRM): (
        BookingState.CONFIRMED,
        "Booking moved from Pending -> Confirmed",
    ),
    (BookingState.CONFIRMED, BookingEvent.CONFIRM): (
        BookingState.CONFIRMED,
        "Booking already confirmed.",
    ),
    (BookingState.CANCELLED, BookingEvent.CONFIRM): (
        BookingState.CANCELLED,
        "Cannot confirm a cancelled booking.",
    ),
    (BookingState.PENDING, BookingEvent.CANCEL): (
        BookingState.CANCELLED,
        "Booking moved from Pending -> Cancelled",
    ),
    (BookingState.CONFIRMED, BookingEvent.CANCEL): (
        BookingState.CANCELLED,
        "Booking moved from Confirmed -> Cancelled",
    ),
    (BookingState.CANCELLED, BookingEvent.CANCEL): (
        BookingState.CANCELLED,
        "Booking already cancelled.",
    ),
}


def transition(state: BookingState, event: BookingEvent) -> TransitionOutcome:
    """Чистая функция перехода: (состояние, событие) -> результат."""
    new_state, message = _TRANSITIONS[(BookingState(state), BookingEvent(event))]
    return TransitionOutcome(
        previous=state, state=new_state, event=event, message=message
    )


class BookingStateMachine:
    """Текущее состояние одной сессии бронирования."""

    def __init__(
        self,
        initial: BookingState = BookingState.PENDING,
        logger: Optional[ILogger] = None,
    ):
        self._state = initial
        self._logger = logger
        self._history: List[TransitionOutcome] = []

    @property
    def state(self) -> BookingState:
        return self._state

    @property
    def history(self) -> List[TransitionOutcome]:
        return list(self._history)

    def confirm(self) -> TransitionOutcome:
        return self._fire(BookingEvent.CONFIRM)

    def cancel(self) -> TransitionOutcome:
        return self._fire(BookingEvent.CANCEL)

    def reset(self) -> None:
        """Возвращает машину в Pending для нового цикла бронирования."""
        self._state = BookingState.PENDING

    def _fire(self, event: BookingEvent) -> TransitionOutcome:
        outcome = transition(self._state, event)
        self._state = outcome.state
        self._history.append(outcome)
        if self._logger is not None:
            self._logger.info(
                outcome.message,
                previous=outcome.previous.value,
                state=outcome.state.value,
            )
        return outcome


# Позиции бронирования


class LineItemKind(str, Enum):
    """Вид забронированной позиции."""

    HOTEL = "hotel"
    VEHICLE = "vehicle"


class BookedLineItem(BaseModel):
    """Забронированная позиция с ценой, зафиксированной на момент брони."""

    model_config = ConfigDict(frozen=True)

    id: EntityId = Field(default_factory=generate_id)
    kind: LineItemKind
    source_item_id: CatalogId
    description: str
    quantity: int = Field(..., gt=0)
    unit_price: Money
    total_charge: Money
    booked_at: datetime = Field(default_factory=now)

    @classmethod
    def for_hotel(cls, hotel, room_count: int) -> "BookedLineItem":
        return cls(
            kind=LineItemKind.HOTEL,
            source_item_id=hotel.id,
            description=f"{hotel.name}, {hotel.location}",
            quantity=room_count,
            unit_price=hotel.price_per_room,
            total_charge=hotel.price_per_room * room_count,
        )

    @classmethod
    def for_vehicle(cls, vehicle, ticket_count: int) -> "BookedLineItem":
        return cls(
            kind=LineItemKind.VEHICLE,
            source_item_id=vehicle.id,
            description=(
                f"{vehicle.vehicle_type} {vehicle.franchise}, "
                f"{vehicle.source} -> {vehicle.destination}"
            ),
            quantity=ticket_count,
            unit_price=vehicle.unit_price,
            total_charge=vehicle.unit_price * ticket_count,
        )


# Доменные события


class BookingConfirmed(DomainEvent):
    """Событие подтверждения бронирования."""

    event_type: str = "booking_confirmed"
    booking_id: EntityId
    line_item_id: EntityId
    charge: Money


class BookingCancelled(DomainEvent):
    """Событие отмены бронирования."""

    event_type: str = "booking_cancelled"
    booking_id: EntityId
    refundable: Money


class BookingSession(BaseModel):
    """Сессия бронирования: позиции, состояние и события."""

    id: EntityId = Field(default_factory=generate_id)
    booking_number: int = 101
    user_id: UserId
    currency: str = DEFAULT_CURRENCY
    created_at: datetime = Field(default_factory=now)

    _hotel_items: List[BookedLineItem] = PrivateAttr(default_factory=list)
    _vehicle_items: List[BookedLineItem] = PrivateAttr(default_factory=list)
    _machine: BookingStateMachine = PrivateAttr(default_factory=BookingStateMachine)
    _domain_events: List[DomainEvent] = PrivateAttr(default_factory=list)

    def attach_logger(self, logger: ILogger) -> None:
        self._machine = BookingStateMachine(initial=self.state, logger=logger)

    @property
    def state(self) -> BookingState:
        return self._machine.state

    @property
    def state_machine(self) -> BookingStateMachine:
        return self._machine

    @property
    def hotel_items(self) -> List[BookedLineItem]:
        return list(self._hotel_items)

    @property
    def vehicle_items(self) -> List[BookedLineItem]:
        return list(self._vehicle_items)

    @property
    def line_items(self) -> List[BookedLineItem]:
        return self._hotel_items + self._vehicle_items

    @property
    def domain_events(self) -> List[DomainEvent]:
        """Возвращает список доменных событий."""
        return list(self._domain_events)

    def pull_domain_events(self) -> List[DomainEvent]:
        events = list(self._domain_events)
        self._domain_events.clear()
        return events

    def has_items(self) -> bool:
        return bool(self._hotel_items or self._vehicle_items)

    def total_booked(self) -> Money:
        """Сумма всех позиций сессии."""
        total = Money.zero(self.currency)
        for item in self.line_items:
            total += item.total_charge
        return total

    def add_hotel(self, hotel, room_count: int) -> Tuple[BookedLineItem, TransitionOutcome]:
        """Бронирует номера в отеле и подтверждает бронирование.

        Если сессия отменена, сначала начинается новый цикл.
        """
        if room_count < 1:
            raise BusinessRuleValidationException(
                "Количество номеров должно быть не меньше 1"
            )
        self._open_cycle()
        item = BookedLineItem.for_hotel(hotel, room_count)
        self._hotel_items.append(item)
        return item, self._confirm(item)

    def add_vehicle(
        self, vehicle, ticket_count: int
    ) -> Tuple[BookedLineItem, TransitionOutcome]:
        """Бронирует билеты и подтверждает бронирование."""
        if ticket_count < 1:
            raise BusinessRuleValidationException(
                "Количество билетов должно быть не меньше 1"
            )
        self._open_cycle()
        item = BookedLineItem.for_vehicle(vehicle, ticket_count)
        self._vehicle_items.append(item)
        return item, self._confirm(item)

    def cancellation(self) -> Money:
        """Отменяет бронирование и возвращает сумму к возврату.

        Сумма считается по всем позициям сессии до отмены. Переход в
        Cancelled выполняется и для пустой сессии.
        """
        refundable = self.total_booked()
        outcome = self._machine.cancel()
        if outcome.changed:
            self._domain_events.append(
                BookingCancelled(booking_id=self.id, refundable=refundable)
            )
        return refundable

    def start_new_cycle(self) -> None:
        """Начинает новый цикл бронирования: Pending и пустой список позиций."""
        self._hotel_items.clear()
        self._vehicle_items.clear()
        self._machine.reset()

    def _open_cycle(self) -> None:
        # Бронирование после отмены начинает новый цикл
        if self.state is BookingState.CANCELLED:
            self.start_new_cycle()

    def _confirm(self, item: BookedLineItem) -> TransitionOutcome:
        # Каждое успешное бронирование подтверждает сессию
        outcome = self._machine.confirm()
        self._domain_events.append(
            BookingConfirmed(
                booking_id=self.id, line_item_id=item.id, charge=item.total_charge
            )
        )
        return outcome


class BookingResult(OperationResult):
    """Результат бронирования: начисленная сумма или ошибка."""

    charge: Money
    line_item: Optional[BookedLineItem] = None
    outcome: Optional[TransitionOutcome] = None


class BookingService:
    """Доменный сервис: бронирование по данным каталога."""

    def __init__(self, catalog: ICatalogReader):
        self.catalog = catalog

    def book_hotel(
        self, session: BookingSession, hotel_id: CatalogId, room_count: int
    ) -> BookingResult:
        """Бронирует номера в отеле по идентификатору."""
        hotel = self.catalog.get_hotel(hotel_id)
        if hotel is None:
            return BookingResult(
                charge=Money.zero(session.currency),
                error=DomainError(
                    kind=ErrorKind.NOT_FOUND,
                    code=ErrorCode.HOTEL_NOT_FOUND,
                    message="Hotel not found.",
                ),
            )
        item, outcome = session.add_hotel(hotel, room_count)
        return BookingResult(charge=item.total_charge, line_item=item, outcome=outcome)

    def book_vehicle(
        self,
        session: BookingSession,
        source: str,
        destination: str,
        vehicle_id: CatalogId,
        ticket_count: int,
    ) -> BookingResult:
        """Бронирует билеты на транспорт маршрута."""
        vehicle = self.catalog.find_vehicle_on_route(source, destination, vehicle_id)
        if vehicle is None:
            return BookingResult(
                charge=Money.zero(session.currency),
                error=DomainError(
                    kind=ErrorKind.NOT_FOUND,
                    code=ErrorCode.VEHICLE_NOT_FOUND,
                    message="Vehicle not found among matches.",
                ),
            )
        item, outcome = session.add_vehicle(vehicle, ticket_count)
        return BookingResult(charge=item.total_charge, line_item=item, outcome=outcome)

    def cancellation(self, session: BookingSession) -> Money:
        """Отменяет сессию и возвращает сумму к возврату."""
        return session.cancellation()
