"""
Интеграционные тесты сервиса сессии: бронирование, оплата и возврат.
"""
from decimal import Decimal

from conftest import ADMIN_ID, CUSTOMER_ID, inr
from travel_booking.booking.domain import BookingCancelled, BookingConfirmed, BookingState
from travel_booking.payments.domain import PaymentMethod, RefundIssued
from travel_booking.shared_kernel import ErrorKind


class TestBooking:
    """Тесты бронирования через сервис сессии."""

    def test_last_charge_tracks_latest_booking(self, travel_service):
        """Тестирование того, что начисление перезаписывается последним бронированием."""
        # Подготовка
        travel_service.book_hotel(hotel_id=1, room_count=2)

        # Действие
        travel_service.book_vehicle("Hubli", "Goa", 1001, 1)

        # Проверка
        assert travel_service.last_charge.amount == Decimal("700")

    def test_failed_booking_resets_last_charge(self, travel_service):
        """Тестирование нулевого начисления после неудачного бронирования."""
        # Подготовка
        travel_service.book_hotel(hotel_id=1, room_count=2)

        # Действие
        result = travel_service.book_hotel(hotel_id=99, room_count=1)

        # Проверка
        assert result.error.kind is ErrorKind.NOT_FOUND
        assert travel_service.last_charge.amount == Decimal("0")

    def test_booking_after_cancel_starts_new_cycle(self, travel_service):
        """Тестирование нового цикла бронирования после отмены."""
        # Подготовка
        travel_service.book_hotel(hotel_id=1, room_count=1)
        travel_service.cancel_and_refund()

        # Действие
        result = travel_service.book_vehicle("Hubli", "Bangalore", 3001, 2)

        # Проверка
        assert result.outcome.message == "Booking moved from Pending -> Confirmed"
        assert travel_service.session.state == BookingState.CONFIRMED
        assert travel_service.summary().total == Decimal("1600")

    def test_failed_booking_after_cancel_keeps_cancelled_state(self, travel_service):
        """Тестирование неудачного бронирования в отмененной сессии."""
        # Подготовка
        travel_service.book_hotel(hotel_id=1, room_count=1)
        travel_service.cancel_and_refund()

        # Действие
        hotel = travel_service.book_hotel(hotel_id=99, room_count=1)
        vehicle = travel_service.book_vehicle("Hubli", "Goa", 3001, 1)

        # Проверка
        assert hotel.charge.amount == Decimal("0")
        assert vehicle.charge.amount == Decimal("0")
        assert travel_service.session.state == BookingState.CANCELLED
        assert travel_service.summary().total == Decimal("5000")


class TestPayment:
    """Тесты оплаты последнего начисления."""

    def test_nothing_to_pay(self, travel_service):
        """Тестирование оплаты без бронирования."""
        # Действие
        result = travel_service.pay_last_charge(PaymentMethod.WALLET)

        # Проверка
        assert result.error.kind is ErrorKind.NOTHING_OUTSTANDING

    def test_failed_payment_keeps_charge_outstanding(self, travel_service, ledger):
        """Тестирование неудачной оплаты из кошелька."""
        # Подготовка
        travel_service.book_hotel(hotel_id=1, room_count=5)

        # Действие
        result = travel_service.pay_last_charge(PaymentMethod.WALLET)

        # Проверка
        assert result.error.kind is ErrorKind.INSUFFICIENT_FUNDS
        assert travel_service.last_charge.amount == Decimal("25000")
        assert ledger.balance.amount == Decimal("20000")

    def test_external_payment_clears_charge(self, travel_service, ledger):
        """Тестирование внешней оплаты."""
        # Подготовка
        travel_service.book_hotel(hotel_id=1, room_count=5)

        # Действие
        result = travel_service.pay_last_charge(PaymentMethod.EXTERNAL)

        # Проверка
        assert result.ok
        assert travel_service.last_charge.amount == Decimal("0")
        assert ledger.balance.amount == Decimal("20000")


class TestCancelAndRefund:
    """Тесты отмены с возвратом."""

    def test_book_pay_and_cancel_round_trip(self, travel_service, ledger):
        """Тестирование полного цикла: бронирование, оплата и возврат."""
        # Подготовка
        travel_service.book_hotel(hotel_id=1, room_count=2)
        assert travel_service.pay_last_charge(PaymentMethod.WALLET).ok
        travel_service.book_vehicle("Hubli", "Goa", 1001, 1)
        assert travel_service.pay_last_charge(PaymentMethod.WALLET).ok
        assert ledger.balance.amount == Decimal("9300")

        # Действие
        result = travel_service.cancel_and_refund()

        # Проверка
        assert result.ok
        assert result.refunded.amount == Decimal("10700")
        assert result.balance.amount == Decimal("20000")
        assert travel_service.session.state == BookingState.CANCELLED

    def test_nothing_to_cancel_leaves_state_alone(self, travel_service, ledger):
        """Тестирование отмены без бронирований."""
        # Действие
        result = travel_service.cancel_and_refund()

        # Проверка
        assert result.error.kind is ErrorKind.NOTHING_OUTSTANDING
        assert travel_service.session.state == BookingState.PENDING
        assert ledger.entries == []

    def test_second_cancel_does_not_refund_twice(self, travel_service, ledger):
        """Тестирование повторной отмены без повторного возврата."""
        # Подготовка
        travel_service.book_hotel(hotel_id=2, room_count=1)
        travel_service.cancel_and_refund()

        # Действие
        result = travel_service.cancel_and_refund()

        # Проверка
        assert result.error.kind is ErrorKind.NOTHING_OUTSTANDING
        assert ledger.balance.amount == Decimal("23000")

    def test_repeated_cycles_refund_exact_charges(
        self, travel_service, admin_service, ledger
    ):
        """Тестирование точности сумм на многих циклах бронирования."""
        # Подготовка
        admin_service.update_hotel_price(ADMIN_ID, 2, inr("3333.33"))

        # Действие
        for _ in range(7):
            booked = travel_service.book_hotel(hotel_id=2, room_count=3)
            travel_service.pay_last_charge(PaymentMethod.WALLET)
            refund = travel_service.cancel_and_refund()
            assert refund.refunded == booked.charge

        # Проверка
        assert booked.charge.amount == Decimal("9999.99")
        assert ledger.balance.amount == Decimal("20000.00")

    def test_domain_events_are_published(self, travel_service, event_bus):
        """Тестирование публикации доменных событий на шину."""
        # Подготовка
        received = []
        for event_type in (BookingConfirmed, BookingCancelled, RefundIssued):
            event_bus.subscribe(event_type, received.append)

        # Действие
        travel_service.book_hotel(hotel_id=1, room_count=1)
        travel_service.cancel_and_refund()

        # Проверка
        assert [type(e) for e in received] == [
            BookingConfirmed,
            BookingCancelled,
            RefundIssued,
        ]


class TestReceipt:
    """Тесты квитанции."""

    def test_receipt(self, travel_service):
        """Тестирование квитанции пользователя."""
        # Подготовка
        travel_service.book_hotel(hotel_id=1, room_count=2)

        # Действие
        receipt = travel_service.receipt(CUSTOMER_ID)

        # Проверка
        assert receipt.name == "sachin"
        assert receipt.amount_due == Decimal("10000")
        assert "Name: sachin" in receipt.render()
        assert "Denissons, Hubli x2: 10000.00" in receipt.render()

    def test_receipt_for_unknown_user(self, travel_service):
        """Тестирование квитанции для неизвестного пользователя."""
        assert travel_service.receipt(555) is None
