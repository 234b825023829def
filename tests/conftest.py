"""
Конфигурация тестов для pytest.
Добавляет директорию src в PYTHONPATH и предоставляет общие фикстуры.
"""
import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Добавляем директорию с исходниками в PYTHONPATH
root_dir = str(Path(__file__).parent.parent / "src")
if root_dir not in sys.path:
    sys.path.insert(0, root_dir)

from travel_booking.administration.domain import AdminPriceService  # noqa: E402
from travel_booking.administration.infrastructure import (  # noqa: E402
    InMemoryUserDirectory,
    sample_users,
)
from travel_booking.booking.application import TravelSessionService  # noqa: E402
from travel_booking.booking.domain import BookingService, BookingSession  # noqa: E402
from travel_booking.catalog.infrastructure import create_sample_catalog  # noqa: E402
from travel_booking.payments.domain import PaymentLedger  # noqa: E402
from travel_booking.payments.infrastructure import SimulatedPaymentGateway  # noqa: E402
from travel_booking.shared_kernel import (  # noqa: E402
    ConsoleLogger,
    InMemoryEventBus,
    Money,
)

CUSTOMER_ID = 101
ADMIN_ID = 1001


def inr(amount) -> Money:
    return Money(amount=Decimal(str(amount)), currency="INR")


@pytest.fixture
def logger() -> ConsoleLogger:
    """Логгер, который выводит только ошибки."""
    return ConsoleLogger(level="ERROR")


@pytest.fixture
def catalog():
    return create_sample_catalog("INR")


@pytest.fixture
def users() -> InMemoryUserDirectory:
    return InMemoryUserDirectory(sample_users())


@pytest.fixture
def session() -> BookingSession:
    return BookingSession(user_id=CUSTOMER_ID, currency="INR")


@pytest.fixture
def booking_service(catalog) -> BookingService:
    return BookingService(catalog)


@pytest.fixture
def gateway() -> SimulatedPaymentGateway:
    return SimulatedPaymentGateway()


@pytest.fixture
def ledger(gateway, logger) -> PaymentLedger:
    """Кошелек с начальным балансом 20000."""
    return PaymentLedger(balance=inr(20000), gateway=gateway, logger=logger)


@pytest.fixture
def event_bus(logger) -> InMemoryEventBus:
    return InMemoryEventBus(logger=logger)


@pytest.fixture
def admin_service(catalog, users, logger, event_bus) -> AdminPriceService:
    return AdminPriceService(
        catalog, is_admin=users.is_admin, logger=logger, event_bus=event_bus
    )


@pytest.fixture
def travel_service(
    session, booking_service, ledger, users, event_bus, logger
) -> TravelSessionService:
    """Сервис сессии с тестовым каталогом и кошельком."""
    return TravelSessionService(
        session=session,
        booking_service=booking_service,
        ledger=ledger,
        users=users,
        event_bus=event_bus,
        logger=logger,
    )
