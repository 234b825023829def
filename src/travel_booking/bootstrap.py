from typing import Any, Dict, Optional

from .administration.domain import AdminPriceService
from .administration.infrastructure import InMemoryUserDirectory, sample_users
from .booking.application import TravelSessionService
from .booking.domain import BookingService, BookingSession
from .catalog.application import CatalogApplicationService
from .catalog.infrastructure import InMemoryCatalog, create_sample_catalog
from .config import TravelSettings, get_settings
from .payments.domain import PaymentLedger
from .payments.infrastructure import SimulatedPaymentGateway
from .shared_kernel import ConsoleLogger, InMemoryEventBus, Money, UserId


def bootstrap_app(
    user_id: UserId, settings: Optional[TravelSettings] = None
) -> Dict[str, Any]:
    """Создает и настраивает все компоненты одной сессии."""
    settings = settings or get_settings()
    logger = ConsoleLogger(level=settings.log_level)
    event_bus = InMemoryEventBus(logger=logger)

    # 1. Каталог и пользователи
    if settings.seed_catalog:
        catalog = create_sample_catalog(settings.currency)
    else:
        catalog = InMemoryCatalog()
    users = InMemoryUserDirectory(sample_users())

    # 2. Кошелек с начальным балансом
    ledger = PaymentLedger(
        balance=Money(amount=settings.initial_wallet_balance, currency=settings.currency),
        gateway=SimulatedPaymentGateway(),
        logger=logger,
    )

    # 3. Сессия бронирования и сервисы
    session = BookingSession(
        booking_number=settings.booking_number,
        user_id=user_id,
        currency=settings.currency,
    )
    session.attach_logger(logger)
    travel_service = TravelSessionService(
        session=session,
        booking_service=BookingService(catalog),
        ledger=ledger,
        users=users,
        event_bus=event_bus,
        logger=logger,
    )
    # Проверка привилегии передается в ядро извне
    admin_service = AdminPriceService(
        catalog, is_admin=users.is_admin, logger=logger, event_bus=event_bus
    )

    return {
        "settings": settings,
        "logger": logger,
        "event_bus": event_bus,
        "catalog": catalog,
        "users": users,
        "ledger": ledger,
        "session": session,
        "travel_service": travel_service,
        "catalog_service": CatalogApplicationService(catalog),
        "admin_service": admin_service,
    }
