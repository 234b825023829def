"""
Доменная модель платежей.

Кошелек с балансом, списание по выбранному способу оплаты
и зачисление возвратов. О бронированиях здесь ничего не известно.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..shared_kernel import (
    BusinessRuleValidationException,
    DomainError,
    DomainEvent,
    EntityId,
    ErrorCode,
    ErrorKind,
    ILogger,
    Money,
    OperationResult,
    generate_id,
    now,
)
from .interfaces import IPaymentGateway


class PaymentMethod(str, Enum):
    """Способы оплаты."""

    WALLET = "wallet"
    EXTERNAL = "external"  # UPI/карта через платежный шлюз


class LedgerEntryType(str, Enum):
    """Типы операций по кошельку."""

    PAYMENT = "payment"
    REFUND = "refund"


class LedgerEntry(BaseModel):
    """Запись журнала операций."""

    model_config = ConfigDict(frozen=True)

    id: EntityId = Field(default_factory=generate_id)
    type: LedgerEntryType
    method: PaymentMethod
    amount: Money
    balance_after: Money
    reference: Optional[str] = None
    transaction_id: Optional[str] = None
    created_at: datetime = Field(default_factory=now)


class PaymentResult(OperationResult):
    """Результат списания или возврата."""

    balance: Money
    entry: Optional[LedgerEntry] = None


class PaymentAuthorized(DomainEvent):
    """Событие успешной оплаты."""

    event_type: str = "payment_authorized"
    amount: Money
    method: PaymentMethod
    reference: Optional[str] = None


class RefundIssued(DomainEvent):
    """Событие зачисления возврата в кошелек."""

    event_type: str = "refund_issued"
    amount: Money
    reference: Optional[str] = None


class PaymentLedger:
    """Кошелек пользователя и журнал операций."""

    def __init__(
        self,
        balance: Money,
        gateway: IPaymentGateway,
        logger: Optional[ILogger] = None,
    ):
        self._balance = balance
        self._gateway = gateway
        self._logger = logger
        self._entries: List[LedgerEntry] = []
        self._domain_events: List[DomainEvent] = []

    @property
    def balance(self) -> Money:
        return self._balance

    @property
    def entries(self) -> List[LedgerEntry]:
        return list(self._entries)

    def pull_domain_events(self) -> List[DomainEvent]:
        events = list(self._domain_events)
        self._domain_events.clear()
        return events

    def authorize(
        self, amount: Money, method: PaymentMethod, reference: Optional[str] = None
    ) -> PaymentResult:
        """Списывает сумму выбранным способом."""
        if amount.is_zero():
            raise BusinessRuleValidationException("Сумма оплаты должна быть больше нуля")

        method = PaymentMethod(method)
        if method is PaymentMethod.WALLET:
            return self._pay_from_wallet(amount, reference)
        return self._pay_external(amount, reference)

    def refund(self, amount: Money, reference: Optional[str] = None) -> PaymentResult:
        """Зачисляет возврат в кошелек независимо от способа оплаты."""
        self._balance = self._balance + amount
        entry = self._record(LedgerEntryType.REFUND, PaymentMethod.WALLET, amount, reference)
        self._domain_events.append(RefundIssued(amount=amount, reference=reference))
        self._log_info(
            "Refund processed. Wallet credited",
            amount=str(amount),
            balance=str(self._balance),
        )
        return PaymentResult(balance=self._balance, entry=entry)

    def _pay_from_wallet(self, amount: Money, reference: Optional[str]) -> PaymentResult:
        if self._balance < amount:
            if self._logger is not None:
                self._logger.warning(
                    "Insufficient wallet balance.",
                    amount=str(amount),
                    balance=str(self._balance),
                )
            return PaymentResult(
                balance=self._balance,
                error=DomainError(
                    kind=ErrorKind.INSUFFICIENT_FUNDS,
                    code=ErrorCode.INSUFFICIENT_FUNDS,
                    message="Insufficient wallet balance.",
                ),
            )
        self._balance = self._balance - amount
        entry = self._record(LedgerEntryType.PAYMENT, PaymentMethod.WALLET, amount, reference)
        self._domain_events.append(
            PaymentAuthorized(amount=amount, method=PaymentMethod.WALLET, reference=reference)
        )
        self._log_info(
            "Payment successful via wallet", amount=str(amount), balance=str(self._balance)
        )
        return PaymentResult(balance=self._balance, entry=entry)

    def _pay_external(self, amount: Money, reference: Optional[str]) -> PaymentResult:
        response = self._gateway.process_payment(
            amount=amount,
            payment_method=PaymentMethod.EXTERNAL.value,
            metadata={"reference": reference},
        )
        entry = self._record(
            LedgerEntryType.PAYMENT,
            PaymentMethod.EXTERNAL,
            amount,
            reference,
            transaction_id=response.get("transaction_id"),
        )
        self._domain_events.append(
            PaymentAuthorized(amount=amount, method=PaymentMethod.EXTERNAL, reference=reference)
        )
        self._log_info(
            "Payment successful via external method",
            amount=str(amount),
            transaction_id=entry.transaction_id,
        )
        return PaymentResult(balance=self._balance, entry=entry)

    def _record(
        self,
        entry_type: LedgerEntryType,
        method: PaymentMethod,
        amount: Money,
        reference: Optional[str],
        transaction_id: Optional[str] = None,
    ) -> LedgerEntry:
        entry = LedgerEntry(
            type=entry_type,
            method=method,
            amount=amount,
            balance_after=self._balance,
            reference=reference,
            transaction_id=transaction_id,
        )
        self._entries.append(entry)
        return entry

    def _log_info(self, message: str, **kwargs) -> None:
        if self._logger is not None:
            self._logger.info(message, **kwargs)
