"""
Тесты для контекста платежей.
"""
from decimal import Decimal

import pytest

from conftest import inr
from travel_booking.payments.domain import (
    LedgerEntryType,
    PaymentAuthorized,
    PaymentLedger,
    PaymentMethod,
    RefundIssued,
)
from travel_booking.shared_kernel import BusinessRuleValidationException, ErrorKind


class TestAuthorize:
    """Тесты списания."""

    def test_wallet_payment_debits_balance(self, ledger):
        """Тестирование оплаты из кошелька."""
        # Действие
        result = ledger.authorize(inr(10700), PaymentMethod.WALLET)

        # Проверка
        assert result.ok
        assert ledger.balance.amount == Decimal("9300")
        assert result.balance == ledger.balance

    def test_wallet_payment_with_insufficient_funds(self, gateway):
        """Тестирование оплаты при недостаточном балансе."""
        # Подготовка
        ledger = PaymentLedger(balance=inr(5000), gateway=gateway)

        # Действие
        result = ledger.authorize(inr(10700), PaymentMethod.WALLET)

        # Проверка
        assert not result.ok
        assert result.error.kind is ErrorKind.INSUFFICIENT_FUNDS
        assert ledger.balance.amount == Decimal("5000")
        assert ledger.entries == []

    def test_wallet_payment_of_exact_balance(self, gateway):
        """Тестирование оплаты ровно на сумму баланса."""
        # Подготовка
        ledger = PaymentLedger(balance=inr(700), gateway=gateway)

        # Действие
        result = ledger.authorize(inr(700), PaymentMethod.WALLET)

        # Проверка
        assert result.ok
        assert ledger.balance.amount == Decimal("0")

    def test_external_payment_does_not_touch_wallet(self, ledger, gateway):
        """Тестирование внешней оплаты через шлюз."""
        # Действие
        result = ledger.authorize(inr(50000), PaymentMethod.EXTERNAL)

        # Проверка
        assert result.ok
        assert ledger.balance.amount == Decimal("20000")
        assert result.entry.transaction_id in gateway.processed_payments

    def test_zero_amount_is_rejected(self, ledger):
        """Тестирование запрета нулевой оплаты."""
        # Действие и проверка
        with pytest.raises(BusinessRuleValidationException):
            ledger.authorize(inr(0), PaymentMethod.WALLET)

    def test_method_may_be_given_as_string(self, ledger):
        """Тестирование способа оплаты, переданного строкой."""
        # Действие
        result = ledger.authorize(inr(100), "wallet")

        # Проверка
        assert result.ok
        assert ledger.balance.amount == Decimal("19900")


class TestRefund:
    """Тесты возврата."""

    def test_refund_credits_wallet(self, gateway):
        """Тестирование зачисления возврата в кошелек."""
        # Подготовка
        ledger = PaymentLedger(balance=inr(9300), gateway=gateway)

        # Действие
        result = ledger.refund(inr(10700))

        # Проверка
        assert result.ok
        assert ledger.balance.amount == Decimal("20000")

    def test_refund_goes_to_wallet_after_external_payment(self, ledger):
        """Тестирование возврата в кошелек после внешней оплаты."""
        # Подготовка
        ledger.authorize(inr(700), PaymentMethod.EXTERNAL)

        # Действие
        ledger.refund(inr(700))

        # Проверка
        assert ledger.balance.amount == Decimal("20700")

    def test_zero_refund_is_allowed(self, ledger):
        """Тестирование нулевого возврата."""
        # Действие
        result = ledger.refund(inr(0))

        # Проверка
        assert result.ok
        assert ledger.balance.amount == Decimal("20000")


class TestJournal:
    """Тесты журнала операций и событий."""

    def test_entries_track_balance(self, ledger):
        """Тестирование баланса в записях журнала."""
        # Подготовка
        ledger.authorize(inr(10700), PaymentMethod.WALLET, reference="101")
        ledger.refund(inr(10700), reference="101")

        # Действие
        entries = ledger.entries

        # Проверка
        assert [e.type for e in entries] == [
            LedgerEntryType.PAYMENT,
            LedgerEntryType.REFUND,
        ]
        assert entries[0].balance_after.amount == Decimal("9300")
        assert entries[1].balance_after.amount == Decimal("20000")
        assert entries[0].reference == "101"

    def test_events_are_pulled_once(self, ledger):
        """Тестирование однократного извлечения событий."""
        # Подготовка
        ledger.authorize(inr(100), PaymentMethod.WALLET)
        ledger.refund(inr(100))

        # Действие
        events = ledger.pull_domain_events()

        # Проверка
        assert [type(e) for e in events] == [PaymentAuthorized, RefundIssued]
        assert ledger.pull_domain_events() == []
