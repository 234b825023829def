"""
Инфраструктурный слой контекста платежей.
"""

from typing import Any, Dict, Optional
from uuid import uuid4

from ..shared_kernel import Money, now
from .interfaces import IPaymentGateway


class SimulatedPaymentGateway(IPaymentGateway):
    """Заглушка платежного шлюза: любой платеж проходит успешно."""

    def __init__(self) -> None:
        self.processed_payments: Dict[str, Dict[str, Any]] = {}

    def process_payment(
        self,
        amount: Money,
        payment_method: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Обрабатывает платеж через внешний платежный шлюз."""
        transaction_id = f"TXN-{uuid4().hex[:8].upper()}"

        result = {
            "transaction_id": transaction_id,
            "status": "completed",
            "amount": amount.amount,
            "currency": amount.currency,
            "payment_method": payment_method,
            "processed_at": now().isoformat(),
            "metadata": metadata or {},
        }

        self.processed_payments[transaction_id] = result
        return result
