"""
Интерфейсы (порты) для контекста платежей.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from ..shared_kernel import Money


class IPaymentGateway(Protocol):
    """Интерфейс для взаимодействия с платежным шлюзом."""

    def process_payment(
        self,
        amount: Money,
        payment_method: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]: ...
