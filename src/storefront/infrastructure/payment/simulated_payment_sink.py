"""Simulated payment sink for the demo storefront.

Presentation is delegated to a presenter (the console sheet in the CLI);
charging waits for a fixed delay and then approves or declines, the way
the demo processor behaves until a real processor is integrated.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable
from uuid import uuid4

from storefront.domain.gateway.payment_sink import PaymentSink, ShippingMethodHandler
from storefront.domain.model.payment import (
    Authorized,
    ChargeFailed,
    ChargeResult,
    ChargeSucceeded,
    PaymentRequest,
    PaymentToken,
    PresentationResult,
)

logger = logging.getLogger(__name__)

Presenter = Callable[[PaymentRequest, ShippingMethodHandler], Awaitable[PresentationResult]]

DEFAULT_CHARGE_DELAY = 1.5


def new_token() -> PaymentToken:
    return PaymentToken(data=uuid4().hex, transaction_id=uuid4().hex[:12])


class SimulatedPaymentSink(PaymentSink):

    def __init__(
        self,
        presenter: Presenter,
        available: bool = True,
        charge_delay: float = DEFAULT_CHARGE_DELAY,
        approve: bool = True,
    ) -> None:
        self._presenter = presenter
        self._available = available
        self._charge_delay = charge_delay
        self._approve = approve

    async def is_available(self) -> bool:
        return self._available

    async def present_request(
        self,
        request: PaymentRequest,
        on_shipping_method_selected: ShippingMethodHandler,
    ) -> PresentationResult:
        return await self._presenter(request, on_shipping_method_selected)

    async def process_charge(self, token: PaymentToken) -> ChargeResult:
        logger.debug("Charging token %s", token.transaction_id)
        await asyncio.sleep(self._charge_delay)
        if not self._approve:
            return ChargeFailed("Transaction could not be completed")
        return ChargeSucceeded()


async def auto_authorize(
    request: PaymentRequest,
    on_shipping_method_selected: ShippingMethodHandler,
) -> PresentationResult:
    """Presenter that approves every request without user interaction."""
    return Authorized(new_token())
