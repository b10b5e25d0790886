"""Abstract payment sink: the device's payment sheet and its processor.

The checkout coordinator only talks to this interface, so it can be
driven by the console presenter, a real wallet bridge, or a test fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storefront.domain.model.payment import (
    ChargeResult,
    PaymentRequest,
    PaymentSummaryItem,
    PaymentToken,
    PresentationResult,
)

ShippingMethodHandler = Callable[[str], "tuple[PaymentSummaryItem, ...]"]


class PaymentSink(ABC):

    @abstractmethod
    async def is_available(self) -> bool:
        """Whether the device can make payments at all."""

    @abstractmethod
    async def present_request(
        self,
        request: PaymentRequest,
        on_shipping_method_selected: ShippingMethodHandler,
    ) -> PresentationResult:
        """Show the payment sheet and wait for the user.

        When the user picks a different shipping method the sink calls
        *on_shipping_method_selected* with its identifier and displays
        the summary items it returns.
        """

    @abstractmethod
    async def process_charge(self, token: PaymentToken) -> ChargeResult:
        """Send an authorized token to the processor.

        May raise ``PaymentProcessorError``.
        """
