"""Application service: Checkout.

Drives one payment flow through the payment sink and, when the charge
succeeds, turns the captured cart lines into an order and empties the
cart.  The order is placed and the cart cleared in the same synchronous
step, so no observer ever sees one without the other.

Flow states::

    IDLE -> REQUEST_BUILT -> PRESENTED -> AUTHORIZED -> PROCESSING -> COMPLETED
                                      \\-> COMPLETED (cancelled / presentation failed)

Every path ends back in IDLE with the captured lines discarded.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Iterable

from storefront.application.cart_store import CartStore
from storefront.application.orders_store import OrdersStore
from storefront.domain.exceptions import (
    CheckoutInProgressError,
    CheckoutNotActiveError,
    EmptyCartError,
    PaymentProcessorError,
    PaymentUnavailableError,
)
from storefront.domain.gateway.payment_sink import PaymentSink
from storefront.domain.model.cart import CartLine
from storefront.domain.model.payment import (
    Authorized,
    ChargeFailed,
    CheckoutCancelled,
    CheckoutFailed,
    CheckoutResult,
    CheckoutSucceeded,
    PaymentRequest,
    PaymentSummaryItem,
    PaymentToken,
    PresentationFailed,
    PresentationResult,
    UserCancelled,
)
from storefront.domain.service.payment_request_builder import PaymentRequestBuilder

logger = logging.getLogger(__name__)

DEFAULT_CHARGE_TIMEOUT = 30.0


class FlowState(Enum):
    IDLE = "IDLE"
    REQUEST_BUILT = "REQUEST_BUILT"
    PRESENTED = "PRESENTED"
    AUTHORIZED = "AUTHORIZED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"


_CANCELLABLE = (FlowState.REQUEST_BUILT, FlowState.PRESENTED)


class CheckoutCoordinator:

    def __init__(
        self,
        cart_store: CartStore,
        orders_store: OrdersStore,
        payment_sink: PaymentSink,
        request_builder: PaymentRequestBuilder | None = None,
        charge_timeout: float | None = DEFAULT_CHARGE_TIMEOUT,
    ) -> None:
        self._cart_store = cart_store
        self._orders_store = orders_store
        self._sink = payment_sink
        self._builder = request_builder or PaymentRequestBuilder()
        self._charge_timeout = charge_timeout

        self._busy = False
        self._state = FlowState.IDLE
        self._lines: tuple[CartLine, ...] = ()
        self._displayed: tuple[PaymentSummaryItem, ...] = ()
        self._cancel_requested: asyncio.Event | None = None

    # --- Queries --------------------------------------------------------------

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def is_processing(self) -> bool:
        """True from the moment a flow starts until it returns."""
        return self._busy

    @property
    def displayed_summary(self) -> tuple[PaymentSummaryItem, ...]:
        return self._displayed

    # --- Flow -----------------------------------------------------------------

    async def start_payment_from_cart(self) -> CheckoutResult:
        return await self.start_payment(self._cart_store.lines)

    async def start_payment(self, lines: Iterable[CartLine]) -> CheckoutResult:
        """Run one payment flow for *lines*.

        Raises ``CheckoutInProgressError``, ``EmptyCartError`` or
        ``PaymentUnavailableError`` before touching the payment sheet.
        Every other outcome is reported through the returned result.
        """
        if self._busy:
            raise CheckoutInProgressError()
        lines = tuple(lines)
        if not lines:
            raise EmptyCartError()

        self._busy = True
        try:
            if not await self._sink.is_available():
                raise PaymentUnavailableError()
            return await self._run_flow(lines)
        finally:
            self._reset()

    def select_shipping_method(self, identifier: str) -> tuple[PaymentSummaryItem, ...]:
        """Reprice the final total of the active flow for another shipping tier."""
        if not self._displayed:
            raise CheckoutNotActiveError()
        self._displayed = self._builder.reprice_for_shipping(
            self._displayed, self._lines, identifier
        )
        logger.debug("Shipping method %s selected; total now %s", identifier, self._displayed[-1].amount)
        return self._displayed

    def cancel(self) -> None:
        """Abandon the active flow if it has not been authorized yet.

        Safe to call any number of times; once the charge is in flight
        this does nothing.
        """
        if self._cancel_requested is None or self._state not in _CANCELLABLE:
            return
        self._cancel_requested.set()

    # --- Internal steps -------------------------------------------------------

    async def _run_flow(self, lines: tuple[CartLine, ...]) -> CheckoutResult:
        self._lines = lines
        self._cancel_requested = asyncio.Event()

        request = self._builder.build(lines)
        self._displayed = request.summary_items
        self._transition(FlowState.REQUEST_BUILT)

        self._transition(FlowState.PRESENTED)
        outcome = await self._present(request)

        if outcome is None or isinstance(outcome, UserCancelled):
            return self._complete(CheckoutCancelled())
        if isinstance(outcome, PresentationFailed):
            return self._complete(CheckoutFailed(outcome.error))
        if isinstance(outcome, Authorized):
            self._transition(FlowState.AUTHORIZED)
            return await self._process(outcome.token)
        raise TypeError(f"Unexpected presentation result {outcome!r}")

    async def _present(self, request: PaymentRequest) -> PresentationResult | None:
        """Wait for the payment sheet; None means cancel() won the race."""
        presentation = asyncio.ensure_future(
            self._sink.present_request(request, self.select_shipping_method)
        )
        cancelled = asyncio.ensure_future(self._cancel_requested.wait())
        try:
            await asyncio.wait({presentation, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = [f for f in (presentation, cancelled) if not f.done()]
            for future in pending:
                future.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if self._cancel_requested.is_set():
            return None
        try:
            return presentation.result()
        except PaymentProcessorError as exc:
            return PresentationFailed(str(exc))
        except Exception as exc:
            logger.exception("Payment sheet raised")
            return PresentationFailed(str(exc))

    async def _process(self, token: PaymentToken) -> CheckoutResult:
        self._transition(FlowState.PROCESSING)
        try:
            charge = await asyncio.wait_for(
                self._sink.process_charge(token), timeout=self._charge_timeout
            )
        except asyncio.TimeoutError:
            return self._complete(CheckoutFailed("Payment processor timed out"))
        except PaymentProcessorError as exc:
            return self._complete(CheckoutFailed(str(exc)))
        except Exception as exc:
            logger.exception("Payment processor raised")
            return self._complete(CheckoutFailed(str(exc)))

        if isinstance(charge, ChargeFailed):
            return self._complete(CheckoutFailed(charge.reason))

        # No await between these two: the cart->order transition is atomic.
        order = self._orders_store.place_order(self._lines)
        self._cart_store.clear()
        return self._complete(CheckoutSucceeded(order))

    def _complete(self, result: CheckoutResult) -> CheckoutResult:
        self._transition(FlowState.COMPLETED)
        logger.info("Checkout finished: %s", result)
        return result

    def _transition(self, state: FlowState) -> None:
        logger.debug("Checkout %s -> %s", self._state.value, state.value)
        self._state = state

    def _reset(self) -> None:
        self._state = FlowState.IDLE
        self._lines = ()
        self._displayed = ()
        self._cancel_requested = None
        self._busy = False
