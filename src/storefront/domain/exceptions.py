"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CheckoutError(DomainException):
    """A checkout precondition failed before any payment interaction began."""


class EmptyCartError(CheckoutError):

    def __init__(self) -> None:
        super().__init__("Your cart is empty.")


class PaymentUnavailableError(CheckoutError):

    def __init__(self) -> None:
        super().__init__("Payments are not available on this device.")


class CheckoutInProgressError(CheckoutError):

    def __init__(self) -> None:
        super().__init__("A payment is already in progress.")


class CheckoutNotActiveError(CheckoutError):

    def __init__(self) -> None:
        super().__init__("No payment is in progress.")


class PaymentProcessorError(DomainException):
    """The payment processor could not complete a charge."""
