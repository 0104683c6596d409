class StripeNotConfigured(Exception):
    """Raised when the Stripe secret key is missing from the settings."""

    def __init__(self, message="stripe_not_configured"):
        super().__init__(message)


class CheckoutValidationError(ValueError):
    def __init__(self, field, message):
        self.field = field
        self.message = message
        super().__init__(message)
