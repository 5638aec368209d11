"""Errors raised by the storefront client."""


class RemoteUnavailable(Exception):
    """A remote call failed: timeout, connection error or a non-2xx response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CheckoutValidationError(Exception):
    """The checkout form is incomplete; nothing was sent."""

    def __init__(self, messages: dict[str, str]):
        super().__init__("; ".join(messages.values()))
        self.messages = messages


class CheckoutSubmissionError(Exception):
    """The order service rejected or never answered the submission.

    The cart is left untouched and the user may retry.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpired(RemoteUnavailable):
    """The gateway refused the bearer token (401/403); the session must be dropped."""
