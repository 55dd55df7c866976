"""Exceptions raised by fitbit_toolkit."""


class FitbitError(Exception):
    """Base exception for all fitbit_toolkit errors."""


class MalformedInput(FitbitError, ValueError):
    """Raised when a request cannot be built from the given address or payload."""


class TransportError(FitbitError):
    """Raised when a request could not be sent or no token could be obtained."""


class RequestFailed(FitbitError):
    """Raised for responses with a status code outside 200-299.

    The raw response is kept so callers can inspect headers and body.
    """

    def __init__(self, response):
        self.response = response
        self.status_code = response.status_code
        super().__init__(
            f"http request failed: {response.url} returned {response.status_code}"
        )


class DecodeError(FitbitError, ValueError):
    """Raised when a response body does not decode into the expected record."""
