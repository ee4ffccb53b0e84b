"""Custom exceptions for pyhomebridge."""


class HomebridgeException(Exception):
    """Base class for pyhomebridge exceptions."""


class RequestFailed(HomebridgeException):
    """Raised when the bridge answers with a non-success status."""

    def __init__(self, status_code: int, error_message: str = "") -> None:
        """Initialize the request error."""
        self.status_code = status_code
        self.error_message = error_message
        message = f"Request failed with status {status_code}"
        if error_message:
            message = f"{message}: {error_message}"
        super().__init__(message)


class DecodeError(HomebridgeException):
    """Raised when a response body does not have the expected shape."""


class TransportError(HomebridgeException):
    """Raised when the request never got a response (connection, DNS, timeout).

    The aiohttp or asyncio exception is not altered: it is chained unchanged as
    ``__cause__``.
    """


class SwitchDeletedError(HomebridgeException):
    """Raised when a switch handle is used after ``delete()``."""
