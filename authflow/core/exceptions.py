"""Shared exceptions module."""

from typing import Optional

from pydantic import ValidationError


class AuthFlowException(Exception):
    """Base exception for authflow."""

    pass


class ConfigurationError(AuthFlowException):
    """Exception raised when provider or application configuration is invalid."""

    def __init__(self, message: Optional[str] = "Invalid configuration"):
        """Create a new ConfigurationError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class NotFoundException(AuthFlowException):
    """Exception raised when an object is not found."""

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


def unpack_validation_error(exc: ValidationError) -> dict:
    """Unpack a Pydantic validation error into a dictionary.

    Args:
    ----
        exc (ValidationError): The Pydantic validation error.

    Returns:
    -------
        dict: The dictionary representation of the validation error.

    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        message = error["msg"]
        error_messages.append({field: message})

    return {"errors": error_messages}


class TransportError(AuthFlowException):
    """Exception raised when the HTTP transport cannot complete a request.

    Covers timeouts, refused connections and TLS failures. Nothing was
    received from the provider, so the whole flow step may be retried.
    """

    retryable = True

    def __init__(self, message: Optional[str] = "HTTP transport failed", *, uri: str = ""):
        """Create a new TransportError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.
            uri (str, optional): The request URI that failed.

        """
        self.message = message
        self.uri = uri
        super().__init__(self.message)
