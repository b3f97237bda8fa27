"""Exceptions raised by harbormaster."""
from typing import Optional


class HarbormasterError(Exception):
    """Base exception for harbormaster errors."""
    pass


class ConfigError(HarbormasterError):
    """Exception raised for missing or invalid configuration."""
    pass


class TransportError(HarbormasterError):
    """Exception raised when a request never got an HTTP answer."""
    pass


class DecodeError(TransportError):
    """Exception raised when a response body is not the JSON we expected."""
    pass


class AuthError(HarbormasterError):
    """Exception raised when the provider rejects our credentials."""
    pass


class NotFoundError(HarbormasterError):
    """Exception raised when a requested object is not found."""
    pass


class ConflictError(HarbormasterError):
    """Exception raised for remote state we will not reconcile automatically."""
    pass


class PollTimeoutError(HarbormasterError, TimeoutError):
    """Exception raised when a bounded poll runs out of attempts."""
    pass


class UnexpectedStatusError(HarbormasterError):
    """Exception raised when a request did not get the expected status code."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
