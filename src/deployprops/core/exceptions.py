"""
Custom exception classes for deployprops.

Errors raised here are contract violations by callers of the props chain or
configuration problems; none of them are retried.
"""


class DeployPropsException(Exception):
    """Base exception class for all deployprops exceptions."""

    pass


class EmptyChainError(DeployPropsException, LookupError):
    """
    Raised when a caller advances past the end of a props chain.

    Reading ``next`` on the terminal marker is always a programming error:
    traversals must stop when they reach ``EMPTY_PROPS``.

    Example:
        >>> EMPTY_PROPS.next
        Traceback (most recent call last):
        ...
        EmptyChainError: EmptyProps has no next
    """

    pass


class PropsConfigError(DeployPropsException):
    """Raised when a props chain cannot be expressed as configuration data."""

    def __init__(self, reason: str, details: dict = None):
        self.reason = reason
        self.details = details or {}
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)
