"""
Custom exceptions for PrivateLink audit automation.
"""

from enum import Enum
from typing import Optional


class FailureKind(Enum):
    """Failure categories reported for a resource validation."""

    NOT_FOUND = "NotFound"
    AMBIGUOUS = "Ambiguous"
    UPSTREAM = "Upstream"


class AuditError(Exception):
    """Base class for all audit errors."""


class TransientError(AuditError):
    """
    Error that might be resolved by retrying.
    Examples: Network timeouts, API throttling.
    """


class FatalError(AuditError):
    """
    Error that cannot be resolved by retrying.
    Examples: Invalid configuration, missing permissions, duplicate resources.
    """


class ConfigurationError(FatalError):
    """Invalid configuration or arguments."""


class ValidationError(ConfigurationError):
    """Invalid input value."""


class SecurityValidationError(ValidationError):
    """Input rejected for security reasons (e.g. path traversal)."""


class ResourceValidationError(FatalError):
    """A cloud resource is missing or duplicated."""

    kind: FailureKind

    def __init__(self, message: str, resource: Optional[str] = None) -> None:
        super().__init__(message)
        self.resource = resource


class ResourceNotFoundError(ResourceValidationError):
    """No resource matched the lookup."""

    kind = FailureKind.NOT_FOUND


class AmbiguousResourceError(ResourceValidationError):
    """More than one resource matched a lookup that expects exactly one."""

    kind = FailureKind.AMBIGUOUS


class UpstreamError(TransientError):
    """The cloud API call itself failed.

    The original exception is kept on ``cause`` (and ``__cause__`` when raised
    with ``from``). ``retryable`` is False for auth and malformed requests.
    """

    kind = FailureKind.UPSTREAM

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.retryable = retryable
