"""Validator contract and shared helpers for PrivateLink resource checks."""

from enum import Enum
from typing import Callable, Protocol, Sequence, TypeVar, runtime_checkable

from lib.exceptions import AmbiguousResourceError, ResourceNotFoundError, UpstreamError

T = TypeVar("T")


class ValidationOutcome(Enum):
    """Successful validation results."""

    PASSED = "passed"
    NOT_APPLICABLE = "not_applicable"


@runtime_checkable
class ResourceValidator(Protocol):
    """A single idempotent check of one cloud resource.

    validate() returns a ValidationOutcome on success and raises a
    ResourceValidationError or UpstreamError on failure.
    """

    def validate(self) -> ValidationOutcome:
        ...

    def documentation(self) -> str:
        ...

    def filter_value(self) -> str:
        ...


def call_upstream(description: str, query: Callable[..., T], *args, **kwargs) -> T:
    """Run a cloud query, surfacing any failure as UpstreamError.

    UpstreamError raised by the client passes through untouched; anything else
    is wrapped with the original exception kept as the cause.
    """
    try:
        return query(*args, **kwargs)
    except UpstreamError:
        raise
    except Exception as exc:
        raise UpstreamError(f"{description} failed: {exc}", cause=exc) from exc


def expect_exactly_one(
    records: Sequence[T],
    resource: str,
    not_found_message: str,
    ambiguous_message: str,
) -> T:
    """
    Assert exactly-one cardinality of a lookup.

    Args:
        records: Lookup results
        resource: Resource kind, kept on the raised error
        not_found_message: Message when nothing matched
        ambiguous_message: Message when more than one record matched

    Raises:
        ResourceNotFoundError: No records
        AmbiguousResourceError: Two or more records
    """
    if not records:
        raise ResourceNotFoundError(not_found_message, resource=resource)
    if len(records) > 1:
        raise AmbiguousResourceError(ambiguous_message, resource=resource)
    return records[0]
