"""
Tests for the exception module hierarchy and behavior.
"""

import pytest

from lib.exceptions import (
    AmbiguousResourceError,
    AuditError,
    ConfigurationError,
    FailureKind,
    FatalError,
    ResourceNotFoundError,
    ResourceValidationError,
    SecurityValidationError,
    TransientError,
    UpstreamError,
    ValidationError,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test the exception class inheritance chain."""

    def test_audit_error_is_base_exception(self):
        assert issubclass(AuditError, Exception)

    @pytest.mark.parametrize("exc_cls", [TransientError, FatalError])
    def test_transient_and_fatal_extend_audit_error(self, exc_cls):
        assert issubclass(exc_cls, AuditError)

    def test_configuration_chain(self):
        assert issubclass(SecurityValidationError, ValidationError)
        assert issubclass(ValidationError, ConfigurationError)
        assert issubclass(ConfigurationError, FatalError)

    @pytest.mark.parametrize("exc_cls", [ResourceNotFoundError, AmbiguousResourceError])
    def test_resource_errors_are_fatal(self, exc_cls):
        """Missing or duplicated resources are not fixed by retrying."""
        assert issubclass(exc_cls, ResourceValidationError)
        assert issubclass(exc_cls, FatalError)
        assert not issubclass(exc_cls, TransientError)

    def test_upstream_error_is_transient(self):
        assert issubclass(UpstreamError, TransientError)
        assert not issubclass(UpstreamError, FatalError)


@pytest.mark.unit
class TestFailureKinds:
    """Each failure class carries its kind so callers can branch without string matching."""

    @pytest.mark.parametrize(
        "exc,kind",
        [
            (ResourceNotFoundError("missing"), FailureKind.NOT_FOUND),
            (AmbiguousResourceError("duplicate"), FailureKind.AMBIGUOUS),
            (UpstreamError("throttled"), FailureKind.UPSTREAM),
        ],
    )
    def test_kind(self, exc, kind):
        assert exc.kind is kind

    def test_kind_values(self):
        assert [k.value for k in FailureKind] == ["NotFound", "Ambiguous", "Upstream"]


@pytest.mark.unit
class TestExceptionAttributes:
    def test_resource_error_message_and_resource(self):
        exc = ResourceNotFoundError("no VPC Endpoint Services found", resource="VPC Endpoint Service")
        assert str(exc) == "no VPC Endpoint Services found"
        assert exc.resource == "VPC Endpoint Service"

    def test_resource_defaults_to_none(self):
        assert AmbiguousResourceError("x").resource is None

    def test_upstream_error_keeps_cause(self):
        cause = ConnectionError("reset")
        exc = UpstreamError("EC2 call failed", cause=cause, retryable=False)
        assert exc.cause is cause
        assert exc.retryable is False
        assert str(exc) == "EC2 call failed"

    def test_upstream_error_retryable_by_default(self):
        assert UpstreamError("x").retryable is True

    def test_upstream_not_caught_as_fatal(self):
        with pytest.raises(UpstreamError):
            try:
                raise UpstreamError("network error")
            except FatalError:
                pytest.fail("UpstreamError should not be caught as FatalError")
