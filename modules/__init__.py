"""
Module package initialization.
"""

from .audit import PrivateLinkAudit
from .preflight import (
    ResourceValidator,
    ValidationOutcome,
    ValidationReporter,
    VpcEndpointServiceValidator,
    build_validators,
)

__all__ = [
    "PrivateLinkAudit",
    "ResourceValidator",
    "ValidationOutcome",
    "ValidationReporter",
    "VpcEndpointServiceValidator",
    "build_validators",
]
