"""Modular PrivateLink resource validation."""

from .base_validator import ResourceValidator, ValidationOutcome
from .endpoint_validators import VpcEndpointServiceValidator
from .registry import build_validators
from .reporter import ValidationReporter

__all__ = [
    "ResourceValidator",
    "ValidationOutcome",
    "ValidationReporter",
    "VpcEndpointServiceValidator",
    "build_validators",
]
