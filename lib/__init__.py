"""
Library package for PrivateLink audit automation.
"""

# Import version from lightweight module (avoids importing heavy deps at build time)
from ._version import __version__, __version_date__

from .cluster_context import ClusterContext
from .ec2_client import (
    Ec2Client,
    EndpointConnectionRecord,
    EndpointFilter,
    EndpointQueryClient,
    EndpointServiceRecord,
)
from .exceptions import (
    AmbiguousResourceError,
    AuditError,
    ConfigurationError,
    FailureKind,
    FatalError,
    ResourceNotFoundError,
    ResourceValidationError,
    TransientError,
    UpstreamError,
    ValidationError,
)
from .kube_client import KubeClient
from .utils import setup_logging

__all__ = [
    "__version__",
    "__version_date__",
    "ClusterContext",
    "Ec2Client",
    "EndpointConnectionRecord",
    "EndpointFilter",
    "EndpointQueryClient",
    "EndpointServiceRecord",
    "KubeClient",
    "AuditError",
    "TransientError",
    "FatalError",
    "ConfigurationError",
    "ValidationError",
    "FailureKind",
    "ResourceValidationError",
    "ResourceNotFoundError",
    "AmbiguousResourceError",
    "UpstreamError",
    "setup_logging",
]
