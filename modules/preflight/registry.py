"""Registry of PrivateLink resource validators."""

from typing import Callable, Iterable, List, Optional

from lib.cluster_context import ClusterContext
from lib.ec2_client import EndpointQueryClient
from lib.exceptions import ConfigurationError

from .base_validator import ResourceValidator
from .endpoint_validators import VpcEndpointServiceValidator

ValidatorFactory = Callable[[ClusterContext, EndpointQueryClient], ResourceValidator]

VALIDATOR_FACTORIES: List[ValidatorFactory] = [
    lambda ctx, ec2: VpcEndpointServiceValidator(ctx.infra_name, ctx.private_link, ec2),
]


def build_validators(
    context: ClusterContext,
    ec2_client: EndpointQueryClient,
    checks: Optional[Iterable[str]] = None,
) -> List[ResourceValidator]:
    """
    Construct one validator per resource kind for a cluster.

    Args:
        context: Cluster under audit
        ec2_client: Shared EC2 query client
        checks: Optional filter labels; only validators whose filter_value()
                matches one of them (case-insensitive) are returned

    Raises:
        ConfigurationError: If a requested check label matches no validator
    """
    validators = [factory(context, ec2_client) for factory in VALIDATOR_FACTORIES]
    if not checks:
        return validators

    wanted = {c.strip().lower() for c in checks}
    known = {v.filter_value().lower() for v in validators}
    unknown = sorted(wanted - known)
    if unknown:
        available = ", ".join(sorted(v.filter_value() for v in validators))
        raise ConfigurationError(f"Unknown check(s): {', '.join(unknown)}. Available: {available}")

    return [v for v in validators if v.filter_value().lower() in wanted]
