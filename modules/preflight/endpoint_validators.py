"""PrivateLink VPC Endpoint Service validation."""

import logging

from lib.constants import (
    FILTER_SERVICE_ID,
    FILTER_VPC_ENDPOINT_STATE,
    LOGGER_NAME,
    PRIVATE_LINK_ACCESS_TAG,
    TAG_NAME,
    VPC_ENDPOINT_SERVICE_NAME_SUFFIX,
    VPC_ENDPOINT_STATE_AVAILABLE,
)
from lib.ec2_client import EndpointFilter, EndpointQueryClient

from .base_validator import ValidationOutcome, call_upstream, expect_exactly_one

logger = logging.getLogger(LOGGER_NAME)

VPCE_SERVICE_DESCRIPTION = (
    "A PrivateLink ROSA cluster has a VPC Endpoint Service which allows Hive to connect"
    " to the cluster over AWS' internal network (PrivateLink), used for things like backplane and SyncSets."
)


class VpcEndpointServiceValidator:
    """Verifies the cluster's VPC Endpoint Service has exactly one accepted connection."""

    def __init__(self, infra_name: str, private_link: bool, ec2_client: EndpointQueryClient) -> None:
        """
        Args:
            infra_name: Cluster infrastructure name, the prefix of its AWS resources
            private_link: Whether the cluster uses PrivateLink at all
            ec2_client: Shared EC2 query client
        """
        self.infra_name = infra_name
        self.private_link = private_link
        self.ec2_client = ec2_client

    @property
    def service_name_tag(self) -> str:
        return f"{self.infra_name}{VPC_ENDPOINT_SERVICE_NAME_SUFFIX}"

    def validate(self) -> ValidationOutcome:
        # non-PrivateLink clusters do not have a VPC Endpoint Service
        if not self.private_link:
            return ValidationOutcome.NOT_APPLICABLE

        logger.info("Searching for VPC Endpoint Service %s", self.service_name_tag)
        services = call_upstream(
            "Describing VPC Endpoint Services",
            self.ec2_client.describe_endpoint_services,
            [
                EndpointFilter(f"tag:{TAG_NAME}", [self.service_name_tag]),
                EndpointFilter(f"tag:{PRIVATE_LINK_ACCESS_TAG}", [self.infra_name]),
            ],
        )
        service = expect_exactly_one(
            services,
            self.filter_value(),
            "no VPC Endpoint Services found for PrivateLink cluster",
            "multiple VPC Endpoint Services found for PrivateLink cluster",
        )
        service_id = service.service_id
        logger.info("Found VPC Endpoint Service: %s", service_id)

        connections = call_upstream(
            f"Describing VPC Endpoint connections for {service_id}",
            self.ec2_client.describe_endpoint_connections,
            [
                EndpointFilter(FILTER_SERVICE_ID, [service_id]),
                EndpointFilter(FILTER_VPC_ENDPOINT_STATE, [VPC_ENDPOINT_STATE_AVAILABLE]),
            ],
        )
        connection = expect_exactly_one(
            connections,
            self.filter_value(),
            f"no available VPC Endpoint connections found for {service_id}",
            f"multiple available VPC Endpoint connections found for {service_id}",
        )
        logger.info(
            "Found accepted VPC Endpoint connection for %s (endpoint: %s)",
            service_id,
            connection.vpc_endpoint_id or "unknown",
        )
        return ValidationOutcome.PASSED

    def documentation(self) -> str:
        return VPCE_SERVICE_DESCRIPTION

    def filter_value(self) -> str:
        return "VPC Endpoint Service"
