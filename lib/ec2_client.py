"""
EC2 client wrapper for PrivateLink resources.

Only the two read-only queries the PrivateLink validators need are exposed.
Responses are paged through with NextToken and converted into small records,
and every boto3/botocore failure is re-raised as UpstreamError.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from lib.constants import (
    AWS_CONNECT_TIMEOUT,
    AWS_REQUEST_TIMEOUT,
    LOGGER_NAME,
    THROTTLING_ERROR_CODES,
)
from lib.exceptions import UpstreamError

logger = logging.getLogger(LOGGER_NAME)


@dataclass(frozen=True)
class EndpointFilter:
    """A single EC2 Describe* filter. Values are exact-match strings."""

    name: str
    values: Sequence[str]

    def to_api(self) -> Dict[str, Any]:
        return {"Name": self.name, "Values": list(self.values)}


@dataclass(frozen=True)
class EndpointServiceRecord:
    """A VPC Endpoint Service as returned by DescribeVpcEndpointServices."""

    service_id: str
    service_name: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, detail: Dict[str, Any]) -> "EndpointServiceRecord":
        tags = {t.get("Key", ""): t.get("Value", "") for t in detail.get("Tags") or []}
        return cls(
            service_id=detail.get("ServiceId", ""),
            service_name=detail.get("ServiceName"),
            tags=tags,
        )


@dataclass(frozen=True)
class EndpointConnectionRecord:
    """A VPC Endpoint connection to an endpoint service."""

    service_id: str
    state: str
    vpc_endpoint_id: Optional[str] = None
    owner: Optional[str] = None

    @classmethod
    def from_api(cls, connection: Dict[str, Any]) -> "EndpointConnectionRecord":
        return cls(
            service_id=connection.get("ServiceId", ""),
            state=connection.get("VpcEndpointState", ""),
            vpc_endpoint_id=connection.get("VpcEndpointId"),
            owner=connection.get("VpcEndpointOwner"),
        )


class EndpointQueryClient(Protocol):
    """The EC2 queries the PrivateLink validators depend on."""

    def describe_endpoint_services(self, filters: Sequence[EndpointFilter]) -> List[EndpointServiceRecord]:
        ...

    def describe_endpoint_connections(self, filters: Sequence[EndpointFilter]) -> List[EndpointConnectionRecord]:
        ...


def is_retryable_error(exception: BaseException) -> bool:
    """Check if a botocore exception is worth retrying."""
    if isinstance(exception, ClientError):
        error = exception.response.get("Error", {})
        status = exception.response.get("ResponseMetadata", {}).get("HTTPStatusCode") or 0
        return error.get("Code") in THROTTLING_ERROR_CODES or 500 <= status < 600
    if isinstance(exception, (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)):
        return True
    return False


def _describe_error(exception: BaseException) -> str:
    if isinstance(exception, ClientError):
        error = exception.response.get("Error", {})
        return f"{error.get('Code', 'Unknown')}: {error.get('Message', str(exception))}"
    return str(exception)


class Ec2Client:
    """Wrapper for the boto3 EC2 client with PrivateLink-specific queries.

    boto3 low-level clients are thread-safe, so one instance may be shared by
    validators running in parallel.
    """

    def __init__(
        self,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        request_timeout: int = AWS_REQUEST_TIMEOUT,
        client: Any = None,
    ) -> None:
        """
        Initialize an EC2 client for a region.

        Args:
            region: AWS region (falls back to the boto3 default chain)
            profile: AWS shared credentials profile
            request_timeout: Read timeout in seconds applied to every call
            client: Pre-built boto3 EC2 client (mainly for tests)
        """
        self.region = region
        self.profile = profile

        if client is None:
            # SDK retries are disabled; retry decisions belong to the caller.
            config = Config(
                connect_timeout=min(AWS_CONNECT_TIMEOUT, request_timeout),
                read_timeout=request_timeout,
                retries={"total_max_attempts": 1, "mode": "standard"},
            )
            session = boto3.session.Session(profile_name=profile, region_name=region)
            client = session.client("ec2", config=config)
            self.region = session.region_name

        self.ec2 = client

        logger.info(
            "Initialized EC2 client for region: %s (timeout: %ss)",
            self.region or "default",
            request_timeout,
        )

    def describe_endpoint_services(self, filters: Sequence[EndpointFilter]) -> List[EndpointServiceRecord]:
        """
        Describe VPC Endpoint Services matching all filters.

        Args:
            filters: EC2 filters, ANDed by the API

        Returns:
            List of EndpointServiceRecord

        Raises:
            UpstreamError: If the EC2 API call fails
        """
        details = self._paginate(
            "DescribeVpcEndpointServices",
            self.ec2.describe_vpc_endpoint_services,
            "ServiceDetails",
            filters,
        )
        return [EndpointServiceRecord.from_api(d) for d in details]

    def describe_endpoint_connections(self, filters: Sequence[EndpointFilter]) -> List[EndpointConnectionRecord]:
        """
        Describe VPC Endpoint connections matching all filters.

        Raises:
            UpstreamError: If the EC2 API call fails
        """
        connections = self._paginate(
            "DescribeVpcEndpointConnections",
            self.ec2.describe_vpc_endpoint_connections,
            "VpcEndpointConnections",
            filters,
        )
        return [EndpointConnectionRecord.from_api(c) for c in connections]

    def _paginate(
        self,
        operation: str,
        call: Callable[..., Dict[str, Any]],
        result_key: str,
        filters: Sequence[EndpointFilter],
    ) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        next_token: Optional[str] = None
        api_filters = [f.to_api() for f in filters]

        while True:
            kwargs: Dict[str, Any] = {"Filters": api_filters}
            if next_token:
                kwargs["NextToken"] = next_token

            logger.debug("EC2 %s: %s", operation, kwargs)
            try:
                result = call(**kwargs)
            except (ClientError, BotoCoreError) as e:
                retryable = is_retryable_error(e)
                logger.debug("EC2 %s failed (retryable=%s): %s", operation, retryable, e)
                raise UpstreamError(
                    f"EC2 {operation} failed: {_describe_error(e)}",
                    cause=e,
                    retryable=retryable,
                ) from e

            items.extend(result.get(result_key) or [])

            next_token = result.get("NextToken")
            if not next_token:
                break

        return items
