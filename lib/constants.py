"""Centralized constants for PrivateLink audit."""

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPT = 130

# AWS API request timeouts (in seconds)
AWS_REQUEST_TIMEOUT = 30
AWS_CONNECT_TIMEOUT = 10

# Parallel validator execution settings
AUDIT_MAX_WORKERS = 4

# Driver-level retries for retryable upstream failures (0 = no retry)
AUDIT_DEFAULT_RETRIES = 0
AUDIT_RETRY_MAX_WAIT = 10

# Hive ClusterDeployment
HIVE_API_GROUP = "hive.openshift.io"
HIVE_API_VERSION = "v1"
CLUSTER_DEPLOYMENT_PLURAL = "clusterdeployments"

# Tags Hive places on PrivateLink resources
TAG_NAME = "Name"
PRIVATE_LINK_ACCESS_TAG = "hive.openshift.io/private-link-access-for"
VPC_ENDPOINT_SERVICE_NAME_SUFFIX = "-vpc-endpoint-service"

# EC2 filter names
FILTER_SERVICE_ID = "service-id"
FILTER_VPC_ENDPOINT_STATE = "vpc-endpoint-state"

# VPC endpoint connection states
VPC_ENDPOINT_STATE_AVAILABLE = "available"

# EC2 error codes treated as throttling
THROTTLING_ERROR_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "RequestLimitExceeded",
        "TooManyRequestsException",
    }
)

# Logger name shared across modules
LOGGER_NAME = "privatelink_audit"
