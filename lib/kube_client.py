"""
Kubernetes client wrapper for reading Hive cluster metadata.

The audit only reads from the hub cluster: a ClusterDeployment carries the
infrastructure name, region and PrivateLink flag of the cluster under test.
"""

import logging
from typing import Dict, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from urllib3.exceptions import HTTPError

from lib.constants import (
    CLUSTER_DEPLOYMENT_PLURAL,
    HIVE_API_GROUP,
    HIVE_API_VERSION,
    LOGGER_NAME,
)
from lib.validation import InputValidator

logger = logging.getLogger(LOGGER_NAME)


def is_retryable_error(exception: BaseException) -> bool:
    """Check if exception is retryable."""
    if isinstance(exception, ApiException):
        # Retry on server errors (5xx) and too many requests (429)
        return 500 <= exception.status < 600 or exception.status == 429
    if isinstance(exception, HTTPError):
        return True
    return False


def _should_retry(exception: BaseException) -> bool:
    if not isinstance(exception, Exception):
        return False
    return is_retryable_error(exception)


# Standard retry decorator for API calls
retry_api_call = retry(
    retry=retry_if_exception(_should_retry),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    stop=stop_after_attempt(5),
    before_sleep=before_sleep_log(logger, logging.DEBUG),
    reraise=True,
)


class KubeClient:
    """Read-only Kubernetes API client for the Hive hub."""

    def __init__(
        self,
        context: Optional[str] = None,
        request_timeout: int = 30,
    ) -> None:
        """
        Initialize Kubernetes client for specific context.

        Args:
            context: Kubernetes context name
            request_timeout: API request timeout in seconds
        """
        self.context = context

        config.load_kube_config(context=context)

        # Per-instance configuration so other clients are unaffected
        configuration = client.Configuration.get_default_copy()
        configuration.retries = 3

        api_client = client.ApiClient(configuration)
        self.custom_api = client.CustomObjectsApi(api_client)
        self.custom_api.api_client.configuration.timeout = request_timeout

        logger.info(
            "Initialized Kubernetes client for context: %s (timeout: %ss)",
            context or "default",
            request_timeout,
        )

    @retry_api_call
    def get_custom_resource(
        self,
        group: str,
        version: str,
        plural: str,
        name: str,
        namespace: Optional[str] = None,
    ) -> Optional[Dict]:
        """
        Get a custom resource.

        Args:
            group: API group (e.g., 'hive.openshift.io')
            version: API version (e.g., 'v1')
            plural: Resource plural (e.g., 'clusterdeployments')
            name: Resource name
            namespace: Namespace (None for cluster-scoped)

        Returns:
            Resource dict or None if not found

        Raises:
            ValidationError: If resource name or namespace is invalid
        """
        InputValidator.validate_kubernetes_name(name, "custom resource")
        if namespace:
            InputValidator.validate_kubernetes_namespace(namespace)

        try:
            if namespace:
                return self.custom_api.get_namespaced_custom_object(
                    group=group,
                    version=version,
                    namespace=namespace,
                    plural=plural,
                    name=name,
                )
            return self.custom_api.get_cluster_custom_object(group=group, version=version, plural=plural, name=name)
        except ApiException as e:
            if e.status == 404:
                return None
            raise

    def get_cluster_deployment(self, namespace: str, name: str) -> Optional[Dict]:
        """Get a Hive ClusterDeployment, or None if it does not exist."""
        return self.get_custom_resource(
            group=HIVE_API_GROUP,
            version=HIVE_API_VERSION,
            plural=CLUSTER_DEPLOYMENT_PLURAL,
            name=name,
            namespace=namespace,
        )
