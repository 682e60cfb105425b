"""
Cluster context resolution for PrivateLink audits.

A ClusterContext is the shared input every validator is built from. It can be
given on the command line, read from a YAML file, or pulled from a Hive
ClusterDeployment on the hub that provisioned the cluster.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import yaml

from lib.constants import LOGGER_NAME
from lib.exceptions import ConfigurationError
from lib.kube_client import KubeClient
from lib.validation import InputValidator

logger = logging.getLogger(LOGGER_NAME)

CONFIG_KEYS = ("infra_name", "private_link", "region", "cluster_name", "aws_profile")


@dataclass(frozen=True)
class ClusterContext:
    """Identity and connectivity mode of the cluster under audit."""

    infra_name: str
    private_link: bool
    region: Optional[str] = None
    cluster_name: Optional[str] = None
    aws_profile: Optional[str] = None

    def validate(self) -> None:
        InputValidator.validate_infra_name(self.infra_name)
        if self.region:
            InputValidator.validate_aws_region(self.region)

    def with_overrides(self, **overrides: Any) -> "ClusterContext":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def _coerce_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes", "1"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no", "0"):
        return False
    raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")


def context_from_mapping(data: Dict[str, Any]) -> ClusterContext:
    """Build a ClusterContext from a plain mapping (e.g. parsed YAML)."""
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigurationError(f"Unknown configuration key(s): {', '.join(unknown)}")

    infra_name = data.get("infra_name")
    if not infra_name:
        raise ConfigurationError("'infra_name' is required")

    return ClusterContext(
        infra_name=str(infra_name),
        private_link=_coerce_bool(data.get("private_link", False), "private_link"),
        region=data.get("region"),
        cluster_name=data.get("cluster_name"),
        aws_profile=data.get("aws_profile"),
    )


def load_context_file(path: str) -> ClusterContext:
    """
    Load a ClusterContext from a YAML file.

    Args:
        path: Path to a YAML mapping with the keys in CONFIG_KEYS

    Raises:
        ConfigurationError: If the file cannot be read or is malformed
    """
    InputValidator.validate_safe_filesystem_path(path, "config")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    logger.debug("Loaded cluster context from %s", path)
    return context_from_mapping(data)


def context_from_cluster_deployment(cluster_deployment: Dict[str, Any]) -> ClusterContext:
    """
    Build a ClusterContext from a Hive ClusterDeployment resource.

    Reads spec.clusterMetadata.infraID, spec.platform.aws.region and
    spec.platform.aws.privateLink.enabled.

    Raises:
        ConfigurationError: If the ClusterDeployment is not an installed AWS cluster
    """
    metadata = cluster_deployment.get("metadata", {})
    ref = f"{metadata.get('namespace', 'unknown')}/{metadata.get('name', 'unknown')}"
    spec = cluster_deployment.get("spec", {})

    infra_id = (spec.get("clusterMetadata") or {}).get("infraID")
    if not infra_id:
        raise ConfigurationError(f"ClusterDeployment {ref} has no spec.clusterMetadata.infraID (not installed yet?)")

    aws = (spec.get("platform") or {}).get("aws")
    if aws is None:
        raise ConfigurationError(f"ClusterDeployment {ref} is not an AWS cluster")

    private_link = bool((aws.get("privateLink") or {}).get("enabled", False))

    return ClusterContext(
        infra_name=infra_id,
        private_link=private_link,
        region=aws.get("region"),
        cluster_name=spec.get("clusterName"),
    )


def load_context_from_hub(kube_client: KubeClient, ref: str) -> ClusterContext:
    """Read the ClusterDeployment NAMESPACE/NAME from the hub."""
    InputValidator.validate_cluster_deployment_ref(ref)
    namespace, name = ref.split("/")

    cluster_deployment = kube_client.get_cluster_deployment(namespace, name)
    if cluster_deployment is None:
        raise ConfigurationError(f"ClusterDeployment {ref} not found on hub")

    context = context_from_cluster_deployment(cluster_deployment)
    logger.info(
        "Loaded cluster context from ClusterDeployment %s (infra: %s, PrivateLink: %s)",
        ref,
        context.infra_name,
        context.private_link,
    )
    return context
