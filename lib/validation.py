#!/usr/bin/env python3
"""
Input validation utilities for PrivateLink audit automation.

This module validates CLI arguments, cluster identifiers, AWS regions and
Kubernetes references before they reach an external API.

Features:
- Cluster infrastructure name validation (used as the AWS tag prefix)
- AWS region validation
- Kubernetes resource name, namespace and context validation
- Filesystem path validation for config files
"""

import logging
import os
import re
from typing import Pattern

from lib.constants import LOGGER_NAME
from lib.exceptions import SecurityValidationError, ValidationError

logger = logging.getLogger(LOGGER_NAME)

# Kubernetes resource name validation patterns
# DNS-1123 subdomain format: contains only lowercase alphanumeric characters, '-' or '.',
# starts with an alphanumeric character, ends with an alphanumeric character
K8S_NAME_PATTERN: Pattern[str] = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")
K8S_NAME_MAX_LENGTH = 253

# RFC 1123 label format, must start with a letter
K8S_NAMESPACE_PATTERN: Pattern[str] = re.compile(r"^[a-z]([-a-z0-9]*[a-z0-9])?$")
K8S_NAMESPACE_MAX_LENGTH = 63

# Context name validation pattern (more permissive than K8s names)
# Accommodates default oc login contexts like 'default/api.example.com:6443/admin'
CONTEXT_NAME_PATTERN: Pattern[str] = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.:\-/]*[A-Za-z0-9]$|^[A-Za-z0-9]$")
CONTEXT_NAME_MAX_LENGTH = 128

# OpenShift infrastructure name, e.g. 'mycluster-x7k2p'
INFRA_NAME_PATTERN: Pattern[str] = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
INFRA_NAME_MAX_LENGTH = 63

# AWS region, e.g. 'us-east-1', 'us-gov-west-1', 'ap-southeast-3'
AWS_REGION_PATTERN: Pattern[str] = re.compile(r"^[a-z]{2}(-gov|-iso[a-z]*)?-[a-z]+-\d{1,2}$")


class InputValidator:
    """Input validation for PrivateLink audit."""

    @staticmethod
    def validate_infra_name(infra_name: str) -> None:
        """
        Validate an OpenShift infrastructure name.

        The infrastructure name prefixes every AWS resource Hive and the
        installer create for the cluster, so it ends up inside tag filters.

        Args:
            infra_name: The infrastructure name to validate

        Raises:
            ValidationError: If the name is invalid
        """
        if not infra_name:
            raise ValidationError("Infrastructure name cannot be empty")

        if len(infra_name) > INFRA_NAME_MAX_LENGTH:
            raise ValidationError(
                f"Infrastructure name '{infra_name}' exceeds maximum length of {INFRA_NAME_MAX_LENGTH} characters"
            )

        if not INFRA_NAME_PATTERN.match(infra_name):
            raise ValidationError(
                f"Invalid infrastructure name '{infra_name}'. "
                f"Must consist of lowercase alphanumeric characters or '-', "
                f"and must start and end with an alphanumeric character"
            )

    @staticmethod
    def validate_aws_region(region: str) -> None:
        """Validate an AWS region name such as 'us-east-1'."""
        if not region:
            raise ValidationError("AWS region cannot be empty")

        if not AWS_REGION_PATTERN.match(region):
            raise ValidationError(f"Invalid AWS region '{region}'. Expected a region name like 'us-east-1'")

    @staticmethod
    def validate_kubernetes_name(name: str, resource_type: str = "resource") -> None:
        """
        Validate Kubernetes resource name according to DNS-1123 subdomain rules.

        Args:
            name: The name to validate
            resource_type: Type of resource for error messages

        Raises:
            ValidationError: If name is invalid
        """
        if not name:
            raise ValidationError(f"{resource_type} name cannot be empty")

        if len(name) > K8S_NAME_MAX_LENGTH:
            raise ValidationError(
                f"{resource_type} name '{name}' exceeds maximum length of {K8S_NAME_MAX_LENGTH} characters"
            )

        if not K8S_NAME_PATTERN.match(name):
            raise ValidationError(
                f"Invalid {resource_type} name '{name}'. "
                f"Must consist of lowercase alphanumeric characters, '-', or '.', "
                f"must start and end with an alphanumeric character (DNS-1123 subdomain)"
            )

    @staticmethod
    def validate_kubernetes_namespace(namespace: str) -> None:
        """
        Validate Kubernetes namespace name according to DNS-1123 label rules.

        Raises:
            ValidationError: If namespace is invalid
        """
        if not namespace:
            raise ValidationError("Namespace cannot be empty")

        if len(namespace) > K8S_NAMESPACE_MAX_LENGTH:
            raise ValidationError(
                f"Namespace '{namespace}' exceeds maximum length of {K8S_NAMESPACE_MAX_LENGTH} characters"
            )

        if not K8S_NAMESPACE_PATTERN.match(namespace):
            raise ValidationError(
                f"Invalid namespace '{namespace}'. "
                f"Must consist of lower case alphanumeric characters or '-', "
                f"and must start and end with an alphanumeric character"
            )

    @staticmethod
    def validate_context_name(context: str) -> None:
        """
        Validate Kubernetes context name.

        Raises:
            ValidationError: If context name is invalid
        """
        if not context:
            raise ValidationError("Context name cannot be empty")

        if len(context) > CONTEXT_NAME_MAX_LENGTH:
            raise ValidationError(
                f"Context name '{context}' exceeds maximum length of {CONTEXT_NAME_MAX_LENGTH} characters"
            )

        if not CONTEXT_NAME_PATTERN.match(context):
            raise ValidationError(
                f"Invalid context name '{context}'. "
                f"Must consist of alphanumeric characters, '-', '_', '.', ':', or '/', "
                f"and must start and end with an alphanumeric character"
            )

    @staticmethod
    def validate_cluster_deployment_ref(ref: str) -> None:
        """Validate a NAMESPACE/NAME reference to a Hive ClusterDeployment."""
        if not ref or ref.count("/") != 1:
            raise ValidationError(f"Invalid ClusterDeployment reference '{ref}'. Expected NAMESPACE/NAME")

        namespace, name = ref.split("/")
        InputValidator.validate_kubernetes_namespace(namespace)
        InputValidator.validate_kubernetes_name(name, "ClusterDeployment")

    @staticmethod
    def validate_safe_filesystem_path(path: str, field_name: str) -> None:
        """
        Validate that a path is safe for filesystem operations.

        Args:
            path: The path to validate
            field_name: Name of the field for error messages

        Raises:
            SecurityValidationError: If path contains unsafe characters or patterns
            ValidationError: If path is empty
        """
        if not path:
            raise ValidationError(f"{field_name} path cannot be empty")

        # '..' is rejected as a path component only
        if ".." in path.split("/"):
            raise SecurityValidationError(
                f"SECURITY: Path traversal attempt detected in {field_name} path '{path}'. "
                f"The '..' sequence is not allowed as a path component."
            )

        unsafe_chars = ["~", "$", "{", "}", "|", "&", ";", "<", ">", "`"]
        if any(char in path for char in unsafe_chars):
            raise SecurityValidationError(
                f"SECURITY: Invalid characters in {field_name} path '{path}'. "
                f"Disallowed patterns: {', '.join(unsafe_chars)}."
            )

        if path.startswith("/"):
            resolved_path = os.path.realpath(path)

            safe_prefixes = ["/tmp/", "/var/"]  # nosec B108 - path validation, not temp file usage
            cwd = os.getcwd()
            if cwd:
                safe_prefixes.append(os.path.realpath(cwd) + "/")
            home = os.path.expanduser("~")
            if home and home != "~":
                safe_prefixes.append(os.path.realpath(home) + "/")

            if not any(resolved_path.startswith(prefix) for prefix in safe_prefixes):
                raise SecurityValidationError(
                    f"SECURITY: Absolute path '{path}' is not allowed for {field_name}. "
                    f"Use relative paths or paths within /tmp, /var, workspace root, or home directory."
                )

    @staticmethod
    def validate_all_cli_args(args: object) -> None:
        """
        Validate all CLI arguments.

        Args:
            args: Parsed CLI arguments object

        Raises:
            ValidationError: If any argument validation fails
        """
        if getattr(args, "infra_name", None):
            InputValidator.validate_infra_name(args.infra_name)

        if getattr(args, "region", None):
            InputValidator.validate_aws_region(args.region)

        if getattr(args, "hub_context", None):
            InputValidator.validate_context_name(args.hub_context)
            if not getattr(args, "cluster_deployment", None):
                raise ValidationError("--hub-context requires --cluster-deployment")

        if getattr(args, "cluster_deployment", None):
            InputValidator.validate_cluster_deployment_ref(args.cluster_deployment)
            if not getattr(args, "hub_context", None):
                logger.debug("No --hub-context given, using current kubeconfig context")

        if getattr(args, "config", None):
            InputValidator.validate_safe_filesystem_path(args.config, "config")

        retries = getattr(args, "retries", None)
        if retries is not None and retries < 0:
            raise ValidationError("--retries cannot be negative")

        timeout = getattr(args, "request_timeout", None)
        if timeout is not None and timeout <= 0:
            raise ValidationError("--request-timeout must be positive")
