#!/usr/bin/env python3
"""
PrivateLink Infrastructure Audit

Checks that the AWS resources a PrivateLink ROSA / OpenShift cluster needs
are in place: the VPC Endpoint Service Hive uses to reach the cluster, and
exactly one accepted connection to it.

Features:
- Read-only: never modifies AWS or Kubernetes resources
- Cluster context from flags, a YAML file, or a Hive ClusterDeployment
- Distinct NotFound / Ambiguous / Upstream failure reporting
- Optional parallel execution and retries of transient upstream failures
- Text or JSON output
"""

import argparse
import logging
import sys
from typing import Optional

from lib import (
    ClusterContext,
    Ec2Client,
    KubeClient,
    __version__,
    __version_date__,
    setup_logging,
)
from lib.cluster_context import load_context_file, load_context_from_hub
from lib.constants import (
    AUDIT_DEFAULT_RETRIES,
    AWS_REQUEST_TIMEOUT,
    EXIT_FAILURE,
    EXIT_INTERRUPT,
    EXIT_SUCCESS,
)
from lib.exceptions import ConfigurationError
from lib.validation import InputValidator
from modules import PrivateLinkAudit, build_validators


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Audit AWS PrivateLink infrastructure of a cluster",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Audit a PrivateLink cluster by infrastructure name
  %(prog)s --infra-name mycluster-x7k2p --private-link --region us-east-1

  # Read the cluster context from the Hive hub
  %(prog)s --hub-context hive-hub --cluster-deployment uhc-prod-123/mycluster

  # Read the cluster context from a YAML file
  %(prog)s --config cluster.yaml

  # Run one check only and print JSON results
  %(prog)s --config cluster.yaml --check "VPC Endpoint Service" --output json

  # List available checks
  %(prog)s --list-checks
        """,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--config",
        help="YAML file with infra_name, private_link, region, cluster_name, aws_profile",
    )
    source.add_argument(
        "--cluster-deployment",
        metavar="NAMESPACE/NAME",
        help="Hive ClusterDeployment to read the cluster context from",
    )

    parser.add_argument(
        "--hub-context",
        help="Kubernetes context of the Hive hub (uses current context if not specified)",
    )
    parser.add_argument(
        "--infra-name",
        help="Cluster infrastructure name (overrides --config/--cluster-deployment)",
    )
    parser.add_argument(
        "--private-link",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Whether the cluster uses PrivateLink (overrides --config/--cluster-deployment)",
    )
    parser.add_argument(
        "--region",
        help="AWS region (defaults to the cluster's region or the AWS default chain)",
    )
    parser.add_argument(
        "--aws-profile",
        help="AWS shared credentials profile",
    )
    parser.add_argument(
        "--check",
        action="append",
        dest="checks",
        metavar="LABEL",
        help="Only run the named check (repeatable)",
    )
    parser.add_argument(
        "--list-checks",
        action="store_true",
        help="List available checks and exit",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run checks in parallel",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=AUDIT_DEFAULT_RETRIES,
        help="Re-run a check this many times after a retryable AWS failure (default: %(default)s)",
    )
    parser.add_argument(
        "--request-timeout",
        type=int,
        default=AWS_REQUEST_TIMEOUT,
        help="API request timeout in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Print results as text summary or JSON",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log output format (text or json)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def resolve_context(args: argparse.Namespace, logger: logging.Logger) -> ClusterContext:
    """Build the cluster context from the configured source and flag overrides."""
    base: Optional[ClusterContext] = None

    if args.config:
        base = load_context_file(args.config)
    elif args.cluster_deployment:
        kube = KubeClient(context=args.hub_context, request_timeout=args.request_timeout)
        base = load_context_from_hub(kube, args.cluster_deployment)

    if base is None:
        if not args.infra_name:
            raise ConfigurationError("One of --infra-name, --config or --cluster-deployment is required")
        if args.private_link is None:
            logger.warning("--private-link not given, assuming a non-PrivateLink cluster")
        base = ClusterContext(infra_name=args.infra_name, private_link=bool(args.private_link))

    context = base.with_overrides(
        infra_name=args.infra_name,
        private_link=args.private_link,
        region=args.region,
        aws_profile=args.aws_profile,
    )
    context.validate()
    return context


def list_checks() -> None:
    """Print every registered check with its description."""
    placeholder = ClusterContext(infra_name="placeholder", private_link=False)
    for validator in build_validators(placeholder, ec2_client=None):
        print(f"{validator.filter_value()}\n    {validator.documentation()}\n")


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logger = setup_logging(args.verbose, args.log_format)

    if args.list_checks:
        list_checks()
        sys.exit(EXIT_SUCCESS)

    logger.info("PrivateLink Audit v%s (%s)", __version__, __version_date__)

    try:
        InputValidator.validate_all_cli_args(args)
        context = resolve_context(args, logger)
        ec2 = Ec2Client(
            region=context.region,
            profile=context.aws_profile,
            request_timeout=args.request_timeout,
        )
        validators = build_validators(context, ec2, args.checks)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(EXIT_FAILURE)
    except Exception as e:  # pragma: no cover - fatal init error
        logger.error("Failed to initialize audit: %s", e, exc_info=args.verbose)
        sys.exit(EXIT_FAILURE)

    logger.info(
        "Auditing cluster %s (infra: %s, PrivateLink: %s, region: %s)",
        context.cluster_name or "-",
        context.infra_name,
        context.private_link,
        ec2.region or "default",
    )

    audit = PrivateLinkAudit(validators, parallel=args.parallel, retries=args.retries)
    try:
        success, _ = audit.run()
    except KeyboardInterrupt:
        logger.warning("\n\nAudit interrupted by user")
        sys.exit(EXIT_INTERRUPT)

    if args.output == "json":
        print(audit.reporter.to_json())

    if success:
        logger.info("\n✓ PrivateLink infrastructure validated")
        sys.exit(EXIT_SUCCESS)

    logger.error("\n✗ PrivateLink infrastructure validation failed")
    sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
