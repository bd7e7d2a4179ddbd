"""Entry point for the kubectl-count command."""

import argparse
import logging
import sys
from typing import Any

from pydantic import ValidationError

from kube_count import __version__
from kube_count.clients.base import K8sClient
from kube_count.config import AuthMode, CountConfig, LogLevel
from kube_count.controller import CounterController
from kube_count.domains.catalog.client import DiscoveryCatalogClient
from kube_count.domains.counting.models import SortOrder
from kube_count.domains.watch.source import KubernetesStreamSource
from kube_count.reporting.formatting import OutputFormat, render
from kube_count.utils.errors import KubeCountError

EXAMPLES = """examples:
  # display a table of specified resources count, resources split by comma.
  kubectl count pods,ds,deploy

  # display kube-system cluster count info in yaml format.
  kubectl count -oy -n kube-system rs,ep
"""


def setup_logging(level: LogLevel) -> None:
    """Configure logging; all log output goes to stderr."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="kubectl-count",
        description="Show resources count in the cluster.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "kinds",
        help="Comma-separated resource types, e.g. pods,deploy,ingresses.networking.k8s.io",
    )

    # Report options
    parser.add_argument(
        "-A",
        "--all-namespaces",
        action="store_true",
        help="If present, resources are aggregated across all namespaces",
    )
    parser.add_argument(
        "-O",
        "--order",
        type=str.lower,
        choices=["asc", "a", "desc", "d"],
        default="asc",
        help="Sort the counts in ascending or descending order (default: asc)",
    )
    parser.add_argument(
        "-o",
        "--output-format",
        type=str.lower,
        choices=["table", "t", "json", "j", "yaml", "y"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "-n",
        "--namespace",
        default=None,
        help="Only count objects in this namespace",
    )

    # Cluster access
    parser.add_argument(
        "--auth-mode",
        choices=["auto", "kubeconfig", "in-cluster"],
        default=None,
        help="Credential source (default: auto)",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Path to kubeconfig file",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubeconfig context to use",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for every watch to sync, 0 waits forever (default: 120)",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: WARNING)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CountConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.namespace:
        config_kwargs["namespace"] = args.namespace

    if args.auth_mode:
        config_kwargs["auth_mode"] = AuthMode(args.auth_mode)

    if args.kubeconfig:
        config_kwargs["kubeconfig_path"] = args.kubeconfig

    if args.context:
        config_kwargs["kubeconfig_context"] = args.context

    if args.timeout is not None:
        config_kwargs["sync_timeout_seconds"] = args.timeout

    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return CountConfig(**config_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    try:
        warnings = config.validate_auth_config()
    except ValueError as e:
        print(f"Error: configuration error: {e}", file=sys.stderr)
        return 1
    for warning in warnings:
        logger.warning(warning)

    k8s = K8sClient(config)
    try:
        k8s.connect()
        controller = CounterController(
            config,
            DiscoveryCatalogClient(k8s),
            KubernetesStreamSource(k8s, config),
        )
        records = controller.run(
            args.kinds,
            namespace=config.namespace,
            sort_order=SortOrder.parse(args.order),
            collapse_namespaces=args.all_namespaces,
        )
        output = render(records, OutputFormat.parse(args.output_format))
    except KubeCountError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        k8s.disconnect()

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
