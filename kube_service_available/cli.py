import argparse
import logging
import sys

from kube_service_available.client import KubernetesClusterClient, SnapshotClusterClient
from kube_service_available.config import (
    CheckConfig,
    ConnectionConfig,
    parse_list,
    parse_pending_seconds,
)
from kube_service_available.engine import CheckStatus, RunOutcome, run_check
from kube_service_available.errors import ConfigurationError
from kube_service_available.output import output_result

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check that Kubernetes services have at least one ready pod"
    )

    # ----------------------------
    # Connection
    # ----------------------------
    parser.add_argument("-s", "--api-server", help="URL to API server")
    parser.add_argument(
        "-v", "--api-version", default="v1", choices=["v1"], help="API version"
    )
    parser.add_argument(
        "--in-cluster", action="store_true", help="Use service account authentication"
    )
    parser.add_argument("--ca-file", help="CA file to verify API server cert")
    parser.add_argument("--cert", help="Client cert to present")
    parser.add_argument("--key", help="Client key for the client cert")
    parser.add_argument("-u", "--user", help="User with access to API")
    parser.add_argument("--password", help="If user is passed, also pass a password")
    parser.add_argument("--token", help="Bearer token for authorization")
    parser.add_argument(
        "--token-file", help="File containing bearer token for authorization"
    )
    parser.add_argument("--context", help="kubeconfig context to use")
    parser.add_argument(
        "--request-timeout", type=float, help="API request timeout in seconds"
    )

    # ----------------------------
    # Offline snapshot
    # ----------------------------
    parser.add_argument(
        "--services-file", help="Path to Services JSON/YAML instead of a live cluster"
    )
    parser.add_argument("--pods-file", help="Path to Pods JSON/YAML")

    # ----------------------------
    # Check selection
    # ----------------------------
    parser.add_argument("-l", "--list", dest="services", help="List of services to check")
    parser.add_argument(
        "-i",
        "--include-namespace",
        help="Include the specified list of namespaces, an empty list includes all",
    )
    parser.add_argument(
        "-n", "--exclude-namespace", help="Exclude the specified list of namespaces"
    )
    parser.add_argument(
        "-p",
        "--pending",
        default="0",
        help="Time (in seconds) a pod may be pending for and be valid",
    )
    parser.add_argument(
        "--ignore-selectorless",
        action="store_true",
        help="Skip services without a selector instead of reporting them",
    )

    parser.add_argument(
        "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Output format (text, json, yaml)",
    )
    parser.add_argument("--verbose", action="store_true")
    return parser


def check_config_from_args(args: argparse.Namespace) -> CheckConfig:
    return CheckConfig(
        services=parse_list(args.services),
        include_namespaces=parse_list(args.include_namespace),
        exclude_namespaces=parse_list(args.exclude_namespace),
        pending_grace_seconds=parse_pending_seconds(args.pending),
        ignore_selectorless=args.ignore_selectorless,
    )


def connection_config_from_args(args: argparse.Namespace) -> ConnectionConfig:
    return ConnectionConfig(
        api_server=args.api_server,
        api_version=args.api_version,
        in_cluster=args.in_cluster,
        ca_file=args.ca_file,
        cert_file=args.cert,
        key_file=args.key,
        user=args.user,
        password=args.password,
        token=args.token,
        token_file=args.token_file,
        context=args.context,
        request_timeout=args.request_timeout,
    )


def build_client(args: argparse.Namespace):
    if args.services_file:
        return SnapshotClusterClient.from_files(args.services_file, args.pods_file)
    return KubernetesClusterClient(connection_config_from_args(args))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        check_config = check_config_from_args(args)
        client = build_client(args)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        outcome = RunOutcome(status=CheckStatus.UNKNOWN, message=str(e))
        return output_result(outcome, args.format)

    outcome = run_check(client, check_config)
    return output_result(outcome, args.format)


if __name__ == "__main__":
    sys.exit(main())
