"""
Cluster collaborators: the live Kubernetes API client and an offline
snapshot client backed by `kubectl get -o json|yaml` dumps.
"""

import logging
from typing import Any, Protocol

import urllib3
import yaml
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from kube_service_available.config import ConnectionConfig
from kube_service_available.errors import (
    ClusterAPIError,
    ConfigurationError,
    PodLookupError,
)
from kube_service_available.model import (
    Pod,
    Service,
    load_document,
    normalize_items,
    pod_from_dict,
    service_from_dict,
)
from kube_service_available.selector import LabelQuery

logger = logging.getLogger(__name__)


class ClusterClient(Protocol):
    def list_services(self) -> list[Service]: ...

    def list_pods(self, label_selector: str) -> list[Pod]: ...


# ----------------------------
# Live API client
# ----------------------------


def build_api_configuration(connection: ConnectionConfig) -> client.Configuration:
    """
    Translate a ConnectionConfig into a kubernetes client Configuration.

    - in-cluster: service account token and CA
    - explicit api server: host, TLS files and credentials from the config
    - otherwise: local kubeconfig (optionally a named context)
    """
    connection.validate()
    configuration = client.Configuration()

    try:
        if connection.in_cluster:
            config.load_incluster_config(client_configuration=configuration)
            logger.debug("Loaded in-cluster Kubernetes configuration")
            return configuration

        if not connection.api_server:
            config.load_kube_config(
                context=connection.context,
                client_configuration=configuration,
            )
            logger.debug("Loaded local Kubernetes configuration")
            return configuration
    except ConfigException as e:
        raise ConfigurationError(f"Failed to load Kubernetes configuration: {e}") from e

    configuration.host = connection.api_server
    if connection.ca_file:
        configuration.ssl_ca_cert = connection.ca_file
    if connection.cert_file:
        configuration.cert_file = connection.cert_file
        configuration.key_file = connection.key_file

    token = connection.bearer_token()
    if token:
        configuration.api_key = {"authorization": f"Bearer {token}"}
    elif connection.user:
        configuration.username = connection.user
        configuration.password = connection.password
        configuration.api_key = {"authorization": configuration.get_basic_auth_token()}

    logger.debug("Using Kubernetes API server %s", connection.api_server)
    return configuration


class KubernetesClusterClient:
    """Client for Kubernetes API interactions."""

    def __init__(self, connection: ConnectionConfig, core_v1: Any = None):
        self.connection = connection
        if core_v1 is None:
            core_v1 = client.CoreV1Api(client.ApiClient(build_api_configuration(connection)))
        self.core_v1 = core_v1
        self.api_client = getattr(core_v1, "api_client", None) or client.ApiClient()

    def _request_kwargs(self) -> dict[str, Any]:
        if self.connection.request_timeout is None:
            return {}
        return {"_request_timeout": self.connection.request_timeout}

    def _to_dicts(self, response: Any) -> list[dict[str, Any]]:
        return normalize_items(self.api_client.sanitize_for_serialization(response))

    def list_services(self) -> list[Service]:
        try:
            response = self.core_v1.list_service_for_all_namespaces(
                **self._request_kwargs()
            )
        except ApiException as e:
            raise ClusterAPIError(f"{e.status} {e.reason}") from e
        except urllib3.exceptions.HTTPError as e:
            raise ClusterAPIError(str(e)) from e

        try:
            services = [service_from_dict(obj) for obj in self._to_dicts(response)]
        except ValueError as e:
            raise ClusterAPIError(f"Malformed service list: {e}") from e
        logger.debug("Listed %d services", len(services))
        return services

    def list_pods(self, label_selector: str) -> list[Pod]:
        try:
            response = self.core_v1.list_pod_for_all_namespaces(
                label_selector=label_selector, **self._request_kwargs()
            )
        except ApiException as e:
            raise PodLookupError(f"{e.status} {e.reason}") from e
        except urllib3.exceptions.HTTPError as e:
            raise PodLookupError(str(e)) from e

        try:
            return [pod_from_dict(obj) for obj in self._to_dicts(response)]
        except ValueError as e:
            raise PodLookupError(f"Malformed pod list: {e}") from e


# ----------------------------
# Offline snapshot client
# ----------------------------


class SnapshotClusterClient:
    """
    Serves services and pods from an in-memory snapshot. Label selectors are
    matched locally, the way the API server would for equality selectors.
    """

    def __init__(self, services: list[Service], pods: list[Pod]):
        self.services = list(services)
        self.pods = list(pods)

    @classmethod
    def from_dicts(
        cls,
        services: list[dict[str, Any]],
        pods: list[dict[str, Any]],
    ) -> "SnapshotClusterClient":
        return cls(
            [service_from_dict(s) for s in services],
            [pod_from_dict(p) for p in pods],
        )

    @classmethod
    def from_files(
        cls, services_path: str, pods_path: str | None = None
    ) -> "SnapshotClusterClient":
        try:
            services = normalize_items(load_document(services_path))
            pods = normalize_items(load_document(pods_path)) if pods_path else []
            return cls.from_dicts(services, pods)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Unable to load snapshot: {e}") from e

    def list_services(self) -> list[Service]:
        return list(self.services)

    def list_pods(self, label_selector: str) -> list[Pod]:
        terms = tuple(t.strip() for t in label_selector.split(",") if t.strip())
        if any("=" not in t for t in terms):
            raise PodLookupError(f"Unsupported label selector: {label_selector}")
        query = LabelQuery(terms=terms)
        return [p for p in self.pods if query.matches(p.labels)]
