import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from kube_service_available.client import ClusterClient
from kube_service_available.config import CheckConfig
from kube_service_available.errors import ClusterAPIError, PodLookupError
from kube_service_available.filters import filter_services
from kube_service_available.model import Pod, Service
from kube_service_available.readiness import Clock, Verdict, evaluate_pod, utc_now
from kube_service_available.selector import resolve_selector

logger = logging.getLogger(__name__)


class CheckStatus(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class RunOutcome:
    status: CheckStatus
    message: str
    failed: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    checked: int = 0

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["status"] = self.status.value
        return result


# ----------------------------
# Per-service evaluation
# ----------------------------


def _unavailable_pods(
    pods: list[Pod], pending_grace_seconds: int, clock: Clock
) -> list[str] | None:
    """
    Returns the ids of unavailable pods when none of the pods is available,
    an empty list when the service is available, and None when no pod gave
    a verdict at all.
    """
    unavailable: list[str] = []
    has_verdict = False

    for pod in pods:
        verdict = evaluate_pod(pod, pending_grace_seconds, clock)
        if verdict is Verdict.SKIPPED:
            continue
        has_verdict = True
        if verdict is Verdict.AVAILABLE:
            return []
        unavailable.append(pod.identifier)

    return unavailable if has_verdict else None


def _check_service(
    client: ClusterClient,
    service: Service,
    check_config: CheckConfig,
    clock: Clock,
    failed: list[str],
    unresolved: list[str],
) -> None:
    if not service.name:
        logger.warning("Service without a name in namespace %s", service.namespace)
        unresolved.append(service.identifier)
        return

    query = resolve_selector(service)
    if query is None:
        if check_config.ignore_selectorless:
            logger.debug("Skipping %s.%s: no selector", service.namespace, service.name)
        else:
            logger.warning("Service %s.%s has no selector", service.namespace, service.name)
            unresolved.append(service.name)
        return

    try:
        pods = client.list_pods(query.render())
    except PodLookupError as e:
        logger.warning("Pod lookup for %s failed: %s", service.name, e)
        failed.append(service.name)
        return

    unavailable = _unavailable_pods(pods, check_config.pending_grace_seconds, clock)
    if unavailable is None:
        logger.warning(
            "Service %s.%s has no pods to evaluate (selector %s)",
            service.namespace,
            service.name,
            query.render(),
        )
        unresolved.append(service.name)
        return

    if unavailable:
        logger.debug("Service %s.%s not available", service.namespace, service.name)
    failed.extend(unavailable)


# ----------------------------
# Outcome
# ----------------------------


def build_outcome(checked: int, failed: list[str], unresolved: list[str]) -> RunOutcome:
    if checked == 0:
        return RunOutcome(status=CheckStatus.WARNING, message="No services to check")

    if not failed and not unresolved:
        return RunOutcome(
            status=CheckStatus.OK,
            message="All services are reporting as up",
            checked=checked,
        )

    # Unresolved services are reported first
    parts = []
    if unresolved:
        parts.append(f"Some services could not be checked: {' '.join(unresolved)}")
    if failed:
        parts.append(f"All services are not ready: {' '.join(failed)}")

    return RunOutcome(
        status=CheckStatus.CRITICAL,
        message="; ".join(parts),
        failed=list(failed),
        unresolved=list(unresolved),
        checked=checked,
    )


def check_services(
    client: ClusterClient,
    check_config: CheckConfig,
    clock: Clock = utc_now,
) -> RunOutcome:
    """
    Run one evaluation pass over the cluster's services.

    Raises ClusterAPIError when services cannot be listed. Pod lookup errors
    are recorded against their service and never stop the pass.
    """
    services = filter_services(
        client.list_services(),
        names=check_config.services,
        include_namespaces=check_config.include_namespaces,
        exclude_namespaces=check_config.exclude_namespaces,
    )
    logger.debug("%d services selected for checking", len(services))

    failed: list[str] = []
    unresolved: list[str] = []
    for service in services:
        _check_service(client, service, check_config, clock, failed, unresolved)

    return build_outcome(len(services), failed, unresolved)


def run_check(
    client: ClusterClient,
    check_config: CheckConfig,
    clock: Clock = utc_now,
) -> RunOutcome:
    try:
        return check_services(client, check_config, clock)
    except ClusterAPIError as e:
        logger.error("Unable to list services: %s", e)
        return RunOutcome(status=CheckStatus.CRITICAL, message=f"API error: {e}")
