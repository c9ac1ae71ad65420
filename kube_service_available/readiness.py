import logging
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum

from kube_service_available.model import ConditionStatus, Pod, PodPhase

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class Verdict(str, Enum):
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"
    # Pending pod with no start time yet; defers to the other pods of the service
    SKIPPED = "Skipped"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _evaluate_pending(pod: Pod, pending_grace_seconds: int, clock: Clock) -> Verdict:
    if pod.start_time is None:
        return Verdict.SKIPPED

    elapsed = (clock() - pod.start_time).total_seconds()
    if elapsed < pending_grace_seconds:
        logger.debug(
            "Pod %s pending for %.0fs, within %ss grace",
            pod.identifier,
            elapsed,
            pending_grace_seconds,
        )
        return Verdict.AVAILABLE
    return Verdict.UNAVAILABLE


def _evaluate_running(pod: Pod) -> Verdict:
    ready = pod.condition("Ready")
    if ready is not None and ready.status is ConditionStatus.TRUE:
        return Verdict.AVAILABLE
    return Verdict.UNAVAILABLE


def evaluate_pod(
    pod: Pod,
    pending_grace_seconds: int = 0,
    clock: Clock = utc_now,
) -> Verdict:
    """
    Classify a single pod.

    - Pending: skipped without a start time, otherwise available while the
      time since start is below the grace period
    - Running: available only with a Ready condition whose status is True
    - anything else: unavailable
    """
    if pod.phase is PodPhase.PENDING:
        verdict = _evaluate_pending(pod, pending_grace_seconds, clock)
    elif pod.phase is PodPhase.RUNNING:
        verdict = _evaluate_running(pod)
    else:
        verdict = Verdict.UNAVAILABLE

    logger.debug("Pod %s (%s): %s", pod.identifier, pod.phase.value, verdict.value)
    return verdict
