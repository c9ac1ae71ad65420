from datetime import datetime, timedelta, timezone

import pytest

from kube_service_available.model import (
    ConditionStatus,
    Pod,
    PodCondition,
    PodPhase,
)
from kube_service_available.readiness import Verdict, evaluate_pod

NOW = datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock():
    return NOW


def running_pod(*conditions: tuple[str, str]) -> Pod:
    return Pod(
        namespace="default",
        name="web-1",
        phase=PodPhase.RUNNING,
        start_time=NOW - timedelta(hours=1),
        conditions=tuple(
            PodCondition(type=t, status=ConditionStatus.parse(s)) for t, s in conditions
        ),
    )


def pending_pod(started_seconds_ago: int | None) -> Pod:
    start = None
    if started_seconds_ago is not None:
        start = NOW - timedelta(seconds=started_seconds_ago)
    return Pod(namespace="default", name="web-2", phase=PodPhase.PENDING, start_time=start)


# ----------------------------
# Running
# ----------------------------


def test_running_and_ready():
    assert evaluate_pod(running_pod(("Ready", "True")), clock=fixed_clock) is Verdict.AVAILABLE


def test_running_not_ready():
    pod = running_pod(("Ready", "False"))
    assert evaluate_pod(pod, clock=fixed_clock) is Verdict.UNAVAILABLE


def test_running_ready_unknown():
    pod = running_pod(("PodScheduled", "True"), ("Ready", "Unknown"))
    assert evaluate_pod(pod, clock=fixed_clock) is Verdict.UNAVAILABLE


def test_running_without_ready_condition():
    pod = running_pod(("PodScheduled", "True"), ("ContainersReady", "True"))
    assert evaluate_pod(pod, clock=fixed_clock) is Verdict.UNAVAILABLE


def test_running_without_conditions():
    assert evaluate_pod(running_pod(), clock=fixed_clock) is Verdict.UNAVAILABLE


# ----------------------------
# Pending
# ----------------------------


def test_pending_within_grace():
    assert evaluate_pod(pending_pod(5), 10, fixed_clock) is Verdict.AVAILABLE


def test_pending_past_grace():
    assert evaluate_pod(pending_pod(5), 3, fixed_clock) is Verdict.UNAVAILABLE


def test_pending_at_grace_boundary_is_unavailable():
    assert evaluate_pod(pending_pod(10), 10, fixed_clock) is Verdict.UNAVAILABLE


def test_pending_default_grace_is_zero():
    assert evaluate_pod(pending_pod(0), clock=fixed_clock) is Verdict.UNAVAILABLE


def test_pending_without_start_time_is_skipped():
    assert evaluate_pod(pending_pod(None), 300, fixed_clock) is Verdict.SKIPPED


# ----------------------------
# Other phases
# ----------------------------


@pytest.mark.parametrize(
    "phase", [PodPhase.SUCCEEDED, PodPhase.FAILED, PodPhase.UNKNOWN]
)
def test_other_phases_are_unavailable(phase):
    pod = Pod(
        namespace="default",
        name="job-1",
        phase=phase,
        start_time=NOW,
        conditions=(PodCondition(type="Ready", status=ConditionStatus.TRUE),),
    )
    assert evaluate_pod(pod, 60, fixed_clock) is Verdict.UNAVAILABLE
