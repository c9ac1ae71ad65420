import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import yaml

UNKNOWN_NAME = "<unknown>"


class PodPhase(str, Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "PodPhase":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class ConditionStatus(str, Enum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "ConditionStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Service:
    namespace: str | None
    name: str | None
    selector: dict[str, str] = field(default_factory=dict)

    @property
    def identifier(self) -> str:
        return self.name or UNKNOWN_NAME


@dataclass(frozen=True)
class PodCondition:
    type: str
    status: ConditionStatus


@dataclass(frozen=True)
class Pod:
    namespace: str | None
    name: str | None
    phase: PodPhase = PodPhase.UNKNOWN
    start_time: datetime | None = None
    conditions: tuple[PodCondition, ...] = ()
    labels: dict[str, str] = field(default_factory=dict)

    @property
    def identifier(self) -> str:
        """
        Qualified "namespace.name" id used when reporting an unavailable pod.
        """
        return f"{self.namespace or UNKNOWN_NAME}.{self.name or UNKNOWN_NAME}"

    def condition(self, cond_type: str) -> PodCondition | None:
        for c in self.conditions:
            if c.type == cond_type:
                return c
        return None


# ----------------------------
# Parsing utilities
# ----------------------------

_FRACTION = re.compile(r"\.(\d+)")


def parse_time(ts: str | datetime) -> datetime:
    if isinstance(ts, datetime):
        dt = ts
    elif isinstance(ts, str):
        # RFC3339 allows any number of fractional digits, fromisoformat on
        # older interpreters only takes 3 or 6
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), ts, count=1)
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid timestamp: {ts!r}") from e
    else:
        raise ValueError(f"Invalid timestamp: {ts!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def load_document(path: str) -> Any:
    """
    Load a `kubectl get -o json` or `-o yaml` dump, picked by file extension.
    """
    with open(path, encoding="utf-8") as f:
        if path.endswith((".yaml", ".yml")):
            return yaml.safe_load(f)
        return json.load(f)


def normalize_items(doc: Any) -> list[dict[str, Any]]:
    if doc is None:
        return []
    if isinstance(doc, list):
        return doc
    if not isinstance(doc, dict):
        raise ValueError(f"Expected a Kubernetes object or list, got {type(doc).__name__}")
    if (doc.get("kind") or "").endswith("List") or "items" in doc:
        return doc.get("items") or []
    return [doc]


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Expected a mapping for {what}, got {type(value).__name__}")
    return value


def service_from_dict(obj: dict[str, Any]) -> Service:
    obj = _mapping(obj, "Service")
    metadata = _mapping(obj.get("metadata"), "Service metadata")
    spec = _mapping(obj.get("spec"), "Service spec")
    selector = _mapping(spec.get("selector"), "Service selector")
    return Service(
        namespace=metadata.get("namespace"),
        name=metadata.get("name") or None,
        selector={str(k): str(v) for k, v in selector.items()},
    )


def pod_from_dict(obj: dict[str, Any]) -> Pod:
    obj = _mapping(obj, "Pod")
    metadata = _mapping(obj.get("metadata"), "Pod metadata")
    status = _mapping(obj.get("status"), "Pod status")

    start_time = status.get("startTime")
    conditions = []
    for c in status.get("conditions") or []:
        c = _mapping(c, "Pod condition")
        conditions.append(
            PodCondition(type=c.get("type", ""), status=ConditionStatus.parse(c.get("status")))
        )

    return Pod(
        namespace=metadata.get("namespace"),
        name=metadata.get("name"),
        phase=PodPhase.parse(status.get("phase")),
        start_time=parse_time(start_time) if start_time else None,
        conditions=tuple(conditions),
        labels=dict(_mapping(metadata.get("labels"), "Pod labels")),
    )
