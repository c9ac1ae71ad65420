from dataclasses import dataclass
from typing import Any

from kube_service_available.model import Service


@dataclass(frozen=True)
class LabelQuery:
    """
    Equality-based label selector built from a Service's spec.selector.
    Terms are "key=value" strings sorted by key.
    """

    terms: tuple[str, ...]

    def render(self) -> str:
        return ",".join(self.terms)

    def requirements(self) -> dict[str, str]:
        return dict(term.split("=", 1) for term in self.terms)

    def matches(self, labels: dict[str, Any] | None) -> bool:
        labels = labels or {}
        return all(labels.get(k) == v for k, v in self.requirements().items())


def resolve_selector(service: Service) -> LabelQuery | None:
    # An empty selector would select every pod in the cluster
    if not service.selector:
        return None
    return LabelQuery(
        terms=tuple(f"{k}={v}" for k, v in sorted(service.selector.items()))
    )
