from collections.abc import Callable, Iterable

from kube_service_available.model import Service

ServicePredicate = Callable[[Service], bool]

# ----------------------------
# Predicates
# ----------------------------


def name_in(names: Iterable[str]) -> ServicePredicate:
    allowed = set(names)
    return lambda svc: svc.name in allowed


def namespace_in(namespaces: Iterable[str]) -> ServicePredicate:
    allowed = set(namespaces)
    return lambda svc: svc.namespace in allowed


# ----------------------------
# Filter engine
# ----------------------------


def filter_services(
    services: Iterable[Service],
    names: list[str] | None = None,
    include_namespaces: list[str] | None = None,
    exclude_namespaces: list[str] | None = None,
) -> list[Service]:
    """
    Narrow the service set to the ones that should be checked.

    - names: allow-list of service names
    - include_namespaces: allow-list of namespaces, empty means all
    - exclude_namespaces: deny-list, applied last so it wins over include

    Relative order of the input is preserved. An empty result is returned
    as-is; reporting "nothing to check" is up to the caller.
    """
    selected = list(services)

    if names:
        selected = [s for s in selected if name_in(names)(s)]

    if include_namespaces:
        selected = [s for s in selected if namespace_in(include_namespaces)(s)]

    if exclude_namespaces:
        excluded = namespace_in(exclude_namespaces)
        selected = [s for s in selected if not excluded(s)]

    return selected
