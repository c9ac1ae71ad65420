import json

import yaml

from kube_service_available.engine import CheckStatus, RunOutcome

CHECK_NAME = "AllServicesUp"

EXIT_CODES = {
    CheckStatus.OK: 0,
    CheckStatus.WARNING: 1,
    CheckStatus.CRITICAL: 2,
    CheckStatus.UNKNOWN: 3,
}

# ----------------------------
# Output formatting
# ----------------------------


def format_status_line(outcome: RunOutcome) -> str:
    return f"{CHECK_NAME} {outcome.status.value}: {outcome.message}"


def format_result(outcome: RunOutcome, fmt: str = "text") -> str:
    """
    Render the outcome of a check run.
    - text: single Sensu/Nagios style status line
    - json / yaml: the full outcome including failed and unresolved ids
    """
    if fmt == "json":
        return json.dumps(outcome.to_dict(), indent=2)

    if fmt == "yaml":
        return yaml.safe_dump(outcome.to_dict(), sort_keys=False).rstrip("\n")

    return format_status_line(outcome)


def output_result(outcome: RunOutcome, fmt: str = "text") -> int:
    print(format_result(outcome, fmt))
    return EXIT_CODES[outcome.status]
