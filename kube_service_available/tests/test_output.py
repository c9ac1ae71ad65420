import json

import yaml

from kube_service_available.engine import CheckStatus, RunOutcome
from kube_service_available.output import format_result, output_result

CRITICAL = RunOutcome(
    status=CheckStatus.CRITICAL,
    message="All services are not ready: default.web-1",
    failed=["default.web-1"],
    checked=1,
)


def test_text_status_line():
    assert (
        format_result(CRITICAL)
        == "AllServicesUp CRITICAL: All services are not ready: default.web-1"
    )


def test_json_output():
    data = json.loads(format_result(CRITICAL, "json"))
    assert data == {
        "status": "CRITICAL",
        "message": "All services are not ready: default.web-1",
        "failed": ["default.web-1"],
        "unresolved": [],
        "checked": 1,
    }


def test_yaml_output():
    data = yaml.safe_load(format_result(CRITICAL, "yaml"))
    assert data["status"] == "CRITICAL"
    assert data["failed"] == ["default.web-1"]


def test_exit_codes(capsys):
    ok = RunOutcome(status=CheckStatus.OK, message="All services are reporting as up")
    warning = RunOutcome(status=CheckStatus.WARNING, message="No services to check")
    unknown = RunOutcome(status=CheckStatus.UNKNOWN, message="bad config")

    assert output_result(ok) == 0
    assert output_result(warning) == 1
    assert output_result(CRITICAL) == 2
    assert output_result(unknown) == 3

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "AllServicesUp OK: All services are reporting as up"
    assert len(lines) == 4
