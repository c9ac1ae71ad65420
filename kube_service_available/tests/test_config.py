import pytest

from kube_service_available.config import (
    ConnectionConfig,
    parse_list,
    parse_pending_seconds,
)
from kube_service_available.errors import ConfigurationError


def test_parse_list():
    assert parse_list(None) == []
    assert parse_list("") == []
    assert parse_list("a,b, c") == ["a", "b", "c"]
    assert parse_list("a,,b,") == ["a", "b"]


def test_parse_pending_seconds():
    assert parse_pending_seconds(None) == 0
    assert parse_pending_seconds("30") == 30
    assert parse_pending_seconds(5) == 5


@pytest.mark.parametrize("value", ["soon", "1.5", "-1"])
def test_invalid_pending_seconds(value):
    with pytest.raises(ConfigurationError):
        parse_pending_seconds(value)


class TestConnectionConfig:
    def test_token_takes_precedence_over_nothing(self):
        assert ConnectionConfig(token="abc").bearer_token() == "abc"
        assert ConnectionConfig().bearer_token() is None

    def test_unreadable_token_file(self, tmp_path):
        config = ConnectionConfig(token_file=str(tmp_path / "missing"))
        with pytest.raises(ConfigurationError):
            config.bearer_token()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"api_version": "v2"},
            {"user": "admin"},
            {"password": "pw"},
            {"cert_file": "c.crt"},
            {"token": "a", "token_file": "/tmp/t"},
            {"in_cluster": True, "api_server": "https://k8s"},
        ],
    )
    def test_validate_rejects_inconsistent_settings(self, kwargs):
        with pytest.raises(ConfigurationError):
            ConnectionConfig(**kwargs).validate()

    def test_validate_accepts_defaults(self):
        ConnectionConfig().validate()
