from dataclasses import dataclass, field

from kube_service_available.errors import ConfigurationError


def parse_list(value: str | None) -> list[str]:
    """
    Parse a comma separated option ("a,b, c") into a list, dropping blanks.
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_pending_seconds(value: str | int | None) -> int:
    if value is None or value == "":
        return 0
    try:
        seconds = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid pending time: {value!r}") from e
    if seconds < 0:
        raise ConfigurationError(f"Pending time must not be negative: {seconds}")
    return seconds


@dataclass
class CheckConfig:
    services: list[str] = field(default_factory=list)
    include_namespaces: list[str] = field(default_factory=list)
    exclude_namespaces: list[str] = field(default_factory=list)
    pending_grace_seconds: int = 0
    # Legacy behaviour: drop services without a selector instead of
    # reporting them as unresolved
    ignore_selectorless: bool = False


@dataclass
class ConnectionConfig:
    """
    Everything needed to talk to the Kubernetes API. Handed to the cluster
    client unmodified; nothing here is read from ambient state.
    """

    api_server: str | None = None
    api_version: str = "v1"
    in_cluster: bool = False
    ca_file: str | None = None
    cert_file: str | None = None
    key_file: str | None = None
    user: str | None = None
    password: str | None = None
    token: str | None = None
    token_file: str | None = None
    context: str | None = None
    request_timeout: float | None = None

    def bearer_token(self) -> str | None:
        if self.token:
            return self.token
        if not self.token_file:
            return None
        try:
            with open(self.token_file, encoding="utf-8") as f:
                return f.read().strip()
        except OSError as e:
            raise ConfigurationError(
                f"Unable to read token file {self.token_file}: {e}"
            ) from e

    def validate(self) -> None:
        if self.api_version != "v1":
            raise ConfigurationError(f"Unsupported API version: {self.api_version}")
        if self.password and not self.user:
            raise ConfigurationError("A password requires a user")
        if self.user and not self.password:
            raise ConfigurationError("If a user is passed, a password is required")
        if bool(self.cert_file) != bool(self.key_file):
            raise ConfigurationError("Client certificate and key must be passed together")
        if self.token and self.token_file:
            raise ConfigurationError("Pass either a token or a token file, not both")
        if self.in_cluster and self.api_server:
            raise ConfigurationError("--in-cluster cannot be combined with --api-server")
