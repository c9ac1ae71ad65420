import pytest

from kube_service_available.errors import (
    ClusterAPIError,
    ConfigurationError,
    PodLookupError,
    ServiceCheckError,
)


@pytest.mark.parametrize("error", [ClusterAPIError, PodLookupError, ConfigurationError])
def test_errors_share_a_documented_base(error):
    assert issubclass(error, ServiceCheckError)
    assert error.__doc__ and error.__doc__.strip()
