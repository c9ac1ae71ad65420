class ServiceCheckError(Exception):
    """
    Base class for errors raised while checking service availability.
    """


class ClusterAPIError(ServiceCheckError):
    """
    Listing services failed. Fatal for the whole check.
    """


class PodLookupError(ServiceCheckError):
    """
    Fetching the pods behind one service failed. The check carries on.
    """


class ConfigurationError(ServiceCheckError):
    """
    Invalid options or unreadable input files.
    """
