"""Infrastructure layer errors."""

from threadline.domain.error import DependencyUnavailableError


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class CacheUnavailableError(DependencyUnavailableError, AdapterError):
    """Cache backend could not be reached or answered with an error."""

    def __init__(self, reason: str):
        super().__init__("cache", reason)
