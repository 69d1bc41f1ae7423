"""Error kinds raised by the version checker.

Adapters translate transport and payload problems into these so the
application layer never has to know about aiohttp or HTTP status codes.
"""


class VersionCheckerError(Exception):
    """Base class for all version checker errors."""
    pass


class ConfigurationError(VersionCheckerError):
    """Raised when settings or the repository list are invalid."""
    pass


class MalformedDescriptor(VersionCheckerError):
    """Raised when a readme has no usable "Tested up to:" line."""
    pass


class FetchFailure(VersionCheckerError):
    """Raised when the latest WordPress version cannot be retrieved."""
    pass


class DescriptorReadFailure(FetchFailure):
    """Raised when a repository readme cannot be read."""
    pass


class NotificationQueryFailure(VersionCheckerError):
    """Raised when existing issues of a repository cannot be listed."""
    pass


class NotificationCreateFailure(VersionCheckerError):
    """Raised when a new issue cannot be created."""
    pass
