class CalendarUpstreamError(RuntimeError):
    """Raised when the calendar provider fails (network errors, API errors, bad credentials)."""
    pass


class ClientConfigError(ValueError):
    """Raised when the tenant configuration file is missing or invalid."""
    pass
