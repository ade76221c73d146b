"""Custom exceptions for ShoreSquad."""


class ShoreSquadError(Exception):
    """Base exception for ShoreSquad errors."""

    def __init__(self, message: str, component: str = "unknown") -> None:
        """Initialize error.

        Args:
            message: Error message
            component: Component that raised the error
        """
        self.component = component
        super().__init__(f"[{component}] {message}")


class ConfigError(ShoreSquadError):
    """Raised when configuration cannot be loaded or validated."""

    def __init__(self, message: str) -> None:
        super().__init__(message, component="config")


class StorageError(ShoreSquadError):
    """Raised by a key-value store when it is unavailable."""

    def __init__(self, message: str, component: str = "storage") -> None:
        super().__init__(message, component=component)


class WeatherError(ShoreSquadError):
    """Raised when the weather API request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize error.

        Args:
            message: Error message
            status_code: HTTP status code, if a response was received
        """
        self.status_code = status_code
        super().__init__(message, component="weather")

    @property
    def retryable(self) -> bool:
        """Whether the failure is transient (timeouts, 429, 5xx)."""
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500


class GeolocationError(ShoreSquadError):
    """Raised when a position cannot be acquired."""

    def __init__(self, message: str) -> None:
        super().__init__(message, component="geolocation")


class UnknownBeachError(ShoreSquadError):
    """Raised when a beach id is not in the catalog."""

    def __init__(self, beach_id: str) -> None:
        self.beach_id = beach_id
        super().__init__(f"Beach '{beach_id}' not found", component="beaches")


class CrewError(ShoreSquadError):
    """Raised when a crew operation receives invalid input."""

    def __init__(self, message: str) -> None:
        super().__init__(message, component="crew")
