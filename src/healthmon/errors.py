"""Custom exceptions for healthmon."""


class HealthmonError(Exception):
    """Base exception for this package."""


class MissingDependencyError(HealthmonError):
    """Raised when an optional probe driver is required but not installed."""


class ResourceValidationError(HealthmonError):
    """Returned when a resource cannot be registered."""

    def __init__(self, message: str, *, fields: tuple[str, ...] = ()) -> None:
        self.fields = fields
        super().__init__(message)


class UnknownResourceKindError(HealthmonError):
    """Raised when no prober is configured for a registered resource kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"No prober configured for resource kind: {kind}")


class CheckTimeoutError(HealthmonError):
    """Raised when the shared deadline expires before every probe was collected."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Health check exceeded its {timeout_seconds}s deadline")
