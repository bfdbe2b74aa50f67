"""
Service-level exceptions.
"""


class PortalError(Exception):
    """Raised by services when a storage or integration call fails."""

    def __init__(self, message: str, component: str = "portal"):
        super().__init__(message)
        self.message = message
        self.component = component

    def __str__(self) -> str:
        return f"[{self.component}] {self.message}"


class NotFoundError(PortalError):
    """A referenced record does not exist."""


class ConflictError(PortalError):
    """The request conflicts with the record's current state."""
