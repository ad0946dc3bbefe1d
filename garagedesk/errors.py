"""Error types raised by the engine and store backends."""


class GarageDeskError(Exception):
    """Base class for all garagedesk errors."""


class NotFoundError(GarageDeskError):
    """Raised when a slot, booking, document or garage reference is unknown."""


class ValidationError(GarageDeskError):
    """Raised when input violates a data-model invariant."""


class SlotConflictError(ValidationError):
    """Raised when an active booking already holds the requested slot."""
