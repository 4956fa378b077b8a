"""Persistence-specific exceptions."""


class PersistenceError(Exception):
    """Base exception for all persistence errors."""


class StoreUnavailableError(PersistenceError):
    """Raised when the Firestore client cannot be created."""


class InvalidTripPayloadError(PersistenceError):
    """Raised when imported data is not a list of trip objects."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        super().__init__(message if index is None else f"Trip #{index}: {message}")
