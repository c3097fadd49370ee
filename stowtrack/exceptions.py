"""Error taxonomy shared by the stores, the hierarchy guard and the services.

Every error carries a human-readable message; ``str(exc)`` returns it
unchanged. None of these know about HTTP: the front end decides how each
maps to a status code.
"""


class InventoryError(Exception):
    """Base class for all inventory errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(InventoryError):
    """Caller-supplied values failed validation."""


class NotFoundError(InventoryError):
    """A referenced location, parent or item does not exist."""


class AlreadyExistsError(InventoryError):
    """A location id is already taken."""


class CycleDetectedError(InventoryError):
    """A proposed parent assignment would make the hierarchy loop."""


class ConstraintViolationError(InventoryError):
    """The database rejected a write on referential-integrity grounds."""
