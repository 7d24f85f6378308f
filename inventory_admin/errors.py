# inventory_admin/errors.py
"""
Exceptions raised at the storage boundary.

Validation failures, missing records and constraint conflicts are normally
returned to callers as values (see ``inventory_admin.validation`` and
``inventory_admin.db.repository.Outcome``); these classes are what the store
layer raises before the repository turns them into outcomes.
"""


class InventoryAdminError(Exception):
    """Base exception for the inventory admin service."""

    default_message = "An error occurred in the inventory admin service"

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message
            code: Error code
            details: Additional error details (never shown to end users
                outside development)
        """
        self.message = message or self.default_message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            "error": self.__class__.__name__,
            "message": self.message,
        }

        if self.code:
            error_dict["code"] = self.code

        if self.details:
            error_dict["details"] = self.details

        return error_dict


class ConstraintViolationError(InventoryAdminError):
    """Raised when the store rejects a write (unique index, foreign key, check)."""

    default_message = "Constraint violation"


class PersistenceError(InventoryAdminError):
    """Raised when the store itself fails (connection, missing table, ...)."""

    default_message = "Database error"
