"""Error types shared by services and handlers.

Services raise these; handlers turn ``message`` into a reply. Anything that is
not a ``WGBotError`` is a bug and goes to the log.
"""


class WGBotError(Exception):
    """Base exception for all bot errors."""

    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WGBotError):
    """Input rejected before anything was written."""

    code = "validation_error"


class NotFoundError(WGBotError):
    """Referenced person or record does not exist."""

    code = "not_found"


class StorageError(WGBotError):
    """Database failure. The transaction has been rolled back."""

    code = "storage_error"

    def __init__(self, message: str, operation: str = "unknown"):
        super().__init__(message)
        self.operation = operation
