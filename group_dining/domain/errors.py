class DiningError(Exception):
    """Base class for failures reported back to the caller as an envelope."""

    kind = "Unexpected"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreUnavailable(DiningError):
    """A required table does not exist in the store."""

    kind = "StoreUnavailable"


class NotFound(DiningError):
    """A referenced session or order does not exist."""

    kind = "NotFound"


class Unexpected(DiningError):
    kind = "Unexpected"
