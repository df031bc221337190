"""Typed failures raised by the core services.

Routers let these propagate; the exception handlers in main.py turn each
kind into an HTTP status. Every check that can raise one runs before the
operation mutates anything.
"""


class OpsRoomError(Exception):
    """Base class for failures reported back to the caller."""

    kind = "error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(OpsRoomError):
    """Referenced room or room code does not exist."""

    kind = "not_found"


class UnauthorizedError(OpsRoomError):
    """Caller lacks the required operator role or room membership."""

    kind = "unauthorized"


class InvalidInputError(OpsRoomError):
    """Arguments are structurally malformed."""

    kind = "invalid_input"


class CodeSpaceExhaustedError(OpsRoomError):
    """No free room code was found within the resample budget."""

    kind = "code_space_exhausted"
