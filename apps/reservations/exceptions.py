"""Errors raised by the reservation store."""


class ReservationUnavailableError(Exception):
    """Raised when a unit is already occupied for the requested nights."""

    code = "unavailable"


class InvalidStatusTransition(Exception):
    """Raised when a status change falls outside the reservation lifecycle."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move reservation from {current!r} to {requested!r}")
