"""Domain errors raised by the booking core.

Every error is a local validation failure: it is raised before any state is
written (or after the transaction has been rolled back), so the caller can
retry with corrected input. None of them are transient.
"""


def _label(status) -> str:
    return getattr(status, "value", status)


class CinemaBookingError(Exception):
    """Base class for all domain errors."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(CinemaBookingError):
    status_code = 404

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class UnitNotFoundError(NotFoundError):
    """No bookable unit exists for the (showtime, seat) pair."""

    def __init__(self, showtime_id, seat_id):
        self.showtime_id = showtime_id
        self.seat_id = seat_id
        CinemaBookingError.__init__(
            self,
            f"Seat {seat_id} is not bookable for showtime {showtime_id}",
        )


class InvalidIntervalError(CinemaBookingError):
    status_code = 422

    def __init__(self, start_time, end_time):
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(f"End time {end_time} must be after start time {start_time}")


class OverlapError(CinemaBookingError):
    status_code = 409

    def __init__(self, conflict):
        self.conflict_id = conflict.id
        super().__init__(
            f"Theatre is already occupied from {conflict.start_time} to {conflict.end_time} "
            f"on {conflict.show_date} (showtime {conflict.id})"
        )


class DuplicateSeatError(CinemaBookingError):
    status_code = 409

    def __init__(self, theatre_id, location: str):
        self.theatre_id = theatre_id
        self.location = location
        super().__init__(f"Seat {location} already exists in theatre {theatre_id}")


class DuplicateEntityError(CinemaBookingError):
    status_code = 409


class InvalidMovieError(CinemaBookingError):
    status_code = 422


class PastShowtimeError(CinemaBookingError):
    status_code = 409

    def __init__(self, showtime):
        self.showtime_id = showtime.id
        super().__init__(
            f"Cannot book tickets for past showtime {showtime.id} "
            f"({showtime.show_date} {showtime.start_time})"
        )


class AlreadyBookedError(CinemaBookingError):
    status_code = 409

    def __init__(self, showtime_id, seat_id, status):
        self.showtime_id = showtime_id
        self.seat_id = seat_id
        self.status = status
        super().__init__(
            f"Seat {seat_id} for showtime {showtime_id} is not available (current status: '{_label(status)}')"
        )


class InvalidTransitionError(CinemaBookingError):
    """Raised when a ticket cannot move from its current status to the requested one."""

    status_code = 409

    def __init__(self, from_status, to_status):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Illegal ticket transition attempted: {_label(from_status)} -> {_label(to_status)}")
