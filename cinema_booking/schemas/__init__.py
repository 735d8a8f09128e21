from cinema_booking.schemas.common import ErrorResponse, DeletedResponse
from cinema_booking.schemas.venue import (
    Venue, VenueCreate, VenueWithTheatres,
    Theatre, TheatreCreate,
)
from cinema_booking.schemas.movie import Movie, MovieCreate
from cinema_booking.schemas.showtime import Showtime, ShowtimeCreate, ShowtimeDetail
from cinema_booking.schemas.seat import (
    Seat, SeatCreate, SeatBulkCreate, SeatBulkCreateResponse,
    SeatMapEntry, SeatMapResponse,
)
from cinema_booking.schemas.ticket import BookingCreate, Ticket, AvailabilityResponse
from cinema_booking.schemas.report import (
    BookedTicketRow, OverlapRow, AvailableSeatRow,
    AvailabilitySummaryRow, InventoryConsistencyRow,
)
