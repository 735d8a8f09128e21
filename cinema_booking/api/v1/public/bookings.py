from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.services import booking
from cinema_booking.schemas.common import ErrorResponse
from cinema_booking.schemas.ticket import BookingCreate, Ticket as TicketSchema

router = APIRouter(prefix="/showtimes", tags=["Bookings"])
ticket_router = APIRouter(prefix="/tickets", tags=["Bookings"])


# ---------------------------------------------------------------------------
# POST /showtimes/{id}/bookings: reserve or buy one seat
# ---------------------------------------------------------------------------


@router.post(
    "/{showtime_id}/bookings",
    response_model=TicketSchema,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_booking(showtime_id: UUID, data: BookingCreate, db: Session = Depends(get_db)):
    """
    Reserve (`RESERVED`) or buy (`SOLD`) a seat for a showtime.

    - 404 if the seat is not part of the showtime's theatre.
    - 409 if the showtime has already started.
    - 409 if the seat is already reserved or sold.
    """
    return booking.book(
        db,
        showtime_id=showtime_id,
        seat_id=data.seat_id,
        target_status=data.status,
        customer_email=data.customer_email,
    )


@router.get("/{showtime_id}/seats/{seat_id}/ticket", response_model=TicketSchema)
def get_seat_ticket(showtime_id: UUID, seat_id: UUID, db: Session = Depends(get_db)):
    return booking.get_unit_ticket(db, showtime_id, seat_id)


# ---------------------------------------------------------------------------
# Reservation / refund transitions
# ---------------------------------------------------------------------------


@router.post("/{showtime_id}/seats/{seat_id}/confirm", response_model=TicketSchema)
def confirm_reservation(showtime_id: UUID, seat_id: UUID, db: Session = Depends(get_db)):
    """Turn a reservation into a sale."""
    return booking.confirm_reservation(db, showtime_id, seat_id)


@router.post("/{showtime_id}/seats/{seat_id}/cancel", response_model=TicketSchema)
def cancel_reservation(showtime_id: UUID, seat_id: UUID, db: Session = Depends(get_db)):
    """Release a reservation back to AVAILABLE."""
    return booking.cancel_reservation(db, showtime_id, seat_id)


@router.post("/{showtime_id}/seats/{seat_id}/refund", response_model=TicketSchema)
def refund_ticket(showtime_id: UUID, seat_id: UUID, db: Session = Depends(get_db)):
    """Refund a sold ticket, making the seat AVAILABLE again."""
    return booking.refund_ticket(db, showtime_id, seat_id)


@ticket_router.get("/{ticket_id}", response_model=TicketSchema)
def get_ticket(ticket_id: UUID, db: Session = Depends(get_db)):
    return booking.get_ticket(db, ticket_id)
