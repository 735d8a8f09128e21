from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.services import booking, catalog, reporting
from cinema_booking.schemas.showtime import ShowtimeDetail
from cinema_booking.schemas.seat import SeatMapResponse, SeatMapEntry
from cinema_booking.schemas.ticket import AvailabilityResponse
from cinema_booking.schemas.report import AvailableSeatRow, AvailabilitySummaryRow

router = APIRouter(prefix="/showtimes", tags=["Showtimes"])


@router.get("/{showtime_id}", response_model=ShowtimeDetail)
def get_showtime(showtime_id: UUID, db: Session = Depends(get_db)):
    return catalog.get_showtime(db, showtime_id)


# ---------------------------------------------------------------------------
# Seat map
# ---------------------------------------------------------------------------


@router.get("/{showtime_id}/seats", response_model=SeatMapResponse)
def get_seat_map(showtime_id: UUID, db: Session = Depends(get_db)):
    """Every seat of the showtime with its price and ticket status."""
    rows = reporting.seat_map(db, showtime_id)
    return SeatMapResponse(
        showtime_id=showtime_id,
        seats=[SeatMapEntry(**row) for row in rows],
    )


@router.get("/{showtime_id}/seats/available", response_model=List[AvailableSeatRow])
def list_available_seats(showtime_id: UUID, db: Session = Depends(get_db)):
    return reporting.available_seats(db, showtime_id)


@router.get("/{showtime_id}/seats/{seat_id}/availability", response_model=AvailabilityResponse)
def check_seat_availability(showtime_id: UUID, seat_id: UUID, db: Session = Depends(get_db)):
    """
    Advisory check only. It does not hold the seat; the booking request
    gives the authoritative answer.
    """
    return AvailabilityResponse(
        showtime_id=showtime_id,
        seat_id=seat_id,
        available=booking.check_availability(db, showtime_id, seat_id),
    )


@router.get("/{showtime_id}/availability", response_model=AvailabilitySummaryRow)
def get_availability_summary(showtime_id: UUID, db: Session = Depends(get_db)):
    catalog.get_showtime(db, showtime_id)
    return reporting.availability_summary(db, showtime_id=showtime_id)[0]
