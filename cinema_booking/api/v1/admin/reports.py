from uuid import UUID
from typing import List, Optional
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.models.ticket import TicketStatus
from cinema_booking.services import reporting
from cinema_booking.schemas.report import (
    BookedTicketRow,
    OverlapRow,
    AvailabilitySummaryRow,
    InventoryConsistencyRow,
)

router = APIRouter(prefix="/admin/reports", tags=["Admin - Reports"])


@router.get("/showtimes/{showtime_id}/tickets", response_model=List[BookedTicketRow])
def booked_tickets(
    showtime_id: UUID,
    status: List[TicketStatus] = Query(
        [TicketStatus.SOLD, TicketStatus.RESERVED], description="Ticket statuses to include"
    ),
    db: Session = Depends(get_db),
):
    return reporting.booked_tickets(db, showtime_id, statuses=status)


@router.get("/overlaps", response_model=List[OverlapRow])
def overlapping_showtimes(db: Session = Depends(get_db)):
    """Should always be empty. A non-empty answer means the schedule is corrupt."""
    return reporting.overlapping_showtimes(db)


@router.get("/availability", response_model=List[AvailabilitySummaryRow])
def availability_summary(
    from_date: Optional[date] = Query(None, description="Only showtimes on or after this date"),
    db: Session = Depends(get_db),
):
    return reporting.availability_summary(db, from_date=from_date)


@router.get("/consistency", response_model=List[InventoryConsistencyRow])
def inventory_consistency(db: Session = Depends(get_db)):
    return reporting.inventory_consistency(db)
