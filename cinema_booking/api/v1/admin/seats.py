from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.services import catalog, inventory
from cinema_booking.schemas.common import DeletedResponse
from cinema_booking.schemas.seat import (
    SeatCreate,
    Seat as SeatSchema,
    SeatBulkCreate,
    SeatBulkCreateResponse,
)

seats_router = APIRouter(prefix="/admin/theatres", tags=["Admin - Seats"])
seat_router = APIRouter(prefix="/admin/seats", tags=["Admin - Seats"])


# ---------------------------------------------------------------------------
# Single seat creation
# ---------------------------------------------------------------------------


@seats_router.post(
    "/{theatre_id}/seats",
    response_model=SeatSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_seat(theatre_id: UUID, data: SeatCreate, db: Session = Depends(get_db)):
    """
    Install a seat. The theatre capacity is recomputed and a ticket is
    opened for the seat in every existing showtime of the theatre.
    """
    return inventory.add_seat(db, theatre_id, data.location, data.seat_class)


# ---------------------------------------------------------------------------
# Bulk seat creation
# ---------------------------------------------------------------------------


@seats_router.post(
    "/{theatre_id}/seats/bulk",
    response_model=SeatBulkCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def bulk_create_seats(theatre_id: UUID, data: SeatBulkCreate, db: Session = Depends(get_db)):
    seats = inventory.add_seats(
        db, theatre_id, [(seat.location, seat.seat_class) for seat in data.seats]
    )
    theatre = catalog.get_theatre(db, theatre_id)
    return SeatBulkCreateResponse(
        created_count=len(seats), theatre_id=theatre_id, capacity=theatre.capacity
    )


# ---------------------------------------------------------------------------
# List seats in a theatre
# ---------------------------------------------------------------------------


@seats_router.get("/{theatre_id}/seats", response_model=List[SeatSchema])
def list_seats(theatre_id: UUID, db: Session = Depends(get_db)):
    return catalog.list_seats(db, theatre_id)


# ---------------------------------------------------------------------------
# Delete a single seat
# ---------------------------------------------------------------------------


@seat_router.delete("/{seat_id}", response_model=DeletedResponse)
def delete_seat(seat_id: UUID, db: Session = Depends(get_db)):
    # Units and tickets cascade-delete; capacity is recomputed
    inventory.remove_seat(db, seat_id)
    return DeletedResponse(id=str(seat_id))
