from uuid import UUID
from typing import List, Optional
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.services import catalog, schedule
from cinema_booking.schemas.common import DeletedResponse
from cinema_booking.schemas.showtime import ShowtimeCreate, Showtime as ShowtimeSchema

router = APIRouter(prefix="/admin/theatres", tags=["Admin - Showtimes"])
showtime_router = APIRouter(prefix="/admin/showtimes", tags=["Admin - Showtimes"])


@router.post(
    "/{theatre_id}/showtimes",
    response_model=ShowtimeSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_showtime(theatre_id: UUID, data: ShowtimeCreate, db: Session = Depends(get_db)):
    """
    Schedule a movie in a theatre.

    Rejected with 409 if it overlaps another showtime of the theatre on the
    same date. Showtimes that only touch (one ends when the next starts) are fine.
    """
    return schedule.schedule_showtime(
        db,
        movie_id=data.movie_id,
        theatre_id=theatre_id,
        show_date=data.show_date,
        start_time=data.start_time,
        end_time=data.end_time,
    )


@router.get("/{theatre_id}/showtimes", response_model=List[ShowtimeSchema])
def list_showtimes(
    theatre_id: UUID,
    show_date: Optional[date] = Query(None, description="Filter by date"),
    db: Session = Depends(get_db),
):
    return catalog.list_showtimes(db, theatre_id, show_date=show_date)


@showtime_router.delete("/{showtime_id}", response_model=DeletedResponse)
def delete_showtime(showtime_id: UUID, db: Session = Depends(get_db)):
    schedule.delete_showtime(db, showtime_id)
    return DeletedResponse(id=str(showtime_id))
