from uuid import UUID
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.services import catalog
from cinema_booking.schemas.common import DeletedResponse
from cinema_booking.schemas.venue import (
    VenueCreate,
    Venue as VenueSchema,
    VenueWithTheatres,
    TheatreCreate,
    Theatre as TheatreSchema,
)

router = APIRouter(prefix="/admin/venues", tags=["Admin - Venues"])
theatre_router = APIRouter(prefix="/admin/theatres", tags=["Admin - Theatres"])


# ---------------------------------------------------------------------------
# Venues
# ---------------------------------------------------------------------------


@router.post("/", response_model=VenueSchema, status_code=status.HTTP_201_CREATED)
def create_venue(data: VenueCreate, db: Session = Depends(get_db)):
    return catalog.create_venue(db, name=data.name, address=data.address)


@router.get("/", response_model=List[VenueSchema])
def list_venues(db: Session = Depends(get_db)):
    return catalog.list_venues(db)


@router.get("/{venue_id}", response_model=VenueWithTheatres)
def get_venue(venue_id: UUID, db: Session = Depends(get_db)):
    return catalog.get_venue(db, venue_id)


# ---------------------------------------------------------------------------
# Theatres (nested under venues for create/list)
# ---------------------------------------------------------------------------


@router.post(
    "/{venue_id}/theatres",
    response_model=TheatreSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_theatre(venue_id: UUID, data: TheatreCreate, db: Session = Depends(get_db)):
    """Create an empty theatre. Its capacity follows the seats installed later."""
    return catalog.create_theatre(db, venue_id=venue_id, name=data.name)


@router.get("/{venue_id}/theatres", response_model=List[TheatreSchema])
def list_theatres(venue_id: UUID, db: Session = Depends(get_db)):
    return catalog.list_theatres(db, venue_id)


@theatre_router.get("/{theatre_id}", response_model=TheatreSchema)
def get_theatre(theatre_id: UUID, db: Session = Depends(get_db)):
    return catalog.get_theatre(db, theatre_id)


@theatre_router.delete("/{theatre_id}", response_model=DeletedResponse)
def delete_theatre(theatre_id: UUID, db: Session = Depends(get_db)):
    # Seats, showtimes, units and tickets cascade-delete with the theatre
    catalog.delete_theatre(db, theatre_id)
    return DeletedResponse(id=str(theatre_id))
