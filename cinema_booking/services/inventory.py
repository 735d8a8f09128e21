"""
Seat inventory: seats per theatre and the bookable units that pair every
seat with every showtime of its theatre.

Units are materialized whichever side arrives last, so loading seats before
showtimes or showtimes before seats ends in the same set of units.
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cinema_booking.core.exceptions import CinemaBookingError, DuplicateSeatError, NotFoundError
from cinema_booking.core.locks import theatre_locks
from cinema_booking.models.seat import BookableUnit, Seat, SeatClass
from cinema_booking.models.showtime import Showtime
from cinema_booking.models.theatre import Theatre
from cinema_booking.models.ticket import Ticket, TicketStatus
from cinema_booking.utils.pricing import price_for_seat_class

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def lock_theatre(db: Session, theatre_id: UUID) -> Theatre:
    """Load a theatre row for structural mutation (SELECT ... FOR UPDATE where supported)."""
    theatre = db.query(Theatre).filter(Theatre.id == theatre_id).with_for_update().first()
    if not theatre:
        raise NotFoundError("Theatre", theatre_id)
    return theatre


def recompute_capacity(db: Session, theatre: Theatre) -> int:
    """Set capacity to the live seat count. Must run while the theatre lock is held."""
    db.flush()
    theatre.capacity = (
        db.query(func.count(Seat.id)).filter(Seat.theatre_id == theatre.id).scalar()
    )
    return theatre.capacity


def materialize_units(db: Session, showtimes: Iterable[Showtime], seats: Sequence[Seat]) -> int:
    """Insert a BookableUnit and an AVAILABLE Ticket for every (showtime, seat) pair."""
    created = 0
    for showtime in showtimes:
        for seat in seats:
            if seat.theatre_id != showtime.theatre_id:
                raise ValueError(
                    f"Seat {seat.id} is not in the theatre of showtime {showtime.id}"
                )
            unit = BookableUnit(showtime_id=showtime.id, seat_id=seat.id)
            unit.ticket = Ticket(
                status=TicketStatus.AVAILABLE,
                price=price_for_seat_class(seat.seat_class),
            )
            db.add(unit)
            created += 1
    return created


def resolve_unit(db: Session, showtime_id: UUID, seat_id: UUID) -> Optional[BookableUnit]:
    return (
        db.query(BookableUnit)
        .filter(BookableUnit.showtime_id == showtime_id, BookableUnit.seat_id == seat_id)
        .first()
    )


# ---------------------------------------------------------------------------
# Seat creation
# ---------------------------------------------------------------------------


def add_seat(db: Session, theatre_id: UUID, location: str, seat_class=SeatClass.STANDARD) -> Seat:
    return add_seats(db, theatre_id, [(location, seat_class)])[0]


def add_seats(db: Session, theatre_id: UUID, seat_specs: Sequence[Tuple[str, object]]) -> List[Seat]:
    """
    Install seats in a theatre, all or nothing.

    - Rejects a location that already exists in the theatre, or appears twice in the batch.
    - Recomputes the theatre capacity from the seat count.
    - Materializes units and AVAILABLE tickets for every existing showtime of the theatre.
    """
    specs = [(location, SeatClass(seat_class)) for location, seat_class in seat_specs]

    seen = set()
    for location, _ in specs:
        if location in seen:
            raise DuplicateSeatError(theatre_id, location)
        seen.add(location)

    with theatre_locks.hold(theatre_id):
        try:
            theatre = lock_theatre(db, theatre_id)

            existing = (
                db.query(Seat.location)
                .filter(Seat.theatre_id == theatre_id, Seat.location.in_(list(seen)))
                .first()
            )
            if existing:
                raise DuplicateSeatError(theatre_id, existing.location)

            seats = [
                Seat(theatre_id=theatre_id, location=location, seat_class=seat_class)
                for location, seat_class in specs
            ]
            db.add_all(seats)
            db.flush()  # populate seat ids before referencing them in units

            showtimes = db.query(Showtime).filter(Showtime.theatre_id == theatre_id).all()
            units = materialize_units(db, showtimes, seats)
            capacity = recompute_capacity(db, theatre)

            db.commit()
        except IntegrityError:
            # Another process installed one of these locations first
            db.rollback()
            raise DuplicateSeatError(theatre_id, ", ".join(sorted(seen)))
        except CinemaBookingError:
            db.rollback()
            raise

    logger.info(
        "Added %d seat(s) to theatre %s: capacity=%d, units created=%d",
        len(seats), theatre_id, capacity, units,
    )
    return seats


# ---------------------------------------------------------------------------
# Seat removal
# ---------------------------------------------------------------------------


def remove_seat(db: Session, seat_id: UUID) -> None:
    """Remove a seat with its units and tickets, then recompute the theatre capacity."""
    seat = db.get(Seat, seat_id)
    if not seat:
        raise NotFoundError("Seat", seat_id)
    theatre_id = seat.theatre_id

    with theatre_locks.hold(theatre_id):
        try:
            theatre = lock_theatre(db, theatre_id)
            db.delete(seat)
            capacity = recompute_capacity(db, theatre)
            db.commit()
        except CinemaBookingError:
            db.rollback()
            raise

    logger.info("Removed seat %s from theatre %s: capacity=%d", seat_id, theatre_id, capacity)
