import logging
from datetime import date, datetime, time, timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cinema_booking.core.exceptions import CinemaBookingError, InvalidIntervalError, OverlapError
from cinema_booking.core.locks import theatre_locks
from cinema_booking.models.seat import Seat
from cinema_booking.models.showtime import Showtime
from cinema_booking.services.catalog import get_movie, get_showtime
from cinema_booking.services.inventory import lock_theatre, materialize_units
from cinema_booking.utils.timeslots import intervals_overlap, is_valid_interval

logger = logging.getLogger(__name__)


def end_time_from_duration(show_date: date, start_time: time, duration_minutes: int) -> time:
    """End of a show that runs for the movie's full duration. Must finish on the same date."""
    ends_at = datetime.combine(show_date, start_time) + timedelta(minutes=duration_minutes)
    if ends_at.date() != show_date:
        raise InvalidIntervalError(start_time, ends_at.time())
    return ends_at.time()


def find_overlap(
    db: Session,
    theatre_id: UUID,
    show_date: date,
    start_time: time,
    end_time: time,
    exclude_showtime_id: Optional[UUID] = None,
) -> Optional[Showtime]:
    """Return the first showtime in the theatre on that date whose interval overlaps, if any."""
    query = db.query(Showtime).filter(
        Showtime.theatre_id == theatre_id,
        Showtime.show_date == show_date,
    )
    if exclude_showtime_id:
        query = query.filter(Showtime.id != exclude_showtime_id)

    for other in query.order_by(Showtime.start_time).all():
        if intervals_overlap(start_time, end_time, other.start_time, other.end_time):
            return other
    return None


def schedule_showtime(
    db: Session,
    movie_id: UUID,
    theatre_id: UUID,
    show_date: date,
    start_time: time,
    end_time: Optional[time] = None,
) -> Showtime:
    """
    Schedule a movie in a theatre.

    When `end_time` is omitted the show runs for the movie's duration.
    On success one bookable unit and one AVAILABLE ticket is created for every
    seat currently installed in the theatre, in the same transaction.
    """
    movie = get_movie(db, movie_id)
    if end_time is None:
        end_time = end_time_from_duration(show_date, start_time, movie.duration_minutes)
    if not is_valid_interval(start_time, end_time):
        raise InvalidIntervalError(start_time, end_time)

    with theatre_locks.hold(theatre_id):
        try:
            lock_theatre(db, theatre_id)

            conflict = find_overlap(db, theatre_id, show_date, start_time, end_time)
            if conflict:
                raise OverlapError(conflict)

            showtime = Showtime(
                movie_id=movie_id,
                theatre_id=theatre_id,
                show_date=show_date,
                start_time=start_time,
                end_time=end_time,
            )
            db.add(showtime)
            db.flush()  # populate showtime.id before referencing it in units

            seats = db.query(Seat).filter(Seat.theatre_id == theatre_id).all()
            units = materialize_units(db, [showtime], seats)

            db.commit()
        except IntegrityError:
            # Same (theatre, date, start) committed by another process
            db.rollback()
            conflict = find_overlap(db, theatre_id, show_date, start_time, end_time)
            if conflict:
                raise OverlapError(conflict)
            raise
        except CinemaBookingError:
            db.rollback()
            raise

    db.refresh(showtime)
    logger.info(
        "Scheduled showtime %s: movie=%s theatre=%s %s %s-%s, units created=%d",
        showtime.id, movie_id, theatre_id, show_date, start_time, end_time, units,
    )
    return showtime


def delete_showtime(db: Session, showtime_id: UUID) -> None:
    """Delete a showtime together with its bookable units and tickets."""
    showtime = get_showtime(db, showtime_id)
    theatre_id = showtime.theatre_id

    with theatre_locks.hold(theatre_id):
        db.delete(showtime)
        db.commit()

    logger.info("Deleted showtime %s from theatre %s", showtime_id, theatre_id)
