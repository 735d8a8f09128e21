"""Reference data: venues, theatres and movies."""
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cinema_booking.core.exceptions import DuplicateEntityError, InvalidMovieError, NotFoundError
from cinema_booking.core.locks import theatre_locks
from cinema_booking.models.movie import Movie, MovieRating
from cinema_booking.models.seat import Seat
from cinema_booking.models.showtime import Showtime
from cinema_booking.models.theatre import Theatre
from cinema_booking.models.venue import Venue

logger = logging.getLogger(__name__)

MIN_RELEASE_YEAR = 1900
MAX_RELEASE_YEAR = 2100


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def _get_or_raise(db: Session, model, entity: str, entity_id: UUID):
    obj = db.get(model, entity_id)
    if obj is None:
        raise NotFoundError(entity, entity_id)
    return obj


def get_venue(db: Session, venue_id: UUID) -> Venue:
    return _get_or_raise(db, Venue, "Venue", venue_id)


def get_theatre(db: Session, theatre_id: UUID) -> Theatre:
    return _get_or_raise(db, Theatre, "Theatre", theatre_id)


def get_movie(db: Session, movie_id: UUID) -> Movie:
    return _get_or_raise(db, Movie, "Movie", movie_id)


def get_showtime(db: Session, showtime_id: UUID) -> Showtime:
    return _get_or_raise(db, Showtime, "Showtime", showtime_id)


def get_seat(db: Session, seat_id: UUID) -> Seat:
    return _get_or_raise(db, Seat, "Seat", seat_id)


def list_venues(db: Session) -> List[Venue]:
    return db.query(Venue).order_by(Venue.name).all()


def list_theatres(db: Session, venue_id: UUID) -> List[Theatre]:
    get_venue(db, venue_id)
    return db.query(Theatre).filter(Theatre.venue_id == venue_id).order_by(Theatre.name).all()


def list_movies(db: Session, genre: Optional[str] = None) -> List[Movie]:
    query = db.query(Movie)
    if genre:
        query = query.filter(Movie.genre == genre)
    return query.order_by(Movie.title).all()


def list_showtimes(db: Session, theatre_id: UUID, show_date: Optional[date] = None) -> List[Showtime]:
    get_theatre(db, theatre_id)
    query = db.query(Showtime).filter(Showtime.theatre_id == theatre_id)
    if show_date:
        query = query.filter(Showtime.show_date == show_date)
    return query.order_by(Showtime.show_date, Showtime.start_time).all()


def list_seats(db: Session, theatre_id: UUID) -> List[Seat]:
    get_theatre(db, theatre_id)
    return db.query(Seat).filter(Seat.theatre_id == theatre_id).order_by(Seat.location).all()


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


def create_venue(db: Session, name: str, address: str) -> Venue:
    existing = db.query(Venue).filter(Venue.name == name, Venue.address == address).first()
    if existing:
        raise DuplicateEntityError(f"Venue '{name}' at '{address}' already exists")

    venue = Venue(name=name, address=address)
    db.add(venue)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntityError(f"Venue '{name}' at '{address}' already exists")
    db.refresh(venue)
    logger.info("Created venue %s (%s)", venue.id, venue.name)
    return venue


def create_theatre(db: Session, venue_id: UUID, name: str) -> Theatre:
    """Create an empty theatre. Capacity grows as seats are added."""
    get_venue(db, venue_id)
    existing = db.query(Theatre).filter(Theatre.venue_id == venue_id, Theatre.name == name).first()
    if existing:
        raise DuplicateEntityError(f"Theatre '{name}' already exists in venue {venue_id}")

    theatre = Theatre(venue_id=venue_id, name=name, capacity=0)
    db.add(theatre)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntityError(f"Theatre '{name}' already exists in venue {venue_id}")
    db.refresh(theatre)
    logger.info("Created theatre %s (%s) in venue %s", theatre.id, theatre.name, venue_id)
    return theatre


def _validate_movie(duration_minutes: int, release_year: int, rating) -> MovieRating:
    if duration_minutes <= 0:
        raise InvalidMovieError(f"Duration must be positive, got {duration_minutes}")
    if not MIN_RELEASE_YEAR <= release_year <= MAX_RELEASE_YEAR:
        raise InvalidMovieError(
            f"Release year must be between {MIN_RELEASE_YEAR} and {MAX_RELEASE_YEAR}, got {release_year}"
        )
    try:
        return MovieRating(rating)
    except ValueError:
        raise InvalidMovieError(f"Unknown rating '{rating}'")


def create_movie(
    db: Session,
    title: str,
    genre: str,
    duration_minutes: int,
    release_year: int,
    rating,
    description: Optional[str] = None,
) -> Movie:
    rating = _validate_movie(duration_minutes, release_year, rating)
    movie = Movie(
        title=title,
        genre=genre,
        duration_minutes=duration_minutes,
        release_year=release_year,
        rating=rating,
        description=description,
    )
    db.add(movie)
    db.commit()
    db.refresh(movie)
    logger.info("Created movie %s (%s)", movie.id, movie.title)
    return movie


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------


def delete_theatre(db: Session, theatre_id: UUID) -> None:
    """Delete a theatre together with its seats, showtimes, units and tickets."""
    with theatre_locks.hold(theatre_id):
        theatre = get_theatre(db, theatre_id)
        db.delete(theatre)
        db.commit()
    logger.info("Deleted theatre %s", theatre_id)
