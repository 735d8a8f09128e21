"""
Read-only reports over the inventory.

Every seat-level figure goes through BookableUnit, the single join point
between showtimes and seats, so per-showtime counts never fan out.
"""
from datetime import date
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import and_, case, func, or_
from sqlalchemy.orm import Session, aliased

from cinema_booking.models.movie import Movie
from cinema_booking.models.seat import BookableUnit, Seat
from cinema_booking.models.showtime import Showtime
from cinema_booking.models.theatre import Theatre
from cinema_booking.models.ticket import Ticket, TicketStatus
from cinema_booking.models.venue import Venue
from cinema_booking.services.booking import BOOKED_STATUSES
from cinema_booking.services.catalog import get_showtime
from cinema_booking.utils.pricing import price_for_seat_class


def booked_tickets(
    db: Session,
    showtime_id: UUID,
    statuses: Iterable[TicketStatus] = BOOKED_STATUSES,
) -> List[Dict]:
    """Tickets for a showtime in the given statuses (sold and reserved by default)."""
    get_showtime(db, showtime_id)
    statuses = [TicketStatus(s) for s in statuses]

    rows = (
        db.query(
            Ticket.id.label("ticket_id"),
            BookableUnit.showtime_id,
            Seat.id.label("seat_id"),
            Seat.location,
            Ticket.status,
            Ticket.price,
            Ticket.customer_email,
            Ticket.purchased_at,
            Movie.title.label("movie_title"),
            Showtime.show_date,
            Showtime.start_time,
        )
        .join(BookableUnit, BookableUnit.id == Ticket.bookable_unit_id)
        .join(Seat, Seat.id == BookableUnit.seat_id)
        .join(Showtime, Showtime.id == BookableUnit.showtime_id)
        .join(Movie, Movie.id == Showtime.movie_id)
        .filter(BookableUnit.showtime_id == showtime_id, Ticket.status.in_(statuses))
        .order_by(Seat.location)
        .all()
    )
    return [dict(row._mapping) for row in rows]


def overlapping_showtimes(db: Session) -> List[Dict]:
    """
    Pairs of showtimes in the same theatre and date whose intervals overlap.

    Always empty while the scheduling invariant holds; use it as a consistency check.
    """
    s1 = aliased(Showtime)
    s2 = aliased(Showtime)
    m1 = aliased(Movie)
    m2 = aliased(Movie)

    rows = (
        db.query(
            s1.id.label("showtime1_id"),
            s2.id.label("showtime2_id"),
            s1.theatre_id,
            s1.show_date,
            m1.title.label("movie1_title"),
            s1.start_time.label("start1"),
            s1.end_time.label("end1"),
            m2.title.label("movie2_title"),
            s2.start_time.label("start2"),
            s2.end_time.label("end2"),
        )
        .join(
            s2,
            and_(
                s1.theatre_id == s2.theatre_id,
                s1.show_date == s2.show_date,
                s1.id < s2.id,
            ),
        )
        .join(m1, m1.id == s1.movie_id)
        .join(m2, m2.id == s2.movie_id)
        .filter(s1.start_time < s2.end_time, s1.end_time > s2.start_time)
        .all()
    )
    return [dict(row._mapping) for row in rows]


def available_seats(db: Session, showtime_id: UUID) -> List[Dict]:
    """Seats still AVAILABLE for a showtime, with their ticket price."""
    get_showtime(db, showtime_id)

    rows = (
        db.query(
            Seat.id.label("seat_id"),
            Seat.location,
            Seat.seat_class,
            Ticket.price,
        )
        .select_from(BookableUnit)
        .join(Seat, Seat.id == BookableUnit.seat_id)
        .outerjoin(Ticket, Ticket.bookable_unit_id == BookableUnit.id)
        .filter(
            BookableUnit.showtime_id == showtime_id,
            or_(Ticket.id.is_(None), Ticket.status == TicketStatus.AVAILABLE),
        )
        .order_by(Seat.location)
        .all()
    )

    result = []
    for row in rows:
        entry = dict(row._mapping)
        if entry["price"] is None:
            entry["price"] = price_for_seat_class(row.seat_class)
        result.append(entry)
    return result


def availability_percentage(available_count: int, total_capacity: int) -> float:
    if not total_capacity:
        return 0.0
    return round(available_count / total_capacity * 100, 1)


def availability_summary(
    db: Session,
    from_date: Optional[date] = None,
    showtime_id: Optional[UUID] = None,
) -> List[Dict]:
    """Available seat count against theatre capacity, per showtime."""
    is_available = and_(
        BookableUnit.id.isnot(None),
        or_(Ticket.id.is_(None), Ticket.status == TicketStatus.AVAILABLE),
    )

    query = (
        db.query(
            Showtime.id.label("showtime_id"),
            Movie.title.label("movie_title"),
            Theatre.name.label("theatre_name"),
            Venue.name.label("venue_name"),
            Showtime.show_date,
            Showtime.start_time,
            func.count(case((is_available, 1))).label("available_count"),
            Theatre.capacity.label("total_capacity"),
        )
        .join(Movie, Movie.id == Showtime.movie_id)
        .join(Theatre, Theatre.id == Showtime.theatre_id)
        .join(Venue, Venue.id == Theatre.venue_id)
        .outerjoin(BookableUnit, BookableUnit.showtime_id == Showtime.id)
        .outerjoin(Ticket, Ticket.bookable_unit_id == BookableUnit.id)
    )
    if from_date:
        query = query.filter(Showtime.show_date >= from_date)
    if showtime_id:
        query = query.filter(Showtime.id == showtime_id)

    rows = (
        query.group_by(
            Showtime.id,
            Movie.title,
            Theatre.name,
            Venue.name,
            Showtime.show_date,
            Showtime.start_time,
            Theatre.capacity,
        )
        .order_by(Showtime.show_date, Showtime.start_time)
        .all()
    )

    result = []
    for row in rows:
        entry = dict(row._mapping)
        entry["availability_percentage"] = availability_percentage(
            row.available_count, row.total_capacity
        )
        result.append(entry)
    return result


def inventory_consistency(db: Session) -> List[Dict]:
    """
    Per theatre: stored capacity against the live seat count, and bookable
    units against showtimes x seats. `consistent` is False if either drifts.
    """
    seat_counts = dict(
        db.query(Seat.theatre_id, func.count(Seat.id)).group_by(Seat.theatre_id).all()
    )
    showtime_counts = dict(
        db.query(Showtime.theatre_id, func.count(Showtime.id)).group_by(Showtime.theatre_id).all()
    )
    unit_counts = dict(
        db.query(Showtime.theatre_id, func.count(BookableUnit.id))
        .join(BookableUnit, BookableUnit.showtime_id == Showtime.id)
        .group_by(Showtime.theatre_id)
        .all()
    )

    theatres = (
        db.query(Theatre.id, Theatre.name, Theatre.capacity).order_by(Theatre.name).all()
    )

    result = []
    for theatre in theatres:
        seats = seat_counts.get(theatre.id, 0)
        showtimes = showtime_counts.get(theatre.id, 0)
        units = unit_counts.get(theatre.id, 0)
        result.append({
            "theatre_id": theatre.id,
            "theatre_name": theatre.name,
            "capacity": theatre.capacity,
            "seat_count": seats,
            "showtime_count": showtimes,
            "unit_count": units,
            "expected_unit_count": seats * showtimes,
            "consistent": theatre.capacity == seats and units == seats * showtimes,
        })
    return result


def seat_map(db: Session, showtime_id: UUID) -> List[Dict]:
    """Every seat of the showtime's theatre with its ticket price and status."""
    get_showtime(db, showtime_id)

    rows = (
        db.query(
            Seat.id.label("seat_id"),
            Seat.location,
            Seat.seat_class,
            Ticket.price,
            Ticket.status,
        )
        .select_from(BookableUnit)
        .join(Seat, Seat.id == BookableUnit.seat_id)
        .outerjoin(Ticket, Ticket.bookable_unit_id == BookableUnit.id)
        .filter(BookableUnit.showtime_id == showtime_id)
        .order_by(Seat.location)
        .all()
    )

    result = []
    for row in rows:
        entry = dict(row._mapping)
        if entry["price"] is None:
            entry["price"] = price_for_seat_class(row.seat_class)
        if entry["status"] is None:
            entry["status"] = TicketStatus.AVAILABLE
        result.append(entry)
    return result
