"""
Booking engine: the ticket state machine for one bookable unit.

    AVAILABLE -> RESERVED -> SOLD
    AVAILABLE -> SOLD
    RESERVED  -> AVAILABLE   (cancellation)
    SOLD      -> AVAILABLE   (refund)

Every transition holds the unit's lock, reads the ticket FOR UPDATE and
writes with a conditional UPDATE on the expected status, inside one
transaction. Exactly one of any number of concurrent callers can move a
ticket out of a given status; the rest see the new status and fail.

Structural deletes (seat, showtime, theatre) take the theatre lock, not the
unit lock, so a unit can vanish between lookup and write. Every read after
the lookup goes back to the store and reports a vanished unit as
UnitNotFoundError.
"""
import logging
from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from cinema_booking.core.exceptions import (
    AlreadyBookedError,
    InvalidTransitionError,
    NotFoundError,
    PastShowtimeError,
    UnitNotFoundError,
)
from cinema_booking.core.locks import unit_locks
from cinema_booking.models.seat import BookableUnit, Seat
from cinema_booking.models.showtime import Showtime
from cinema_booking.models.ticket import Ticket, TicketStatus
from cinema_booking.services.inventory import resolve_unit
from cinema_booking.utils.pricing import price_for_seat_class
from cinema_booking.utils.timeslots import local_now, showtime_has_started

logger = logging.getLogger(__name__)

BOOKED_STATUSES = frozenset({TicketStatus.RESERVED, TicketStatus.SOLD})

TRANSITIONS = {
    TicketStatus.AVAILABLE: frozenset({TicketStatus.RESERVED, TicketStatus.SOLD}),
    TicketStatus.RESERVED: frozenset({TicketStatus.SOLD, TicketStatus.AVAILABLE}),
    TicketStatus.SOLD: frozenset({TicketStatus.AVAILABLE}),
}


def can_transition(from_status: TicketStatus, to_status: TicketStatus) -> bool:
    return to_status in TRANSITIONS.get(from_status, frozenset())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_unit(db: Session, showtime_id: UUID, seat_id: UUID) -> BookableUnit:
    unit = resolve_unit(db, showtime_id, seat_id)
    if unit is None:
        raise UnitNotFoundError(showtime_id, seat_id)
    return unit


def _require_showtime(db: Session, unit: BookableUnit) -> Showtime:
    showtime = db.get(Showtime, unit.showtime_id, populate_existing=True)
    if showtime is None:
        raise UnitNotFoundError(unit.showtime_id, unit.seat_id)
    return showtime


def _lock_ticket(db: Session, unit: BookableUnit) -> Ticket:
    """Read the unit's ticket FOR UPDATE, creating an AVAILABLE one if the unit has none."""
    ticket = (
        db.query(Ticket)
        .filter(Ticket.bookable_unit_id == unit.id)
        .with_for_update()
        .populate_existing()
        .one_or_none()
    )
    if ticket is None:
        # No ticket may also mean the unit itself was deleted with its seat or showtime
        seat = (
            db.query(Seat)
            .join(BookableUnit, BookableUnit.seat_id == Seat.id)
            .filter(BookableUnit.id == unit.id)
            .populate_existing()
            .one_or_none()
        )
        if seat is None:
            raise UnitNotFoundError(unit.showtime_id, unit.seat_id)
        ticket = Ticket(
            bookable_unit_id=unit.id,
            status=TicketStatus.AVAILABLE,
            price=price_for_seat_class(seat.seat_class),
        )
        db.add(ticket)
        db.flush()
    return ticket


def _compare_and_set(db: Session, ticket: Ticket, expected: TicketStatus, values: Dict) -> bool:
    """UPDATE the ticket only if its status is still `expected`. Returns whether it applied."""
    updated = (
        db.query(Ticket)
        .filter(Ticket.id == ticket.id, Ticket.status == expected)
        .update(values, synchronize_session="fetch")
    )
    return updated == 1


def _current_status(db: Session, ticket: Ticket, unit: BookableUnit) -> TicketStatus:
    """Status the losing conditional UPDATE ran into. A deleted ticket means a deleted unit."""
    status = db.query(Ticket.status).filter(Ticket.id == ticket.id).scalar()
    if status is None:
        raise UnitNotFoundError(unit.showtime_id, unit.seat_id)
    return status


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def check_availability(db: Session, showtime_id: UUID, seat_id: UUID) -> bool:
    """
    Advisory, lock-free availability check.

    False when the seat is not part of the showtime's theatre (no unit exists).
    A unit without a ticket counts as available. This is not a hold: callers
    must still call `book` and accept its answer.
    """
    row = (
        db.query(BookableUnit.id, Ticket.status)
        .outerjoin(Ticket, Ticket.bookable_unit_id == BookableUnit.id)
        .filter(BookableUnit.showtime_id == showtime_id, BookableUnit.seat_id == seat_id)
        .first()
    )
    if row is None:
        return False
    return row.status is None or row.status == TicketStatus.AVAILABLE


def get_ticket(db: Session, ticket_id: UUID) -> Ticket:
    ticket = db.get(Ticket, ticket_id)
    if ticket is None:
        raise NotFoundError("Ticket", ticket_id)
    return ticket


def get_unit_ticket(db: Session, showtime_id: UUID, seat_id: UUID) -> Ticket:
    unit = _require_unit(db, showtime_id, seat_id)
    if unit.ticket is None:
        raise NotFoundError("Ticket for unit", unit.id)
    return unit.ticket


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def book(
    db: Session,
    showtime_id: UUID,
    seat_id: UUID,
    target_status,
    customer_email: str,
    now: Optional[datetime] = None,
) -> Ticket:
    """
    Move an AVAILABLE ticket to RESERVED or SOLD for `customer_email`.

    Checks, in order:
      - the (showtime, seat) pair has a bookable unit   -> UnitNotFoundError
      - the showtime has not started yet                -> PastShowtimeError
      - the ticket is AVAILABLE                          -> AlreadyBookedError

    This is the only way a ticket leaves AVAILABLE.
    """
    target_status = TicketStatus(target_status)
    if not can_transition(TicketStatus.AVAILABLE, target_status):
        raise InvalidTransitionError(TicketStatus.AVAILABLE, target_status)
    now = local_now(now)

    with unit_locks.hold((showtime_id, seat_id)):
        try:
            unit = _require_unit(db, showtime_id, seat_id)
            showtime = _require_showtime(db, unit)
            if showtime_has_started(showtime.show_date, showtime.start_time, now):
                raise PastShowtimeError(showtime)

            ticket = _lock_ticket(db, unit)
            if ticket.status != TicketStatus.AVAILABLE:
                raise AlreadyBookedError(showtime_id, seat_id, ticket.status)

            applied = _compare_and_set(
                db,
                ticket,
                expected=TicketStatus.AVAILABLE,
                values={
                    "status": target_status,
                    "purchased_at": now,
                    "customer_email": customer_email,
                },
            )
            if not applied:
                raise AlreadyBookedError(showtime_id, seat_id, _current_status(db, ticket, unit))

            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(ticket)
    logger.info(
        "Ticket %s for showtime %s seat %s: AVAILABLE -> %s (%s)",
        ticket.id, showtime_id, seat_id, target_status.value, customer_email,
    )
    return ticket


def confirm_reservation(
    db: Session,
    showtime_id: UUID,
    seat_id: UUID,
    now: Optional[datetime] = None,
) -> Ticket:
    """RESERVED -> SOLD for the customer who holds the reservation."""
    now = local_now(now)

    with unit_locks.hold((showtime_id, seat_id)):
        try:
            unit = _require_unit(db, showtime_id, seat_id)
            showtime = _require_showtime(db, unit)
            if showtime_has_started(showtime.show_date, showtime.start_time, now):
                raise PastShowtimeError(showtime)

            ticket = _lock_ticket(db, unit)
            if ticket.status != TicketStatus.RESERVED:
                raise InvalidTransitionError(ticket.status, TicketStatus.SOLD)

            applied = _compare_and_set(
                db,
                ticket,
                expected=TicketStatus.RESERVED,
                values={"status": TicketStatus.SOLD, "purchased_at": now},
            )
            if not applied:
                raise InvalidTransitionError(_current_status(db, ticket, unit), TicketStatus.SOLD)

            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(ticket)
    logger.info("Ticket %s for showtime %s seat %s: RESERVED -> SOLD", ticket.id, showtime_id, seat_id)
    return ticket


def _release(db: Session, showtime_id: UUID, seat_id: UUID, expected: TicketStatus) -> Ticket:
    with unit_locks.hold((showtime_id, seat_id)):
        try:
            unit = _require_unit(db, showtime_id, seat_id)
            ticket = _lock_ticket(db, unit)
            if ticket.status != expected:
                raise InvalidTransitionError(ticket.status, TicketStatus.AVAILABLE)

            applied = _compare_and_set(
                db,
                ticket,
                expected=expected,
                values={
                    "status": TicketStatus.AVAILABLE,
                    "purchased_at": None,
                    "customer_email": None,
                },
            )
            if not applied:
                raise InvalidTransitionError(
                    _current_status(db, ticket, unit), TicketStatus.AVAILABLE
                )

            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(ticket)
    logger.info(
        "Ticket %s for showtime %s seat %s: %s -> AVAILABLE",
        ticket.id, showtime_id, seat_id, expected.value,
    )
    return ticket


def cancel_reservation(db: Session, showtime_id: UUID, seat_id: UUID) -> Ticket:
    """RESERVED -> AVAILABLE."""
    return _release(db, showtime_id, seat_id, TicketStatus.RESERVED)


def refund_ticket(db: Session, showtime_id: UUID, seat_id: UUID) -> Ticket:
    """SOLD -> AVAILABLE."""
    return _release(db, showtime_id, seat_id, TicketStatus.SOLD)
