import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import time

from cinema_booking.core.exceptions import AlreadyBookedError, DuplicateSeatError, OverlapError
from cinema_booking.core.locks import theatre_locks, unit_locks
from cinema_booking.models import Showtime, TicketStatus
from cinema_booking.services import booking, catalog, inventory, reporting, schedule

from conftest import BEFORE_SHOW, SHOW_DATE

WORKERS = 8


def _race(session_factory, attempt, workers=WORKERS):
    """Run `attempt(db, i)` in `workers` threads released at the same moment."""
    barrier = threading.Barrier(workers)

    def run(i):
        db = session_factory()
        try:
            barrier.wait()
            return attempt(db, i)
        except Exception as exc:
            return exc
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(run, range(workers)))


def test_exactly_one_concurrent_booking_wins(session_factory, db, scenario):
    def attempt(session, i):
        return booking.book(
            session,
            scenario["showtime_id"],
            scenario["a1"],
            TicketStatus.SOLD,
            f"customer{i}@example.com",
            now=BEFORE_SHOW,
        )

    results = _race(session_factory, attempt)

    winners = [r for r in results if not isinstance(r, Exception)]
    losers = [r for r in results if isinstance(r, Exception)]
    assert len(winners) == 1
    assert len(losers) == WORKERS - 1
    assert all(isinstance(e, AlreadyBookedError) for e in losers)

    db.expire_all()
    ticket = booking.get_unit_ticket(db, scenario["showtime_id"], scenario["a1"])
    assert ticket.status == TicketStatus.SOLD
    assert ticket.customer_email == winners[0].customer_email
    assert len(unit_locks) == 0


def test_mixed_reserve_and_sell_race_has_one_winner(session_factory, db, scenario):
    def attempt(session, i):
        status = TicketStatus.RESERVED if i % 2 else TicketStatus.SOLD
        return booking.book(
            session, scenario["showtime_id"], scenario["a2"], status,
            f"customer{i}@example.com", now=BEFORE_SHOW,
        )

    results = _race(session_factory, attempt)

    assert sum(not isinstance(r, Exception) for r in results) == 1
    booked = reporting.booked_tickets(db, scenario["showtime_id"])
    assert len(booked) == 1


def test_different_seats_book_independently(session_factory, db, scenario):
    seats = [scenario["a1"], scenario["a2"]]

    def attempt(session, i):
        return booking.book(
            session, scenario["showtime_id"], seats[i], TicketStatus.SOLD,
            f"customer{i}@example.com", now=BEFORE_SHOW,
        )

    results = _race(session_factory, attempt, workers=2)

    assert not any(isinstance(r, Exception) for r in results)
    assert reporting.available_seats(db, scenario["showtime_id"]) == []


def test_exactly_one_overlapping_showtime_scheduled(session_factory, db, theatre, movie):
    def attempt(session, i):
        # Every interval overlaps every other one around 13:00
        return schedule.schedule_showtime(
            session, movie.id, theatre.id, SHOW_DATE, time(12, i), time(14, i)
        )

    results = _race(session_factory, attempt)

    winners = [r for r in results if not isinstance(r, Exception)]
    assert len(winners) == 1
    assert all(isinstance(r, OverlapError) for r in results if isinstance(r, Exception))
    assert db.query(Showtime).count() == 1
    assert reporting.overlapping_showtimes(db) == []
    assert len(theatre_locks) == 0


def test_concurrent_seat_installs_keep_capacity_consistent(session_factory, db, theatre, movie):
    schedule.schedule_showtime(db, movie.id, theatre.id, SHOW_DATE, time(10, 0), time(12, 0))

    def attempt(session, i):
        return inventory.add_seat(session, theatre.id, f"R{i}")

    results = _race(session_factory, attempt)

    assert not any(isinstance(r, Exception) for r in results)
    db.expire_all()
    assert catalog.get_theatre(db, theatre.id).capacity == WORKERS

    report = reporting.inventory_consistency(db)[0]
    assert report["seat_count"] == WORKERS
    assert report["unit_count"] == WORKERS
    assert report["consistent"] is True


def test_concurrent_duplicate_seat_installs_one_winner(session_factory, db, theatre):
    def attempt(session, i):
        return inventory.add_seat(session, theatre.id, "D1")

    results = _race(session_factory, attempt)

    assert sum(not isinstance(r, Exception) for r in results) == 1
    assert all(isinstance(r, DuplicateSeatError) for r in results if isinstance(r, Exception))
    db.expire_all()
    assert catalog.get_theatre(db, theatre.id).capacity == 1
