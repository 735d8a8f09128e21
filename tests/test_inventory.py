from datetime import time
from decimal import Decimal
from uuid import uuid4

import pytest

from cinema_booking.core.exceptions import DuplicateSeatError, NotFoundError
from cinema_booking.models import BookableUnit, Seat, SeatClass, Ticket, TicketStatus
from cinema_booking.services import catalog, inventory, reporting, schedule

from conftest import SHOW_DATE


def _units_for(db, showtime_id):
    return db.query(BookableUnit).filter(BookableUnit.showtime_id == showtime_id).all()


def test_capacity_follows_seat_count(db, theatre):
    inventory.add_seat(db, theatre.id, "A1")
    inventory.add_seats(db, theatre.id, [("A2", "STANDARD"), ("A3", "VIP")])
    db.refresh(theatre)
    assert theatre.capacity == 3


def test_duplicate_location_rejected(db, theatre):
    inventory.add_seat(db, theatre.id, "A1")
    with pytest.raises(DuplicateSeatError) as exc_info:
        inventory.add_seat(db, theatre.id, "A1", SeatClass.VIP)
    assert exc_info.value.location == "A1"

    db.refresh(theatre)
    assert theatre.capacity == 1


def test_duplicate_location_in_batch_rejected_whole(db, theatre):
    with pytest.raises(DuplicateSeatError):
        inventory.add_seats(db, theatre.id, [("B1", "STANDARD"), ("B2", "VIP"), ("B1", "VIP")])
    assert db.query(Seat).count() == 0


def test_batch_clashing_with_existing_seat_rolls_back(db, theatre):
    inventory.add_seat(db, theatre.id, "B2")
    with pytest.raises(DuplicateSeatError):
        inventory.add_seats(db, theatre.id, [("B1", "STANDARD"), ("B2", "VIP")])
    assert [s.location for s in catalog.list_seats(db, theatre.id)] == ["B2"]


def test_same_location_in_another_theatre_allowed(db, venue, theatre):
    other = catalog.create_theatre(db, venue.id, "Screen 2")
    inventory.add_seat(db, theatre.id, "A1")
    inventory.add_seat(db, other.id, "A1")
    assert db.query(Seat).count() == 2


def test_add_seat_to_missing_theatre(db):
    with pytest.raises(NotFoundError):
        inventory.add_seat(db, uuid4(), "A1")


def test_seats_then_showtime_materializes_units(db, scenario):
    units = _units_for(db, scenario["showtime_id"])
    assert {u.seat_id for u in units} == {scenario["a1"], scenario["a2"]}
    assert all(u.ticket.status == TicketStatus.AVAILABLE for u in units)


def test_showtime_then_seats_materializes_units(db, theatre, movie):
    showtime = schedule.schedule_showtime(db, movie.id, theatre.id, SHOW_DATE, time(10, 0), time(12, 0))
    assert _units_for(db, showtime.id) == []

    seats = inventory.add_seats(db, theatre.id, [("C1", "STANDARD"), ("C2", "PREMIUM")])

    units = _units_for(db, showtime.id)
    assert {u.seat_id for u in units} == {s.id for s in seats}
    prices = {u.seat.location: u.ticket.price for u in units}
    assert prices == {"C1": Decimal("12.00"), "C2": Decimal("18.00")}


def test_new_seat_reaches_every_showtime(db, scenario):
    later = schedule.schedule_showtime(
        db, scenario["movie_id"], scenario["theatre_id"], SHOW_DATE, time(18, 0), time(20, 0)
    )
    seat = inventory.add_seat(db, scenario["theatre_id"], "A3", SeatClass.PREMIUM)

    for showtime_id in (scenario["showtime_id"], later.id):
        assert inventory.resolve_unit(db, showtime_id, seat.id) is not None

    report = reporting.inventory_consistency(db)
    assert report[0]["unit_count"] == 6
    assert report[0]["consistent"] is True


def test_materialize_rejects_seat_from_other_theatre(db, scenario, venue):
    other = catalog.create_theatre(db, venue.id, "Screen 2")
    stray = inventory.add_seat(db, other.id, "Z1")
    showtime = catalog.get_showtime(db, scenario["showtime_id"])

    with pytest.raises(ValueError):
        inventory.materialize_units(db, [showtime], [stray])
    db.rollback()


def test_remove_seat_drops_units_and_capacity(db, scenario):
    inventory.remove_seat(db, scenario["a2"])

    theatre = catalog.get_theatre(db, scenario["theatre_id"])
    assert theatre.capacity == 1
    assert inventory.resolve_unit(db, scenario["showtime_id"], scenario["a2"]) is None
    assert db.query(Ticket).count() == 1


def test_remove_missing_seat(db):
    with pytest.raises(NotFoundError):
        inventory.remove_seat(db, uuid4())
