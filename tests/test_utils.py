import threading
import time as clock
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import pytest

from cinema_booking.core.locks import KeyedLocks
from cinema_booking.models.seat import SeatClass
from cinema_booking.utils.pricing import price_for_seat_class
from cinema_booking.utils.timeslots import (
    intervals_overlap,
    is_valid_interval,
    local_now,
    showtime_has_started,
)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((time(14), time(16)), (time(15), time(17)), True),
        ((time(14), time(16)), (time(16), time(18)), False),
        ((time(14), time(16)), (time(13), time(14)), False),
        ((time(14), time(16)), (time(14, 30), time(15)), True),
        ((time(14), time(16)), (time(10), time(12)), False),
    ],
)
def test_intervals_overlap(a, b, expected):
    assert intervals_overlap(*a, *b) is expected
    assert intervals_overlap(*b, *a) is expected


def test_is_valid_interval():
    assert is_valid_interval(time(14), time(16))
    assert not is_valid_interval(time(16), time(14))
    assert not is_valid_interval(time(14), time(14))


def test_showtime_has_started():
    show_date, start = date(2025, 12, 15), time(14, 0)
    assert not showtime_has_started(show_date, start, datetime(2025, 12, 15, 13, 59))
    assert not showtime_has_started(show_date, start, datetime(2025, 12, 15, 14, 0))
    assert showtime_has_started(show_date, start, datetime(2025, 12, 15, 14, 1))


def test_seat_class_prices():
    assert price_for_seat_class(SeatClass.STANDARD) == Decimal("12.00")
    assert price_for_seat_class("PREMIUM") == Decimal("18.00")
    assert price_for_seat_class(SeatClass.VIP) == Decimal("25.00")
    assert price_for_seat_class("BALCONY") == Decimal("12.00")


def test_keyed_locks_serialize_same_key():
    locks = KeyedLocks("test")
    inside = []
    overlaps = []

    def worker():
        with locks.hold("k"):
            inside.append(1)
            if len(inside) > 1:
                overlaps.append(1)
            clock.sleep(0.01)
            inside.pop()

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert overlaps == []
    assert len(locks) == 0


def test_keyed_locks_independent_keys():
    locks = KeyedLocks("test")
    with locks.hold("a"):
        acquired = threading.Event()

        def other():
            with locks.hold("b"):
                acquired.set()

        t = threading.Thread(target=other)
        t.start()
        assert acquired.wait(timeout=1)
        t.join()
        assert len(locks) == 1
    assert len(locks) == 0


def test_keyed_locks_release_on_error():
    locks = KeyedLocks("test")
    with pytest.raises(RuntimeError):
        with locks.hold("k"):
            raise RuntimeError("boom")
    assert len(locks) == 0
    with locks.hold("k"):
        pass


def test_settings_database_url():
    from cinema_booking.core.config import Settings, settings

    assert settings.DATABASE_URL == "sqlite://"
    assert settings.uses_postgres is False

    explicit = Settings(DATABASE_URL="postgresql://u:p@db:5432/cinema")
    assert explicit.assemble_db_url() == "postgresql://u:p@db:5432/cinema"
    assert explicit.uses_postgres is True


def test_local_now_drops_timezone():
    naive = datetime(2025, 12, 1, 9, 0)
    assert local_now(naive) == naive

    aware = datetime(2025, 12, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    converted = local_now(aware)
    assert converted.tzinfo is None
    assert converted == aware.astimezone().replace(tzinfo=None)

    assert local_now().tzinfo is None
