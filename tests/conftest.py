import os
from datetime import date, datetime, time, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy.orm import sessionmaker

from cinema_booking.db.base import Base
from cinema_booking.db.session import build_engine, get_db
from cinema_booking.models.seat import SeatClass
from cinema_booking.services import catalog, inventory, schedule

SHOW_DATE = date(2025, 12, 15)
BEFORE_SHOW = datetime(2025, 12, 1, 9, 0)
AFTER_SHOW_START = datetime(2025, 12, 15, 14, 30)


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'cinema.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def venue(db):
    return catalog.create_venue(db, "AMC Downtown", "123 Main St, New York, NY 10001")


@pytest.fixture()
def theatre(db, venue):
    return catalog.create_theatre(db, venue.id, "Screen 1")


@pytest.fixture()
def movie(db):
    return catalog.create_movie(
        db,
        title="The Dark Knight",
        genre="Action",
        duration_minutes=152,
        release_year=2008,
        rating="PG-13",
    )


@pytest.fixture()
def scenario(db, theatre, movie):
    """Theatre with seats A1 (STANDARD) and A2 (VIP) and one showtime 14:00-16:00."""
    a1 = inventory.add_seat(db, theatre.id, "A1", SeatClass.STANDARD)
    a2 = inventory.add_seat(db, theatre.id, "A2", SeatClass.VIP)
    showtime = schedule.schedule_showtime(
        db, movie.id, theatre.id, SHOW_DATE, time(14, 0), time(16, 0)
    )
    return {
        "theatre_id": theatre.id,
        "movie_id": movie.id,
        "showtime_id": showtime.id,
        "a1": a1.id,
        "a2": a2.id,
    }


@pytest.fixture()
def client(session_factory):
    from fastapi.testclient import TestClient
    from cinema_booking.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def future_date():
    return date.today() + timedelta(days=30)
