from uuid import uuid4

import pytest

from cinema_booking.core.exceptions import DuplicateEntityError, InvalidMovieError, NotFoundError
from cinema_booking.models.movie import MovieRating
from cinema_booking.services import catalog


def test_new_theatre_starts_empty(theatre):
    assert theatre.capacity == 0


def test_duplicate_venue_rejected(db, venue):
    with pytest.raises(DuplicateEntityError):
        catalog.create_venue(db, venue.name, venue.address)


def test_same_venue_name_at_other_address_allowed(db, venue):
    other = catalog.create_venue(db, venue.name, "456 Oak Ave, Los Angeles, CA 90001")
    assert other.id != venue.id


def test_duplicate_theatre_name_in_venue_rejected(db, theatre):
    with pytest.raises(DuplicateEntityError):
        catalog.create_theatre(db, theatre.venue_id, "Screen 1")


def test_same_theatre_name_in_other_venue_allowed(db, theatre):
    other_venue = catalog.create_venue(db, "Regal Cinema", "789 Pine Rd, Chicago, IL 60601")
    other = catalog.create_theatre(db, other_venue.id, "Screen 1")
    assert other.venue_id == other_venue.id


def test_theatre_in_missing_venue_rejected(db):
    with pytest.raises(NotFoundError):
        catalog.create_theatre(db, uuid4(), "Screen 9")


def test_create_movie_stores_rating(movie):
    assert movie.rating == MovieRating.PG_13
    assert movie.rating.value == "PG-13"


@pytest.mark.parametrize(
    "duration, year, rating",
    [
        (0, 2010, "PG"),
        (120, 1899, "PG"),
        (120, 2101, "PG"),
        (120, 2010, "X"),
    ],
)
def test_create_movie_rejects_invalid_fields(db, duration, year, rating):
    with pytest.raises(InvalidMovieError):
        catalog.create_movie(db, "Bad", "Drama", duration, year, rating)


def test_lookups_raise_not_found(db):
    for lookup in (
        catalog.get_venue,
        catalog.get_theatre,
        catalog.get_movie,
        catalog.get_showtime,
        catalog.get_seat,
    ):
        with pytest.raises(NotFoundError):
            lookup(db, uuid4())


def test_list_theatres_for_venue(db, venue, theatre):
    catalog.create_theatre(db, venue.id, "IMAX")
    names = [t.name for t in catalog.list_theatres(db, venue.id)]
    assert names == ["IMAX", "Screen 1"]


def test_list_movies_filters_by_genre(db, movie):
    catalog.create_movie(db, "Toy Story 4", "Animation", 100, 2019, "G")
    assert [m.title for m in catalog.list_movies(db, genre="Animation")] == ["Toy Story 4"]
    assert len(catalog.list_movies(db)) == 2
