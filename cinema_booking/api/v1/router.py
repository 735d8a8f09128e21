from fastapi import APIRouter

# Public: showtimes, seat maps, availability
from cinema_booking.api.v1.public.showtimes import router as showtimes_router

# Public: bookings
from cinema_booking.api.v1.public.bookings import (
    router as bookings_router,
    ticket_router,
)

# Admin
from cinema_booking.api.v1.admin.venues import router as venues_router, theatre_router
from cinema_booking.api.v1.admin.movies import router as movies_router
from cinema_booking.api.v1.admin.seats import seats_router, seat_router
from cinema_booking.api.v1.admin.showtimes import (
    router as theatre_showtimes_router,
    showtime_router,
)
from cinema_booking.api.v1.admin.reports import router as reports_router

api_router = APIRouter()

# --- Public: showtimes ---
api_router.include_router(showtimes_router)

# --- Public: bookings ---
api_router.include_router(bookings_router)
api_router.include_router(ticket_router)

# --- Admin ---
api_router.include_router(venues_router)
api_router.include_router(theatre_router)
api_router.include_router(movies_router)
api_router.include_router(seats_router)
api_router.include_router(seat_router)
api_router.include_router(theatre_showtimes_router)
api_router.include_router(showtime_router)
api_router.include_router(reports_router)
