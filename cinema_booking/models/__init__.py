from cinema_booking.models.venue import Venue
from cinema_booking.models.theatre import Theatre
from cinema_booking.models.movie import Movie, MovieRating
from cinema_booking.models.showtime import Showtime
from cinema_booking.models.seat import Seat, SeatClass, BookableUnit
from cinema_booking.models.ticket import Ticket, TicketStatus
