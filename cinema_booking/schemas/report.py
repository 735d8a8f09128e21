from typing import Optional
from pydantic import BaseModel, UUID4
from decimal import Decimal
from datetime import date, datetime, time

from cinema_booking.models.seat import SeatClass
from cinema_booking.models.ticket import TicketStatus


class BookedTicketRow(BaseModel):
    ticket_id: UUID4
    showtime_id: UUID4
    seat_id: UUID4
    location: str
    status: TicketStatus
    price: Decimal
    customer_email: Optional[str] = None
    purchased_at: Optional[datetime] = None
    movie_title: str
    show_date: date
    start_time: time


class OverlapRow(BaseModel):
    showtime1_id: UUID4
    showtime2_id: UUID4
    theatre_id: UUID4
    show_date: date
    movie1_title: str
    start1: time
    end1: time
    movie2_title: str
    start2: time
    end2: time


class AvailableSeatRow(BaseModel):
    seat_id: UUID4
    location: str
    seat_class: SeatClass
    price: Decimal


class AvailabilitySummaryRow(BaseModel):
    showtime_id: UUID4
    movie_title: str
    theatre_name: str
    venue_name: str
    show_date: date
    start_time: time
    available_count: int
    total_capacity: int
    availability_percentage: float


class InventoryConsistencyRow(BaseModel):
    theatre_id: UUID4
    theatre_name: str
    capacity: int
    seat_count: int
    showtime_count: int
    unit_count: int
    expected_unit_count: int
    consistent: bool
