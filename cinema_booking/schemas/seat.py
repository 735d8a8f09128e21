from typing import List
from pydantic import BaseModel, Field, UUID4
from decimal import Decimal

from cinema_booking.models.seat import SeatClass
from cinema_booking.models.ticket import TicketStatus


# Seat: base fields
class SeatBase(BaseModel):
    location: str = Field(min_length=1, max_length=10)
    seat_class: SeatClass = SeatClass.STANDARD


class SeatCreate(SeatBase):
    pass


class Seat(SeatBase):
    id: UUID4
    theatre_id: UUID4

    class Config:
        from_attributes = True


# Bulk seat creation (POST /admin/theatres/{id}/seats/bulk)
class SeatBulkCreate(BaseModel):
    seats: List[SeatCreate] = Field(min_length=1)


class SeatBulkCreateResponse(BaseModel):
    created_count: int
    theatre_id: UUID4
    capacity: int


# --- Seat map (per showtime) ---

class SeatMapEntry(BaseModel):
    seat_id: UUID4
    location: str
    seat_class: SeatClass
    price: Decimal
    status: TicketStatus


class SeatMapResponse(BaseModel):
    showtime_id: UUID4
    seats: List[SeatMapEntry]
