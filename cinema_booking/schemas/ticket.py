from typing import Optional
from pydantic import BaseModel, EmailStr, UUID4, field_validator
from decimal import Decimal
from datetime import datetime

from cinema_booking.models.ticket import TicketStatus


# Booking: Create (POST /showtimes/{id}/bookings)
class BookingCreate(BaseModel):
    seat_id: UUID4
    status: TicketStatus = TicketStatus.SOLD
    customer_email: EmailStr

    @field_validator("status")
    @classmethod
    def must_be_booked_status(cls, v):
        if v == TicketStatus.AVAILABLE:
            raise ValueError("status must be RESERVED or SOLD")
        return v


class Ticket(BaseModel):
    id: UUID4
    bookable_unit_id: UUID4
    status: TicketStatus
    price: Decimal
    purchased_at: Optional[datetime] = None
    customer_email: Optional[str] = None

    class Config:
        from_attributes = True


class AvailabilityResponse(BaseModel):
    showtime_id: UUID4
    seat_id: UUID4
    available: bool
