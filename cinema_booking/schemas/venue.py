from typing import List
from pydantic import BaseModel, Field, UUID4
from datetime import datetime


# Theatre Schemas
class TheatreCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)


class Theatre(BaseModel):
    id: UUID4
    venue_id: UUID4
    name: str
    capacity: int  # derived from installed seats, never set directly

    class Config:
        from_attributes = True


# Venue Schemas
class VenueBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    address: str = Field(min_length=1, max_length=255)


class VenueCreate(VenueBase):
    pass


class Venue(VenueBase):
    id: UUID4
    created_at: datetime

    class Config:
        from_attributes = True


class VenueWithTheatres(Venue):
    theatres: List[Theatre] = []

    class Config:
        from_attributes = True
