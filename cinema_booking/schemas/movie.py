from typing import Optional
from pydantic import BaseModel, Field, UUID4

from cinema_booking.models.movie import MovieRating


class MovieBase(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    genre: str = Field(min_length=1, max_length=50)
    duration_minutes: int = Field(gt=0)
    release_year: int = Field(ge=1900, le=2100)
    rating: MovieRating
    description: Optional[str] = None


class MovieCreate(MovieBase):
    pass


class Movie(MovieBase):
    id: UUID4

    class Config:
        from_attributes = True
