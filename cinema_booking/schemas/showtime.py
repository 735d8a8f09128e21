from typing import Optional
from pydantic import BaseModel, UUID4, model_validator
from datetime import date, time


# Showtime: Create (POST /admin/theatres/{id}/showtimes)
class ShowtimeCreate(BaseModel):
    movie_id: UUID4
    show_date: date
    start_time: time
    end_time: Optional[time] = None  # omit to run for the movie's duration


# Showtime: DB response
class Showtime(BaseModel):
    id: UUID4
    movie_id: UUID4
    theatre_id: UUID4
    show_date: date
    start_time: time
    end_time: time

    class Config:
        from_attributes = True


class ShowtimeDetail(Showtime):
    movie_title: str
    theatre_name: str
    unit_count: int = 0

    @model_validator(mode="before")
    @classmethod
    def flatten_relations(cls, data):
        if hasattr(data, "movie") and hasattr(data, "theatre"):
            return {
                "id": data.id,
                "movie_id": data.movie_id,
                "theatre_id": data.theatre_id,
                "show_date": data.show_date,
                "start_time": data.start_time,
                "end_time": data.end_time,
                "movie_title": data.movie.title,
                "theatre_name": data.theatre.name,
                "unit_count": len(data.units),
            }
        return data
