from uuid import UUID
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.services import catalog
from cinema_booking.schemas.movie import MovieCreate, Movie as MovieSchema

router = APIRouter(prefix="/admin/movies", tags=["Admin - Movies"])


@router.post("/", response_model=MovieSchema, status_code=status.HTTP_201_CREATED)
def create_movie(data: MovieCreate, db: Session = Depends(get_db)):
    return catalog.create_movie(db, **data.model_dump())


@router.get("/", response_model=List[MovieSchema])
def list_movies(
    genre: Optional[str] = Query(None, description="Filter by genre"),
    db: Session = Depends(get_db),
):
    return catalog.list_movies(db, genre=genre)


@router.get("/{movie_id}", response_model=MovieSchema)
def get_movie(movie_id: UUID, db: Session = Depends(get_db)):
    return catalog.get_movie(db, movie_id)
