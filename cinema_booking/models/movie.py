import enum
import uuid
from sqlalchemy import Column, String, Integer, Text, CheckConstraint, Index, Enum as SAEnum, Uuid
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class MovieRating(str, enum.Enum):
    G = "G"
    PG = "PG"
    PG_13 = "PG-13"
    R = "R"
    NC_17 = "NC-17"

class Movie(Base):
    __tablename__ = "movies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False, index=True)
    genre = Column(String(50), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    release_year = Column(Integer, nullable=False)
    rating = Column(
        SAEnum(MovieRating, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    description = Column(Text, nullable=True)

    # Relationships
    showtimes = relationship("Showtime", back_populates="movie", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="ck_movie_duration"),
        CheckConstraint("release_year >= 1900 AND release_year <= 2100", name="ck_movie_release_year"),
        CheckConstraint("rating IN ('G', 'PG', 'PG-13', 'R', 'NC-17')", name="ck_movie_rating"),
        Index("ix_movie_genre_year", "genre", "release_year"),
    )
