import uuid
from datetime import datetime
from sqlalchemy import Column, Date, Time, ForeignKey, UniqueConstraint, CheckConstraint, Index, Uuid
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class Showtime(Base):
    __tablename__ = "showtimes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    movie_id = Column(Uuid, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    theatre_id = Column(Uuid, ForeignKey("theatres.id", ondelete="CASCADE"), nullable=False, index=True)
    show_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    # Relationships
    movie = relationship("Movie", back_populates="showtimes")
    theatre = relationship("Theatre", back_populates="showtimes")
    units = relationship("BookableUnit", back_populates="showtime", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("theatre_id", "show_date", "start_time", name="uq_theatre_showtime"),
        CheckConstraint("end_time > start_time", name="ck_showtime_interval"),
        Index("ix_showtime_theatre_date", "theatre_id", "show_date", "start_time"),
    )

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.show_date, self.start_time)
