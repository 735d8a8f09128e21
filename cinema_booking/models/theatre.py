import uuid
from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class Theatre(Base):
    __tablename__ = "theatres"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    venue_id = Column(Uuid, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    # Derived: always the number of installed seats, recomputed by the seat inventory
    capacity = Column(Integer, nullable=False, default=0)

    # Relationships
    venue = relationship("Venue", back_populates="theatres")
    seats = relationship("Seat", back_populates="theatre", cascade="all, delete-orphan")
    showtimes = relationship("Showtime", back_populates="theatre", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("venue_id", "name", name="uq_theatre_per_venue"),
        CheckConstraint("capacity >= 0", name="ck_theatre_capacity"),
    )
