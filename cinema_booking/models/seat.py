import enum
import uuid
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Enum as SAEnum, Uuid
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class SeatClass(str, enum.Enum):
    STANDARD = "STANDARD"
    PREMIUM = "PREMIUM"
    VIP = "VIP"

class Seat(Base):
    __tablename__ = "seats"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    theatre_id = Column(Uuid, ForeignKey("theatres.id", ondelete="CASCADE"), nullable=False, index=True)
    location = Column(String(10), nullable=False) # e.g. 'A1', 'B2'
    seat_class = Column(SAEnum(SeatClass, native_enum=False), nullable=False, default=SeatClass.STANDARD)

    theatre = relationship("Theatre", back_populates="seats")
    units = relationship("BookableUnit", back_populates="seat", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("theatre_id", "location", name="uq_seat_per_theatre"),
    )

class BookableUnit(Base):
    """One seat for one showtime: the unit of booking contention."""
    __tablename__ = "bookable_units"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    showtime_id = Column(Uuid, ForeignKey("showtimes.id", ondelete="CASCADE"), nullable=False, index=True)
    seat_id = Column(Uuid, ForeignKey("seats.id", ondelete="CASCADE"), nullable=False, index=True)

    showtime = relationship("Showtime", back_populates="units")
    seat = relationship("Seat", back_populates="units")
    ticket = relationship("Ticket", back_populates="unit", uselist=False, cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("showtime_id", "seat_id", name="uq_unit_showtime_seat"),
    )
