import uuid
from sqlalchemy import Column, String, DateTime, func, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class Venue(Base):
    __tablename__ = "venues"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    address = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    theatres = relationship("Theatre", back_populates="venue", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("name", "address", name="uq_venue_name_address"),
    )
