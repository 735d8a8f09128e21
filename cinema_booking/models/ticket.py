import enum
import uuid
from sqlalchemy import Column, String, DateTime, DECIMAL, ForeignKey, CheckConstraint, Index, Enum as SAEnum, Uuid
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class TicketStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    SOLD = "SOLD"

class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    bookable_unit_id = Column(
        Uuid, ForeignKey("bookable_units.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    status = Column(SAEnum(TicketStatus, native_enum=False), nullable=False, default=TicketStatus.AVAILABLE, index=True)
    price = Column(DECIMAL(6, 2), nullable=False)
    purchased_at = Column(DateTime, nullable=True)
    customer_email = Column(String(100), nullable=True)

    unit = relationship("BookableUnit", back_populates="ticket")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_ticket_price"),
        Index("ix_ticket_unit_status", "bookable_unit_id", "status"),
    )
