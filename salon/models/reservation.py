import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, Index

from salon.database import Base


class Reservation(Base):
    """
    A single time-slotted customer booking.
    date and time are kept as ISO strings ("YYYY-MM-DD", "HH:MM") because
    every view orders and compares them lexicographically.
    """
    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    customer_name = Column(String(100), nullable=False, default="")
    customer_phone = Column(String(40), nullable=False, default="")
    date = Column(String(10), nullable=False)
    time = Column(String(5), nullable=False)
    service_type = Column(String(50), nullable=False)
    memo = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index('ix_reservations_date_time', 'date', 'time'),
    )
