import uuid

from sqlalchemy import Column, Integer, String, UniqueConstraint

from salon.database import Base


class ServiceType(Base):
    __tablename__ = "service_types"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(50), nullable=False)
    order = Column(Integer, nullable=False)

    # A second concurrent seed run fails here instead of duplicating options
    __table_args__ = (
        UniqueConstraint('name', name='uq_service_type_name'),
    )
