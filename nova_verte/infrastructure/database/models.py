"""SQLAlchemy ORM models backing the simulator key-value store"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class SimulatorState(Base):
    """One serialized value per (client session, key)"""

    __tablename__ = "simulator_state"

    namespace = Column(String(128), primary_key=True)
    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
