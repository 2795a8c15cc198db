from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.orm import relationship
from flight_dispatch.db.base_class import Base
from datetime import datetime

class Driver(Base):
    __tablename__ = "drivers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    jobs = relationship("Job", back_populates="driver")

    def __repr__(self):
        return f"<Driver {self.name} <{self.email}>>"
