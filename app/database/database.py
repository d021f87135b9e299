# app/database/database.py
"""
SQLAlchemy database setup and models.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    create_engine,
)
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker

from app.core.config import DATABASE_URL

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class WorkplaceRecord(Base):
    """Workplace with wage, allowance and differential settings."""

    __tablename__ = "workplaces"

    id = Column(String(36), primary_key=True)
    name = Column(String(100), nullable=False)
    color = Column(String(9), nullable=False)
    hourly_wage = Column(Float, nullable=False)
    transportation_allowance = Column(Float, default=0.0, nullable=False)
    address = Column(String(255), nullable=True)
    priority = Column(Integer, default=0, nullable=False, index=True)
    travel_time_minutes = Column(Integer, default=0, nullable=False)
    night_shift_rate = Column(Float, nullable=False)
    holiday_rate = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    def __repr__(self):
        return f"<WorkplaceRecord(id={self.id}, name={self.name}, priority={self.priority})>"


class ShiftRecord(Base):
    """
    Shift model.

    workplace_id is a plain column without a foreign key; shifts may
    outlive their workplace.
    """

    __tablename__ = "shifts"

    id = Column(String(36), primary_key=True)
    workplace_id = Column(String(36), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    break_minutes = Column(Integer, default=0, nullable=False)
    memo = Column(Text, nullable=True)
    is_confirmed = Column(Boolean, default=False, nullable=False)
    recurrence_type = Column(String(20), nullable=True)
    recurrence_end_date = Column(Date, nullable=True)
    actual_start_time = Column(DateTime, nullable=True)
    actual_end_time = Column(DateTime, nullable=True)
    actual_break_minutes = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    def __repr__(self):
        return f"<ShiftRecord(id={self.id}, workplace_id={self.workplace_id}, date={self.date})>"


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
