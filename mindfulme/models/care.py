"""ORM models for the care catalogue: therapists, appointments and courses."""

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Text

from mindfulme.models.base import Base, UTCDateTime, new_id


class Therapist(Base):
    __tablename__ = "therapists"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    specialization = Column(String(255), nullable=True)
    license_number = Column(String(64), nullable=True)
    profile_url = Column(Text, nullable=True)
    rating = Column(Float, nullable=False, default=0.0)
    availability = Column(JSON, nullable=False, default=dict)


class Appointment(Base):
    """Booking. status: pending, confirmed, completed or cancelled."""

    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=new_id)
    therapist_id = Column(String(36), ForeignKey("therapists.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    start_time = Column(UTCDateTime(), nullable=True)
    end_time = Column(UTCDateTime(), nullable=True)
    status = Column(String(16), nullable=False, default="pending")
    notes = Column(Text, nullable=True)


class Course(Base):
    __tablename__ = "courses"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    difficulty = Column(String(32), nullable=True)
    thumbnail_url = Column(Text, nullable=True)
    modules = Column(JSON, nullable=False, default=dict)
