"""ORM models for users, organizations and employee associations."""

from sqlalchemy import JSON, Boolean, Column, Float, ForeignKey, Integer, String, Text

from mindfulme.models.base import Base, UTCDateTime, new_id, utcnow


class User(Base):
    """
    User account for authentication and role-based access control.

    role: 'individual', 'manager' or 'admin'. Users are soft-disabled via
    is_active and never hard-deleted.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(50), nullable=False)
    role = Column(String(32), nullable=False, default="individual")
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=True, index=True)
    avatar_url = Column(Text, nullable=True)
    timezone = Column(String(64), nullable=False, default="UTC")
    preferences = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)


class Organization(Base):
    """Tenant. `code` is the shared secret that gates self-registration."""

    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    code = Column(String(64), nullable=False, unique=True, index=True)
    admin_user_id = Column(String(36), nullable=True)
    settings = Column(JSON, nullable=False, default=dict)
    wellness_score = Column(Float, nullable=False, default=0.0)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)


class Employee(Base):
    """Association of a user with an organization, exposed to managers only by anonymized_id."""

    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    org_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    job_title = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)
    anonymized_id = Column(String(36), nullable=False, unique=True, default=new_id)
    wellness_streak = Column(Integer, nullable=False, default=0)
