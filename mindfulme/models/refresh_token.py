"""ORM model for rotating refresh tokens."""

from sqlalchemy import Column, ForeignKey, String

from mindfulme.models.base import Base, UTCDateTime


class RefreshToken(Base):
    """One row per live session. Deleted on rotation or logout."""

    __tablename__ = "refresh_tokens"

    token = Column(String(128), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    expires_at = Column(UTCDateTime(), nullable=False, index=True)
