"""ORM models for personal wellness data: journals, mood entries and anonymous rants."""

from sqlalchemy import JSON, Boolean, Column, Float, ForeignKey, Integer, String, Text

from mindfulme.models.base import Base, UTCDateTime, new_id, utcnow


class Journal(Base):
    __tablename__ = "journals"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    mood_score = Column(Integer, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    is_private = Column(Boolean, nullable=False, default=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    mood_score = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)


class AnonymousRant(Base):
    """
    Anonymous post. There is deliberately no user/author column: the author
    cannot be recovered from storage.
    """

    __tablename__ = "anonymous_rants"

    id = Column(String(36), primary_key=True, default=new_id)
    content = Column(Text, nullable=False)
    sentiment_score = Column(Float, nullable=False, default=0.0)
    support_count = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
