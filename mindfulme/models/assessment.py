"""ORM models for wellness assessments, their responses and organization surveys."""

from sqlalchemy import JSON, Boolean, Column, Float, ForeignKey, String

from mindfulme.models.base import Base, UTCDateTime, new_id, utcnow


class WellnessAssessment(Base):
    """
    Questionnaire. questions is a list of
    {id, question, type: scale|multiple-choice|text, options?, category}.
    """

    __tablename__ = "wellness_assessments"

    id = Column(String(36), primary_key=True, default=new_id)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    org_id = Column(String(36), ForeignKey("organizations.id"), nullable=True, index=True)
    assessment_type = Column(String(32), nullable=False)
    title = Column(String(255), nullable=False)
    questions = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)


class AssessmentResponse(Base):
    __tablename__ = "assessment_responses"

    id = Column(String(36), primary_key=True, default=new_id)
    assessment_id = Column(
        String(36), ForeignKey("wellness_assessments.id"), nullable=False, index=True
    )
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    responses = Column(JSON, nullable=False, default=dict)
    total_score = Column(Float, nullable=False, default=0.0)
    category_scores = Column(JSON, nullable=False, default=dict)
    recommendations = Column(JSON, nullable=False, default=list)
    completed_at = Column(UTCDateTime(), nullable=False, default=utcnow)


class WellbeingSurvey(Base):
    __tablename__ = "wellbeing_surveys"

    id = Column(String(36), primary_key=True, default=new_id)
    org_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    questions = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)
