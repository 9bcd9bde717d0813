"""SQLAlchemy ORM models."""

from mindfulme.models.assessment import AssessmentResponse, WellbeingSurvey, WellnessAssessment
from mindfulme.models.base import Base
from mindfulme.models.care import Appointment, Course, Therapist
from mindfulme.models.refresh_token import RefreshToken
from mindfulme.models.user import Employee, Organization, User
from mindfulme.models.wellness import AnonymousRant, Journal, MoodEntry

__all__ = [
    "AnonymousRant",
    "Appointment",
    "AssessmentResponse",
    "Base",
    "Course",
    "Employee",
    "Journal",
    "MoodEntry",
    "Organization",
    "RefreshToken",
    "Therapist",
    "User",
    "WellbeingSurvey",
    "WellnessAssessment",
]
