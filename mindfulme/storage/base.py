"""Storage interface: one CRUD surface per entity, independent of the backing store."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, ClassVar, Literal

from mindfulme.models import (
    AnonymousRant,
    Appointment,
    AssessmentResponse,
    Course,
    Employee,
    Journal,
    MoodEntry,
    Organization,
    Therapist,
    User,
    WellbeingSurvey,
    WellnessAssessment,
)


class Storage(ABC):
    """
    Persistence adapter used by services and routes.

    Returned objects are detached, request-scoped copies. Missing rows raise
    NotFoundError; duplicate unique keys raise ConflictError.
    """

    kind: ClassVar[Literal["sqlite", "postgresql"]]

    # Lifecycle

    @abstractmethod
    def create_schema(self) -> None: ...

    @abstractmethod
    def check_connection(self) -> bool: ...

    @abstractmethod
    def close(self) -> None: ...

    # Users

    @abstractmethod
    def create_user(
        self,
        email: str,
        password_hash: str,
        display_name: str,
        role: str,
        organization_id: str | None = None,
    ) -> User: ...

    @abstractmethod
    def get_user(self, user_id: str) -> User: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    def update_user(self, user_id: str, **changes: Any) -> User: ...

    @abstractmethod
    def list_users(self) -> list[User]: ...

    # Organizations

    @abstractmethod
    def create_organization(
        self, name: str, code: str, admin_user_id: str | None = None
    ) -> Organization: ...

    @abstractmethod
    def get_organization(self, org_id: str) -> Organization: ...

    @abstractmethod
    def get_organization_by_code(self, code: str) -> Organization | None: ...

    @abstractmethod
    def add_employee(
        self,
        user_id: str,
        org_id: str,
        job_title: str | None = None,
        department: str | None = None,
    ) -> Employee: ...

    @abstractmethod
    def list_employees(self, org_id: str) -> list[Employee]: ...

    # Refresh tokens

    @abstractmethod
    def create_refresh_token(self, user_id: str, expires_at: datetime) -> str: ...

    @abstractmethod
    def consume_refresh_token(self, token: str, now: datetime) -> str:
        """
        Atomically delete `token` and return its user id.

        Raises UnauthorizedError if the token is unknown, expired, or was
        removed by a concurrent caller first.
        """

    @abstractmethod
    def delete_refresh_token(self, token: str) -> bool: ...

    @abstractmethod
    def delete_user_refresh_tokens(self, user_id: str) -> int: ...

    @abstractmethod
    def delete_expired_refresh_tokens(self, now: datetime) -> int: ...

    # Journals

    @abstractmethod
    def create_journal(
        self,
        user_id: str,
        content: str,
        mood_score: int | None = None,
        tags: list[str] | None = None,
        is_private: bool = True,
    ) -> Journal: ...

    @abstractmethod
    def list_journals(self, user_id: str) -> list[Journal]: ...

    @abstractmethod
    def get_journal(self, journal_id: str) -> Journal: ...

    @abstractmethod
    def delete_journal(self, journal_id: str) -> None: ...

    # Mood entries

    @abstractmethod
    def create_mood_entry(
        self, user_id: str, mood_score: int, notes: str | None = None
    ) -> MoodEntry: ...

    @abstractmethod
    def list_mood_entries(
        self, user_id: str, since: datetime | None = None
    ) -> list[MoodEntry]: ...

    @abstractmethod
    def list_mood_entries_for_users(
        self, user_ids: list[str], since: datetime
    ) -> list[MoodEntry]: ...

    # Anonymous rants

    @abstractmethod
    def create_rant(self, content: str, sentiment_score: float) -> AnonymousRant: ...

    @abstractmethod
    def list_rants(self, limit: int = 100) -> list[AnonymousRant]: ...

    @abstractmethod
    def get_rant(self, rant_id: str) -> AnonymousRant: ...

    @abstractmethod
    def support_rant(self, rant_id: str) -> AnonymousRant: ...

    # Therapists and appointments

    @abstractmethod
    def create_therapist(self, **fields: Any) -> Therapist: ...

    @abstractmethod
    def list_therapists(self) -> list[Therapist]: ...

    @abstractmethod
    def get_therapist(self, therapist_id: str) -> Therapist: ...

    @abstractmethod
    def create_appointment(
        self,
        user_id: str,
        therapist_id: str,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        notes: str | None = None,
    ) -> Appointment: ...

    @abstractmethod
    def list_appointments(self, user_id: str) -> list[Appointment]: ...

    @abstractmethod
    def get_appointment(self, appointment_id: str) -> Appointment: ...

    @abstractmethod
    def update_appointment(self, appointment_id: str, **changes: Any) -> Appointment: ...

    # Courses

    @abstractmethod
    def create_course(self, **fields: Any) -> Course: ...

    @abstractmethod
    def list_courses(self) -> list[Course]: ...

    @abstractmethod
    def get_course(self, course_id: str) -> Course: ...

    # Assessments and surveys

    @abstractmethod
    def create_assessment(self, **fields: Any) -> WellnessAssessment: ...

    @abstractmethod
    def list_assessments(self, org_id: str | None = None) -> list[WellnessAssessment]: ...

    @abstractmethod
    def get_assessment(self, assessment_id: str) -> WellnessAssessment: ...

    @abstractmethod
    def create_assessment_response(self, **fields: Any) -> AssessmentResponse: ...

    @abstractmethod
    def list_assessment_responses(
        self, user_id: str, assessment_id: str | None = None
    ) -> list[AssessmentResponse]: ...

    @abstractmethod
    def create_survey(
        self, org_id: str, title: str, questions: list[dict[str, Any]]
    ) -> WellbeingSurvey: ...

    @abstractmethod
    def list_surveys(self, org_id: str) -> list[WellbeingSurvey]: ...
