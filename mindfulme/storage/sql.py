"""SQLAlchemy implementation of the Storage interface, shared by the SQLite and Postgres backends."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import Engine, or_, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from mindfulme.core.errors import ConflictError, NotFoundError, UnauthorizedError
from mindfulme.core.security import new_refresh_token
from mindfulme.models import (
    AnonymousRant,
    Appointment,
    AssessmentResponse,
    Base,
    Course,
    Employee,
    Journal,
    MoodEntry,
    Organization,
    RefreshToken,
    Therapist,
    User,
    WellbeingSurvey,
    WellnessAssessment,
)
from mindfulme.storage.base import Storage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"


class SqlStorage(Storage):
    """
    Storage backed by a SQLAlchemy engine.

    Each public method runs in its own short session/transaction. Objects are
    returned detached (expire_on_commit=False) so routes can serialize them.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessionmaker = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._sessionmaker()
        try:
            yield db
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Resource already exists") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _get_or_404(self, db: Session, model: type[ModelT], obj_id: str, label: str) -> ModelT:
        obj = db.get(model, obj_id)
        if obj is None:
            raise NotFoundError(f"{label} not found")
        return obj

    def _add(self, obj: ModelT) -> ModelT:
        with self._session() as db:
            db.add(obj)
            db.flush()
        return obj

    # Lifecycle

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def check_connection(self) -> bool:
        """Run a trivial query to verify the database is reachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.warning("Database connectivity check failed", exc_info=True)
            return False

    def close(self) -> None:
        self.engine.dispose()

    # Users

    def create_user(
        self,
        email: str,
        password_hash: str,
        display_name: str,
        role: str,
        organization_id: str | None = None,
    ) -> User:
        email = email.strip().lower()
        with self._session() as db:
            if db.query(User).filter(User.email == email).first() is not None:
                raise ConflictError("User already exists")
            user = User(
                email=email,
                password_hash=password_hash,
                display_name=display_name,
                role=role,
                organization_id=organization_id,
                preferences={},
            )
            db.add(user)
            db.flush()
        return user

    def get_user(self, user_id: str) -> User:
        with self._session() as db:
            return self._get_or_404(db, User, user_id, "User")

    def get_user_by_email(self, email: str) -> User | None:
        with self._session() as db:
            return db.query(User).filter(User.email == email.strip().lower()).first()

    def update_user(self, user_id: str, **changes: Any) -> User:
        if "email" in changes and changes["email"] is not None:
            changes["email"] = changes["email"].strip().lower()
        with self._session() as db:
            user = self._get_or_404(db, User, user_id, "User")
            new_email = changes.get("email")
            if new_email and new_email != user.email:
                taken = db.query(User).filter(User.email == new_email).first()
                if taken is not None:
                    raise ConflictError("Email already in use")
            for key, value in changes.items():
                setattr(user, key, value)
            db.flush()
        return user

    def list_users(self) -> list[User]:
        with self._session() as db:
            return db.query(User).order_by(User.created_at, User.id).all()

    # Organizations

    def create_organization(
        self, name: str, code: str, admin_user_id: str | None = None
    ) -> Organization:
        with self._session() as db:
            if db.query(Organization).filter(Organization.code == code).first() is not None:
                raise ConflictError("Organization code already in use")
            org = Organization(
                name=name,
                code=code,
                admin_user_id=admin_user_id,
                settings={"allowAnonymousRants": True, "requireMoodCheckins": False},
            )
            db.add(org)
            db.flush()
        return org

    def get_organization(self, org_id: str) -> Organization:
        with self._session() as db:
            return self._get_or_404(db, Organization, org_id, "Organization")

    def get_organization_by_code(self, code: str) -> Organization | None:
        with self._session() as db:
            return db.query(Organization).filter(Organization.code == code).first()

    def add_employee(
        self,
        user_id: str,
        org_id: str,
        job_title: str | None = None,
        department: str | None = None,
    ) -> Employee:
        with self._session() as db:
            self._get_or_404(db, User, user_id, "User")
            self._get_or_404(db, Organization, org_id, "Organization")
            employee = Employee(
                user_id=user_id,
                org_id=org_id,
                job_title=job_title,
                department=department,
            )
            db.add(employee)
            db.flush()
        return employee

    def list_employees(self, org_id: str) -> list[Employee]:
        with self._session() as db:
            return (
                db.query(Employee)
                .filter(Employee.org_id == org_id)
                .order_by(Employee.department, Employee.id)
                .all()
            )

    # Refresh tokens

    def create_refresh_token(self, user_id: str, expires_at: datetime) -> str:
        token = new_refresh_token()
        self._add(RefreshToken(token=token, user_id=user_id, expires_at=expires_at))
        return token

    def consume_refresh_token(self, token: str, now: datetime) -> str:
        with self._session() as db:
            row = db.get(RefreshToken, token)
            if row is None:
                user_id, expires_at, deleted = None, None, 0
            else:
                user_id, expires_at = row.user_id, row.expires_at
                # The DELETE decides the winner when two callers race on one token.
                deleted = (
                    db.query(RefreshToken)
                    .filter(RefreshToken.token == token)
                    .delete(synchronize_session=False)
                )
        if user_id is None or deleted == 0:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)
        if expires_at <= now:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)
        return user_id

    def delete_refresh_token(self, token: str) -> bool:
        with self._session() as db:
            deleted = (
                db.query(RefreshToken)
                .filter(RefreshToken.token == token)
                .delete(synchronize_session=False)
            )
        return deleted > 0

    def delete_user_refresh_tokens(self, user_id: str) -> int:
        with self._session() as db:
            return (
                db.query(RefreshToken)
                .filter(RefreshToken.user_id == user_id)
                .delete(synchronize_session=False)
            )

    def delete_expired_refresh_tokens(self, now: datetime) -> int:
        with self._session() as db:
            return (
                db.query(RefreshToken)
                .filter(RefreshToken.expires_at <= now)
                .delete(synchronize_session=False)
            )

    # Journals

    def create_journal(
        self,
        user_id: str,
        content: str,
        mood_score: int | None = None,
        tags: list[str] | None = None,
        is_private: bool = True,
    ) -> Journal:
        return self._add(
            Journal(
                user_id=user_id,
                content=content,
                mood_score=mood_score,
                tags=list(tags or []),
                is_private=is_private,
            )
        )

    def list_journals(self, user_id: str) -> list[Journal]:
        with self._session() as db:
            return (
                db.query(Journal)
                .filter(Journal.user_id == user_id)
                .order_by(Journal.created_at.desc(), Journal.id)
                .all()
            )

    def get_journal(self, journal_id: str) -> Journal:
        with self._session() as db:
            return self._get_or_404(db, Journal, journal_id, "Journal")

    def delete_journal(self, journal_id: str) -> None:
        with self._session() as db:
            journal = self._get_or_404(db, Journal, journal_id, "Journal")
            db.delete(journal)

    # Mood entries

    def create_mood_entry(
        self, user_id: str, mood_score: int, notes: str | None = None
    ) -> MoodEntry:
        return self._add(MoodEntry(user_id=user_id, mood_score=mood_score, notes=notes))

    def list_mood_entries(
        self, user_id: str, since: datetime | None = None
    ) -> list[MoodEntry]:
        with self._session() as db:
            query = db.query(MoodEntry).filter(MoodEntry.user_id == user_id)
            if since is not None:
                query = query.filter(MoodEntry.created_at >= since)
            return query.order_by(MoodEntry.created_at.desc(), MoodEntry.id).all()

    def list_mood_entries_for_users(
        self, user_ids: list[str], since: datetime
    ) -> list[MoodEntry]:
        if not user_ids:
            return []
        with self._session() as db:
            return (
                db.query(MoodEntry)
                .filter(MoodEntry.user_id.in_(user_ids), MoodEntry.created_at >= since)
                .order_by(MoodEntry.created_at)
                .all()
            )

    # Anonymous rants

    def create_rant(self, content: str, sentiment_score: float) -> AnonymousRant:
        return self._add(
            AnonymousRant(content=content, sentiment_score=sentiment_score, support_count=0)
        )

    def list_rants(self, limit: int = 100) -> list[AnonymousRant]:
        with self._session() as db:
            return (
                db.query(AnonymousRant)
                .order_by(AnonymousRant.created_at.desc(), AnonymousRant.id)
                .limit(limit)
                .all()
            )

    def get_rant(self, rant_id: str) -> AnonymousRant:
        with self._session() as db:
            return self._get_or_404(db, AnonymousRant, rant_id, "Rant")

    def support_rant(self, rant_id: str) -> AnonymousRant:
        with self._session() as db:
            result = db.execute(
                update(AnonymousRant)
                .where(AnonymousRant.id == rant_id)
                .values(support_count=AnonymousRant.support_count + 1)
            )
            if result.rowcount == 0:
                raise NotFoundError("Rant not found")
        return self.get_rant(rant_id)

    # Therapists and appointments

    def create_therapist(self, **fields: Any) -> Therapist:
        return self._add(Therapist(**fields))

    def list_therapists(self) -> list[Therapist]:
        with self._session() as db:
            return db.query(Therapist).order_by(Therapist.rating.desc(), Therapist.name).all()

    def get_therapist(self, therapist_id: str) -> Therapist:
        with self._session() as db:
            return self._get_or_404(db, Therapist, therapist_id, "Therapist")

    def create_appointment(
        self,
        user_id: str,
        therapist_id: str,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        notes: str | None = None,
    ) -> Appointment:
        with self._session() as db:
            self._get_or_404(db, Therapist, therapist_id, "Therapist")
            appointment = Appointment(
                user_id=user_id,
                therapist_id=therapist_id,
                start_time=start_time,
                end_time=end_time,
                notes=notes,
                status="pending",
            )
            db.add(appointment)
            db.flush()
        return appointment

    def list_appointments(self, user_id: str) -> list[Appointment]:
        with self._session() as db:
            return (
                db.query(Appointment)
                .filter(Appointment.user_id == user_id)
                .order_by(Appointment.start_time, Appointment.id)
                .all()
            )

    def get_appointment(self, appointment_id: str) -> Appointment:
        with self._session() as db:
            return self._get_or_404(db, Appointment, appointment_id, "Appointment")

    def update_appointment(self, appointment_id: str, **changes: Any) -> Appointment:
        with self._session() as db:
            appointment = self._get_or_404(db, Appointment, appointment_id, "Appointment")
            for key, value in changes.items():
                setattr(appointment, key, value)
            db.flush()
        return appointment

    # Courses

    def create_course(self, **fields: Any) -> Course:
        return self._add(Course(**fields))

    def list_courses(self) -> list[Course]:
        with self._session() as db:
            return db.query(Course).order_by(Course.title).all()

    def get_course(self, course_id: str) -> Course:
        with self._session() as db:
            return self._get_or_404(db, Course, course_id, "Course")

    # Assessments and surveys

    def create_assessment(self, **fields: Any) -> WellnessAssessment:
        return self._add(WellnessAssessment(**fields))

    def list_assessments(self, org_id: str | None = None) -> list[WellnessAssessment]:
        with self._session() as db:
            scope = WellnessAssessment.org_id.is_(None)
            if org_id is not None:
                scope = or_(scope, WellnessAssessment.org_id == org_id)
            return (
                db.query(WellnessAssessment)
                .filter(WellnessAssessment.is_active.is_(True), scope)
                .order_by(WellnessAssessment.created_at, WellnessAssessment.id)
                .all()
            )

    def get_assessment(self, assessment_id: str) -> WellnessAssessment:
        with self._session() as db:
            return self._get_or_404(db, WellnessAssessment, assessment_id, "Assessment")

    def create_assessment_response(self, **fields: Any) -> AssessmentResponse:
        with self._session() as db:
            self._get_or_404(db, WellnessAssessment, fields["assessment_id"], "Assessment")
            response = AssessmentResponse(**fields)
            db.add(response)
            db.flush()
        return response

    def list_assessment_responses(
        self, user_id: str, assessment_id: str | None = None
    ) -> list[AssessmentResponse]:
        with self._session() as db:
            query = db.query(AssessmentResponse).filter(AssessmentResponse.user_id == user_id)
            if assessment_id is not None:
                query = query.filter(AssessmentResponse.assessment_id == assessment_id)
            return query.order_by(
                AssessmentResponse.completed_at.desc(), AssessmentResponse.id
            ).all()

    def create_survey(
        self, org_id: str, title: str, questions: list[dict[str, Any]]
    ) -> WellbeingSurvey:
        with self._session() as db:
            self._get_or_404(db, Organization, org_id, "Organization")
            survey = WellbeingSurvey(org_id=org_id, title=title, questions=questions)
            db.add(survey)
            db.flush()
        return survey

    def list_surveys(self, org_id: str) -> list[WellbeingSurvey]:
        with self._session() as db:
            return (
                db.query(WellbeingSurvey)
                .filter(WellbeingSurvey.org_id == org_id)
                .order_by(WellbeingSurvey.created_at.desc(), WellbeingSurvey.id)
                .all()
            )
