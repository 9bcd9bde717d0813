"""
Load demo data into an empty or partly seeded database. Safe to re-run.
  python -m mindfulme.scripts.seed

Demo logins (password in parentheses):
  admin@foryourmind.com (admin123), manager@techcorp.com (manager123),
  john@techcorp.com (employee123). Organization code: TECHCORP-2024.
"""

import logging
import sys
from datetime import UTC, datetime

from dotenv import load_dotenv

from mindfulme.core.config import load_settings
from mindfulme.core.security import hash_password
from mindfulme.models import Organization
from mindfulme.services.sentiment import score_content
from mindfulme.storage import Storage, create_storage

logger = logging.getLogger(__name__)

DEMO_ORG_NAME = "TechCorp Inc."
DEMO_ORG_CODE = "TECHCORP-2024"

DEMO_USERS = [
    ("admin@foryourmind.com", "admin123", "Admin User", "admin"),
    ("manager@techcorp.com", "manager123", "Sarah Johnson", "manager"),
    ("john@techcorp.com", "employee123", "John Smith", "individual"),
]

DEMO_THERAPISTS = [
    {
        "name": "Dr. Sarah Chen",
        "specialization": "Anxiety & Stress",
        "license_number": "PSY-001234",
        "rating": 4.9,
        "availability": {"status": "available", "nextSlot": "today"},
    },
    {
        "name": "Dr. Michael Rodriguez",
        "specialization": "Depression & Mood",
        "license_number": "PSY-005678",
        "rating": 4.8,
        "availability": {"status": "busy", "nextSlot": "2pm"},
    },
]

DEMO_COURSE = {
    "title": "Mindful Breathing Basics",
    "description": "Learn fundamental breathing techniques for stress relief",
    "duration_minutes": 15,
    "difficulty": "Beginner",
    "modules": {"count": 5, "completed": 0},
}

DEMO_RANTS = [
    "Feeling completely overwhelmed with the workload. Management keeps piling on more "
    "tasks without considering our bandwidth. It's affecting my sleep and personal life. "
    "Just needed to get this out somewhere safe.",
    "The breathing exercises have really helped me during stressful meetings. "
    "Grateful for this platform!",
]

COMPREHENSIVE_TITLE = "Comprehensive Wellness Assessment"


def _scale(qid: str, question: str, options: list[str], category: str) -> dict:
    return {"id": qid, "question": question, "type": "scale", "options": options, "category": category}


COMPREHENSIVE_QUESTIONS = [
    _scale("stress-level", "How would you rate your current stress level?",
           ["Very Low", "Low", "Moderate", "High", "Very High"], "Stress Management"),
    _scale("sleep-quality", "How would you describe your sleep quality over the past week?",
           ["Poor", "Fair", "Good", "Very Good", "Excellent"], "Sleep & Rest"),
    _scale("work-life-balance", "How satisfied are you with your work-life balance?",
           ["Very Dissatisfied", "Dissatisfied", "Neutral", "Satisfied", "Very Satisfied"],
           "Work-Life Balance"),
    _scale("social-support", "How strong is your social support network?",
           ["Very Weak", "Weak", "Moderate", "Strong", "Very Strong"], "Social Support"),
    _scale("physical-activity", "How often do you engage in physical activity?",
           ["Never", "Rarely", "Sometimes", "Often", "Very Often"], "Physical Health"),
    _scale("emotional-regulation", "How well can you manage your emotions?",
           ["Poorly", "Below Average", "Average", "Above Average", "Excellent"],
           "Emotional Regulation"),
    _scale("mindfulness-practice", "How often do you practice mindfulness or meditation?",
           ["Never", "Rarely", "Sometimes", "Often", "Daily"], "Mindfulness"),
    _scale("goal-clarity", "How clear are you about your personal and professional goals?",
           ["Not Clear", "Somewhat Clear", "Moderately Clear", "Very Clear", "Extremely Clear"],
           "Goal Setting"),
    _scale("energy-levels", "How would you describe your energy levels during the day?",
           ["Very Low", "Low", "Moderate", "High", "Very High"], "Energy & Vitality"),
    _scale("overall-wellbeing", "Overall, how would you rate your current wellbeing?",
           ["Poor", "Fair", "Good", "Very Good", "Excellent"], "Overall Wellbeing"),
]


def seed(storage: Storage, bcrypt_rounds: int) -> dict[str, int]:
    """Insert whatever demo rows are missing. Returns counts of rows created per kind."""
    created = {"organizations": 0, "users": 0, "therapists": 0, "courses": 0, "assessments": 0, "rants": 0}

    org: Organization | None = storage.get_organization_by_code(DEMO_ORG_CODE)
    if org is None:
        org = storage.create_organization(DEMO_ORG_NAME, DEMO_ORG_CODE)
        created["organizations"] += 1

    for email, password, name, role in DEMO_USERS:
        if storage.get_user_by_email(email) is not None:
            continue
        user = storage.create_user(
            email=email,
            password_hash=hash_password(password, rounds=bcrypt_rounds),
            display_name=name,
            role=role,
            organization_id=None if role == "admin" else org.id,
        )
        created["users"] += 1
        if role == "individual":
            storage.add_employee(user.id, org.id, job_title="Software Engineer", department="Engineering")
            storage.create_mood_entry(user.id, 7, notes="Feeling good after morning meditation")
            storage.create_journal(
                user.id,
                "Today was a productive day. I managed to complete my tasks and even had "
                "time for a walk during lunch. Grateful for the support from my team.",
                mood_score=7,
                tags=["gratitude", "productivity", "team"],
            )

    if not storage.list_therapists():
        for therapist in DEMO_THERAPISTS:
            storage.create_therapist(**therapist)
            created["therapists"] += 1

    if not storage.list_courses():
        storage.create_course(**DEMO_COURSE)
        created["courses"] += 1

    if not any(a.title == COMPREHENSIVE_TITLE for a in storage.list_assessments()):
        storage.create_assessment(
            assessment_type="comprehensive",
            title=COMPREHENSIVE_TITLE,
            questions=COMPREHENSIVE_QUESTIONS,
            is_active=True,
        )
        created["assessments"] += 1

    if not storage.list_rants(limit=1):
        for text in DEMO_RANTS:
            storage.create_rant(text, score_content(text))
            created["rants"] += 1

    return created


def main() -> int:
    load_dotenv()
    settings = load_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    storage = create_storage(settings)
    try:
        created = seed(storage, settings.BCRYPT_ROUNDS)
    except Exception as e:
        logger.exception("Seeding failed: %s", e)
        return 1
    finally:
        storage.close()
    logger.info("Seed completed at %s: %s", datetime.now(UTC).isoformat(), created)
    return 0


if __name__ == "__main__":
    sys.exit(main())
